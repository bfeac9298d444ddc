import logging

import pytest

from sredd.runner import RunConfig


@pytest.fixture
def restore_root_logging():
    """Put the root logger's handlers back after a test reconfigures logging."""
    root_logger = logging.getLogger()
    original_handlers = list(root_logger.handlers)
    original_level = root_logger.level
    for handler in original_handlers:
        root_logger.removeHandler(handler)

    yield root_logger

    for handler in root_logger.handlers[:]:
        root_logger.removeHandler(handler)
        handler.close()
    for handler in original_handlers:
        root_logger.addHandler(handler)
    root_logger.setLevel(original_level)


@pytest.fixture
def make_run_config(tmp_path):
    def factory(*subreddits, **overrides):
        options = {
            "command": "open",
            "subreddits": subreddits or ("test",),
            "storage_dir": str(tmp_path),
            "command_args": ("-a", "Safari"),
            "filter_comments": False,
        }
        options.update(overrides)
        return RunConfig(**options)

    return factory
