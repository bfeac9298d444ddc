"""Invocation of the user's command for new posts."""

from __future__ import annotations

import logging
import subprocess
import sys
from typing import List, Sequence

from .errors import ActionError

logger = logging.getLogger(__name__)


def build_command(
    command: str, command_args: Sequence[str], urls: Sequence[str]
) -> List[str]:
    """Return argv for ``command``, e.g. ``open -a Safari <URL1> <URL2>``."""
    return [command, *command_args, *urls]


def invoke_command(
    command: str, command_args: Sequence[str], urls: Sequence[str]
) -> None:
    """Print ``urls`` and run the configured command with them appended."""
    for url in urls:
        print(f"URL: {url}")
    sys.stdout.flush()

    argv = build_command(command, command_args, urls)
    logger.debug("Running command: %s", argv)
    try:
        subprocess.run(argv, check=True)
    except subprocess.CalledProcessError as exc:
        raise ActionError(f"'{command}' exited with status {exc.returncode}") from exc
    except OSError as exc:
        raise ActionError(f"Failed to run '{command}': {exc}") from exc
