"""High-level orchestration for the sredd application."""

from __future__ import annotations

import logging
import time
from dataclasses import dataclass, field
from typing import Callable, List, Tuple

from .actions import invoke_command
from .feeds import fetch_subreddit_urls
from .models import FeedOutcome
from .state import reconcile

logger = logging.getLogger(__name__)

PAUSE_FALLBACK_SECONDS = 10


@dataclass(frozen=True)
class RunConfig:
    """Runtime options for executing the application."""

    command: str
    subreddits: Tuple[str, ...]
    storage_dir: str
    command_args: Tuple[str, ...] = ()
    filter_comments: bool = False


@dataclass
class RunResult:
    """Returned data after executing the app."""

    outcomes: List[FeedOutcome] = field(default_factory=list)

    @property
    def new_url_count(self) -> int:
        return sum(len(outcome.new_urls) for outcome in self.outcomes)


def wait_for_acknowledgement(
    read_line: Callable[[], str], sleep: Callable[[float], None]
) -> None:
    """Block until the user presses Return; sleep instead if stdin is unusable."""
    print("Press 'Return' key when ready to continue...", end="", flush=True)
    try:
        read_line()
    except (EOFError, OSError, RuntimeError, ValueError) as exc:
        # RuntimeError: stdin was closed (sys.stdin is None); ValueError: read
        # from a closed file.
        print()
        logger.debug("Reading acknowledgement failed: %s", exc)
        print(f"Reading input failed! Sleeping {PAUSE_FALLBACK_SECONDS} seconds.")
        sleep(PAUSE_FALLBACK_SECONDS)


def execute(
    config: RunConfig,
    read_line: Callable[[], str] = input,
    sleep: Callable[[float], None] = time.sleep,
) -> RunResult:
    """Check each configured subreddit in order and act on new posts.

    Errors from fetching, the state store or the command propagate and end
    the run; remaining subreddits are not checked.
    """
    result = RunResult()
    last_index = len(config.subreddits) - 1

    for index, name in enumerate(config.subreddits):
        print(f"Checking r/{name} for new posts...")
        urls = fetch_subreddit_urls(name, config.filter_comments)
        new_urls = reconcile(config.storage_dir, name, urls)
        result.outcomes.append(FeedOutcome(subreddit=name, new_urls=new_urls))

        if new_urls:
            invoke_command(config.command, config.command_args, new_urls)
        else:
            print("No new posts found!")

        if index == last_index:
            break

        wait_for_acknowledgement(read_line, sleep)
        print()

    logger.info(
        "Checked %d subreddits, %d new URLs",
        len(result.outcomes),
        result.new_url_count,
    )
    return result
