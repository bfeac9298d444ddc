"""Per-subreddit state files and new item detection."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Iterable, List, Sequence, Union

from .errors import StoreError

logger = logging.getLogger(__name__)

PathLike = Union[str, Path]


def state_path(storage_dir: PathLike, name: str) -> Path:
    """Return the state file used for subreddit ``name``."""
    return Path(storage_dir) / f"r_{name}.log"


def read_state(path: PathLike) -> List[str]:
    """Read URLs recorded by the previous run; a missing file means none."""
    location = Path(path)
    if not location.exists():
        logger.debug("No state file at %s", location)
        return []

    urls: List[str] = []
    try:
        with location.open("r", encoding="utf-8", newline="") as handle:
            for line in handle:
                if line.endswith("\n"):
                    line = line[:-1]
                if line.endswith("\r"):
                    line = line[:-1]
                urls.append(line)
    except (OSError, UnicodeDecodeError) as exc:
        raise StoreError(f"Failed to read {location}: {exc}") from exc

    logger.debug("Read %d URLs from %s", len(urls), location)
    return urls


def write_state(path: PathLike, urls: Iterable[str]) -> None:
    """Overwrite the state file with ``urls``, one per line."""
    location = Path(path)
    content = "".join(f"{url}\n" for url in urls)
    try:
        if location.parent and not location.parent.exists():
            location.parent.mkdir(parents=True, exist_ok=True)
        with location.open("w", encoding="utf-8", newline="") as handle:
            handle.write(content)
    except OSError as exc:
        raise StoreError(f"Failed to write {location}: {exc}") from exc


def diff_new_urls(current: Sequence[str], previous: Iterable[str]) -> List[str]:
    """Return URLs of ``current`` absent from ``previous``, in order.

    Repeated URLs in ``current`` are not collapsed: a new URL listed twice
    is reported twice.
    """
    seen = set(previous)
    return [url for url in current if url not in seen]


def reconcile(storage_dir: PathLike, name: str, urls: Sequence[str]) -> List[str]:
    """Record ``urls`` as the latest state and return the ones that are new.

    The previous state is read completely before the file is overwritten,
    since both live at the same path.
    """
    location = state_path(storage_dir, name)
    previous = read_state(location)
    write_state(location, urls)
    new_urls = diff_new_urls(urls, previous)
    logger.info(
        "r/%s: %d new of %d URLs (previous run recorded %d)",
        name,
        len(new_urls),
        len(urls),
        len(previous),
    )
    return new_urls
