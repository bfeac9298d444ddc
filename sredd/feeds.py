"""Subreddit fetching and URL filtering."""

from __future__ import annotations

import contextlib
import json
import logging
import re
import socket
import threading
import time
from typing import Iterable, List, Optional

import requests

from .errors import FetchError
from .models import USER_AGENT, Listing

logger = logging.getLogger(__name__)

FEED_URL_TEMPLATE = "https://www.reddit.com/r/{name}.json"
FETCH_TIMEOUT = 20.0
MAX_REDIRECTS = 3
CHUNK_SIZE = 8192

_URL_PREFIX = re.compile(r"^https?://")


def build_session() -> requests.Session:
    """Return an HTTP session that identifies itself and limits redirects."""
    session = requests.Session()
    # Session headers are sent again on every redirect hop.
    session.headers["User-Agent"] = USER_AGENT
    session.max_redirects = MAX_REDIRECTS
    return session


def fetch_subreddit_urls(
    name: str,
    filter_comments: bool,
    session: Optional[requests.Session] = None,
) -> List[str]:
    """Fetch the listing for subreddit ``name`` and return its item URLs.

    ``FETCH_TIMEOUT`` bounds the whole request, body included, not only
    the individual socket reads.
    """
    url = FEED_URL_TEMPLATE.format(name=name)
    logger.info("Fetching subreddit '%s' (%s)", name, url)

    owns_session = session is None
    if session is None:
        session = build_session()
    try:
        deadline = time.monotonic() + FETCH_TIMEOUT
        try:
            response = session.get(url, timeout=FETCH_TIMEOUT, stream=True)
        except requests.TooManyRedirects as exc:
            raise FetchError(f"{MAX_REDIRECTS + 1} consecutive redirects") from exc
        except requests.Timeout as exc:
            raise _timed_out() from exc
        except requests.RequestException as exc:
            raise FetchError(str(exc)) from exc

        try:
            if response.status_code != 200:
                raise FetchError(f"{response.status_code} {response.reason}".strip())
            body = _read_body(response, deadline)
        finally:
            response.close()
    finally:
        if owns_session:
            session.close()

    try:
        payload = json.loads(body)
    except ValueError as exc:
        raise FetchError(f"Malformed JSON response: {exc}") from exc

    listing = Listing.from_json(payload)
    urls = filter_item_urls(listing.urls, filter_comments)
    logger.info(
        "Kept %d of %d items from r/%s", len(urls), len(listing.children), name
    )
    return urls


def _timed_out() -> FetchError:
    return FetchError(f"Request timed out after {FETCH_TIMEOUT:g}s")


def _abort_connection(response: requests.Response) -> None:
    """Shut the response's socket down so a blocked body read returns."""
    connection = getattr(response.raw, "connection", None)
    sock = getattr(connection, "sock", None)
    if sock is None:
        return
    logger.debug("Fetch deadline passed; closing connection")
    with contextlib.suppress(OSError):
        sock.shutdown(socket.SHUT_RDWR)


def _read_body(response: requests.Response, deadline: float) -> bytes:
    """Read the streamed body, giving up once ``deadline`` has passed.

    A server trickling bytes keeps every single socket read under the read
    timeout, so a timer cuts the connection at the deadline instead.
    """
    remaining = deadline - time.monotonic()
    if remaining <= 0:
        raise _timed_out()

    watchdog = threading.Timer(remaining, _abort_connection, args=(response,))
    watchdog.daemon = True
    watchdog.start()
    chunks: List[bytes] = []
    try:
        for chunk in response.iter_content(chunk_size=CHUNK_SIZE):
            chunks.append(chunk)
    except (requests.RequestException, OSError) as exc:
        if time.monotonic() >= deadline:
            raise _timed_out() from exc
        raise FetchError(str(exc)) from exc
    finally:
        watchdog.cancel()

    if time.monotonic() > deadline:
        raise _timed_out()
    return b"".join(chunks)


def filter_item_urls(urls: Iterable[str], filter_comments: bool) -> List[str]:
    """Drop discussion threads and non-HTTP entries, unescape ampersands."""
    kept: List[str] = []
    for url in urls:
        if filter_comments and "/comments/" in url:
            logger.debug("Skipping discussion thread: %s", url)
            continue
        if not _URL_PREFIX.match(url):
            logger.debug("Skipping entry without http(s) scheme: %r", url)
            continue
        # Reddit escapes ampersands in listing URLs; some image hosts break
        # unless they are restored.
        kept.append(url.replace("&amp;", "&"))
    return kept
