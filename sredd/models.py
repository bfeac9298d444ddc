"""Shared data models for sredd."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, List

from .errors import FetchError

APP_NAME = "sredd"
APP_LONG_NAME = "s(ub)redd(it)"
APP_VERSION = "0.9.1"

# Reddit's API rules require a unique, descriptive User-Agent.
USER_AGENT = f"unix:{APP_NAME}:v{APP_VERSION} (by /u/ggustafsson)"


@dataclass
class ListingChild:
    """A single post in a subreddit listing, reduced to its URL."""

    url: str

    @classmethod
    def from_json(cls, payload: Any) -> "ListingChild":
        if not isinstance(payload, dict):
            raise FetchError("Unexpected listing child: expected an object")
        data = payload.get("data")
        if not isinstance(data, dict):
            raise FetchError("Unexpected listing child: missing 'data' object")
        url = data.get("url")
        if url is None:
            url = ""
        if not isinstance(url, str):
            raise FetchError("Unexpected listing child: 'url' is not a string")
        return cls(url=url)


@dataclass
class Listing:
    """Subreddit listing as returned by ``/r/<name>.json``."""

    children: List[ListingChild] = field(default_factory=list)

    @classmethod
    def from_json(cls, payload: Any) -> "Listing":
        if not isinstance(payload, dict):
            raise FetchError("Unexpected response: expected a JSON object")
        data = payload.get("data")
        if not isinstance(data, dict):
            raise FetchError("Unexpected response: missing 'data' object")
        children = data.get("children", [])
        if not isinstance(children, list):
            raise FetchError("Unexpected response: 'children' is not a list")
        return cls(children=[ListingChild.from_json(child) for child in children])

    @property
    def urls(self) -> List[str]:
        return [child.url for child in self.children]


@dataclass
class FeedOutcome:
    """New URLs discovered for one subreddit during a run."""

    subreddit: str
    new_urls: List[str]
