"""Error types raised while checking subreddits."""

from __future__ import annotations


class SreddError(RuntimeError):
    """Base class for errors that abort a run."""

    label = "Error"


class ConfigError(SreddError):
    label = "Config error"


class FetchError(SreddError):
    label = "Subreddit error"


class StoreError(SreddError):
    label = "New posts error"


class ActionError(SreddError):
    label = "Command error"
