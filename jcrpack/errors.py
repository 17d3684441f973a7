"""Exception hierarchy for the packager."""

from __future__ import annotations


class JcrPackError(Exception):
    """Base class for every error raised by jcrpack."""


class ConfigurationError(JcrPackError):
    """The site name (or another configuration value) cannot be used."""


class MarkupError(JcrPackError):
    """Page markup could not be parsed into a document."""


class RetrievalError(JcrPackError):
    """An asset could not be fetched (transport error or non-2xx status)."""

    def __init__(self, url: str, reason: str) -> None:
        super().__init__(f"Failed to fetch {url}: {reason}")
        self.url = url
        self.reason = reason
