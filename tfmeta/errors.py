"""Error taxonomy for the documentation scraper."""

from __future__ import annotations


class ScrapeError(RuntimeError):
    """Base class for failures raised while scraping provider documentation."""

    def wrap(self, context: str) -> "ScrapeError":
        """Return a copy of this error whose message is prefixed with ``context``.

        The error type and any structured fields are preserved so callers can
        still dispatch on the original failure after it crossed a component
        boundary.
        """
        wrapped = self.__class__.__new__(self.__class__)
        wrapped.__dict__.update(self.__dict__)
        wrapped.args = (f"{context}: {self}",)
        wrapped.__cause__ = self
        return wrapped


class ScrapeIOError(ScrapeError):
    """Raised when a documentation page or the output artifact cannot be accessed."""


class MalformedPreludeError(ScrapeError):
    """Raised when the page prelude lacks a title or a subcategory."""

    def __init__(self, message: str, raw: str = "") -> None:
        super().__init__(message)
        self.raw = raw


class ConfigParseError(ScrapeError):
    """Raised when an example snippet is not valid HCL."""

    def __init__(self, message: str, snippet: str = "") -> None:
        super().__init__(message)
        self.snippet = snippet


class ConflictingReferenceError(ScrapeError):
    """Raised when one attribute of an example block refers to two different targets."""

    def __init__(self, attribute: str, resource: str, old: str, new: str) -> None:
        super().__init__(
            f"attribute {resource}.{attribute} refers to {old}. New reference: {new}"
        )
        self.attribute = attribute
        self.resource = resource
        self.old = old
        self.new = new


class ConversionError(ScrapeError):
    """Raised when a configuration block cannot be rendered as a JSON manifest."""


class DuplicateResourceError(ScrapeError):
    """Raised when two pages resolve to the same resource and collisions are fatal."""


class ConfigError(ScrapeError):
    """Raised when the scraper configuration file cannot be parsed."""


__all__ = [
    "ConfigError",
    "ConfigParseError",
    "ConflictingReferenceError",
    "ConversionError",
    "DuplicateResourceError",
    "MalformedPreludeError",
    "ScrapeError",
    "ScrapeIOError",
]
