"""
Pipeline error types.

Every error carries the path of the offending source file so the author
can fix it without re-running with extra diagnostics.
"""

from __future__ import annotations

from typing import Any

USAGE_HINT = """
Each entry must have a map with attributes, followed by --- and a body. For example:

    {
        "title": "Hello World"
    }
    ---
    Hello world!

or, with one `key: value` attribute per line:

    title: Hello World
    ---
    Hello world!
"""


class PublisherError(Exception):
	"""Base class for fatal pipeline errors."""

	def __init__(self, path: str, message: str):
		super().__init__(message)
		self.path = path


class MissingSeparator(PublisherError):
	"""Raised when no `---` delimiter line separates attributes from body."""

	def __init__(self, path: str):
		super().__init__(
		    path, f"could not find separator --- in {path!r}\n{USAGE_HINT}")


class InvalidAttributes(PublisherError):
	"""
	Raised when the attributes block does not decode to a mapping.

	Attributes:
		value: The raw decode error text or the offending value.
	"""

	def __init__(self, path: str, message: str, value: Any = None):
		super().__init__(path, message)
		self.value = value


class UnreadableSource(PublisherError):
	"""Raised when a source file cannot be decoded as UTF-8."""


class ConversionFailure(PublisherError):
	"""Raised when the Markdown engine or a custom converter fails."""


class HighlightFailure(PublisherError):
	"""
	Tokenizing failure for a registered language.

	Never raised out of the highlighter: the region is kept unhighlighted
	and the failure is logged.
	"""

	def __init__(self, language: str, message: str, path: str = ""):
		super().__init__(path, message)
		self.language = language


__all__ = [
    "PublisherError",
    "MissingSeparator",
    "UnreadableSource",
    "InvalidAttributes",
    "ConversionFailure",
    "HighlightFailure",
]
