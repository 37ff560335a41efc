"""
Protocol definitions for the pluggable pipeline collaborators.

Builders, parsers and converters can be supplied either as objects
implementing the single method below or as plain callables with the
same signature. ``as_callable`` normalizes both forms.
"""

from __future__ import annotations

from typing import Any, Callable, Protocol

Attributes = dict[Any, Any]


class Builder(Protocol):
	"""Turns one rendered unit into the caller's record type."""

	def build(self, path: str, attributes: Attributes, body: str) -> Any:
		"""Build a record from a path, its attributes and its HTML body."""
		...


class ContentParser(Protocol):
	"""Replaces the default front-matter parsing for a file."""

	def parse(self, path: str, contents: str) -> Any:
		"""Return an (attributes, body) pair or a sequence of pairs."""
		...


class BodyConverter(Protocol):
	"""Replaces extension-based body conversion."""

	def convert(self, path: str, body: str, attributes: Attributes,
	            options: Any) -> str:
		"""Return the HTML for a body."""
		...


def as_callable(collaborator: Any, method: str) -> Callable[..., Any]:
	"""
	Return a callable for a collaborator given as object or function.

	Parameters:
		collaborator: Object exposing ``method`` or a plain callable.
		method: Name of the protocol method.

	Returns:
		The bound method when present, else the collaborator itself.

	Raises:
		TypeError: If the collaborator is neither.
	"""
	bound = getattr(collaborator, method, None)
	if callable(bound):
		return bound
	if callable(collaborator):
		return collaborator
	raise TypeError(
	    f"{collaborator!r} must be callable or define a {method}() method")


__all__ = [
    "Attributes",
    "Builder",
    "ContentParser",
    "BodyConverter",
    "as_callable",
]
