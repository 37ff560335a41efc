"""
Content parsing.

Turns raw file contents into one or more parsed units, either through
the default front-matter layout or through a caller-supplied parser.
"""

from __future__ import annotations

from typing import Any

from pagepress.errors import InvalidAttributes
from pagepress.loaders.frontmatter import decode_attributes, split_contents
from pagepress.models.unit import ParsedUnit
from pagepress.utils.protocols import ContentParser, as_callable


def _is_pair(value: Any) -> bool:
	return isinstance(value, tuple) and len(value) == 2


def normalize_units(path: str, result: Any) -> list[ParsedUnit]:
	"""
	Normalize a custom parser result to a list of units.

	Accepts a single (attributes, body) pair or a list/tuple of pairs.
	Only the shape is checked; attributes and bodies are carried through
	as returned, without validation or coercion.

	Parameters:
		path: Source path, used for error reporting.
		result: Value returned by the custom parser.

	Returns:
		List of ParsedUnit in the parser's order.

	Raises:
		InvalidAttributes: If the result has neither shape.
	"""
	if _is_pair(result) and not all(_is_pair(item) for item in result):
		pairs = [result]
	elif isinstance(result, (list, tuple)) and all(
	    _is_pair(item) for item in result):
		pairs = list(result)
	else:
		raise InvalidAttributes(
		    path,
		    f"expected parser for {path!r} to return an (attributes, body) "
		    f"pair or a list of pairs, got: {result!r}",
		    value=result,
		)
	return [
	    ParsedUnit.model_construct(attributes=attrs, body=body)
	    for attrs, body in pairs
	]


def parse_contents(path: str, contents: str,
                   parser: ContentParser | Any = None) -> list[ParsedUnit]:
	"""
	Parse a file's contents into units.

	Parameters:
		path: Source path.
		contents: Raw file contents.
		parser: Optional custom parser (object with ``parse`` or callable).

	Returns:
		List of ParsedUnit; a single element for the default layout.

	Raises:
		MissingSeparator: If the default layout has no delimiter line.
		InvalidAttributes: If attributes do not decode to a mapping.
	"""
	if parser is not None:
		result = as_callable(parser, "parse")(path, contents)
		return normalize_units(path, result)
	attrs_text, body = split_contents(path, contents)
	attrs = decode_attributes(path, attrs_text)
	return [ParsedUnit(attributes=attrs, body=body)]


__all__ = ["parse_contents", "normalize_units"]
