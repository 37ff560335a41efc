"""
Front-matter splitting and attribute decoding.

The default on-disk layout is an attributes block, a ``---`` line and
the body::

    title: Hello World
    ---
    Hello world!

The attributes block is either a Python literal mapping (when it starts
with ``{``) or one ``key: value`` pair per line. A YAML front-matter
parser for Jekyll-style files is also provided for use as a custom
parser.
"""

from __future__ import annotations

import ast
import re
from typing import Any

import yaml

from pagepress.errors import InvalidAttributes, MissingSeparator

SEPARATOR_RE = re.compile(r"\n---\n|\r\n---\r\n")


def split_contents(path: str, contents: str) -> tuple[str, str]:
	"""
	Split raw contents on the first ``---`` delimiter line.

	The delimiter must sit on its own line, so it has to be preceded and
	followed by a newline. Everything after it is the body, verbatim.

	Parameters:
		path: Source path, used for error reporting.
		contents: Full file contents.

	Returns:
		Tuple of (attributes text, body text).

	Raises:
		MissingSeparator: If no delimiter line exists.
	"""
	m = SEPARATOR_RE.search(contents)
	if not m:
		raise MissingSeparator(path)
	return contents[:m.start()], contents[m.end():]


def _decode_literal(path: str, text: str) -> dict[Any, Any]:
	try:
		value = ast.literal_eval(text.strip())
	except (ValueError, TypeError, SyntaxError, MemoryError,
	        RecursionError) as e:
		raise InvalidAttributes(
		    path,
		    f"could not evaluate attributes for {path!r}: {e}",
		    value=str(e),
		) from e
	if not isinstance(value, dict):
		raise InvalidAttributes(
		    path,
		    f"expected attributes for {path!r} to return a map, "
		    f"got: {value!r}",
		    value=value,
		)
	return value


def _decode_lines(path: str, text: str) -> dict[str, str]:
	attrs: dict[str, str] = {}
	for line in text.splitlines():
		if not line.strip():
			continue
		key, sep, value = line.partition(":")
		key = key.strip()
		if not sep or not key:
			raise InvalidAttributes(
			    path,
			    f"expected `key: value` attributes in {path!r}, "
			    f"got line: {line!r}",
			    value=line,
			)
		attrs[key] = value.strip()
	return attrs


def decode_attributes(path: str, text: str) -> dict[Any, Any]:
	"""
	Decode an attributes block into a mapping.

	Blocks starting with ``{`` are evaluated as Python literals and must
	produce a dict. Other blocks are read as ``key: value`` lines, split
	on the first colon with both sides stripped.

	Parameters:
		path: Source path, used for error reporting.
		text: The attributes block.

	Returns:
		The decoded mapping.

	Raises:
		InvalidAttributes: If the block cannot be decoded to a mapping.
	"""
	if text.lstrip().startswith("{"):
		return _decode_literal(path, text)
	return _decode_lines(path, text)


def split_yaml_front_matter(text: str) -> tuple[str, str] | None:
	"""
	Split a YAML block fenced by ``---`` lines from the body.

	Parameters:
		text: The full file content.

	Returns:
		Tuple of (YAML text, body text), or None if the file does not
		open with a fenced block.
	"""
	lines = text.splitlines(keepends=True)

	# Need at least 2 lines: ---, ---
	if len(lines) < 2 or lines[0].strip() != "---":
		return None

	for i, ln in enumerate(lines[1:], start=1):
		if ln.strip() == "---":
			fm_text = "".join(lines[1:i]).rstrip("\r\n")
			return fm_text, "".join(lines[i + 1:]).lstrip("\r\n")
	return None


class YamlFrontMatterParser:
	"""
	Custom parser for files whose YAML front matter is fenced by ``---``.

	Usable anywhere a content parser is accepted::

	    publish(paths, builder, parser=YamlFrontMatterParser())
	"""

	def parse(self, path: str, contents: str) -> tuple[dict[Any, Any], str]:
		split = split_yaml_front_matter(contents)
		if split is None:
			raise MissingSeparator(path)
		fm_text, body = split
		try:
			meta = yaml.safe_load(fm_text)
		except yaml.YAMLError as e:
			raise InvalidAttributes(
			    path,
			    f"could not parse YAML attributes for {path!r}: {e}",
			    value=str(e),
			) from e
		if meta is None:
			meta = {}
		if not isinstance(meta, dict):
			raise InvalidAttributes(
			    path,
			    f"expected attributes for {path!r} to return a map, "
			    f"got: {meta!r}",
			    value=meta,
			)
		return meta, body


__all__ = [
    "split_contents",
    "decode_attributes",
    "split_yaml_front_matter",
    "YamlFrontMatterParser",
    "SEPARATOR_RE",
]
