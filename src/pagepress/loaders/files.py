"""
Source file discovery.

Expands glob patterns (with ``**`` and ``{a,b}`` alternation) into a
sorted, deduplicated list of file paths, and fingerprints such lists so
callers can tell when the set of sources changed.
"""

from __future__ import annotations

import glob
import hashlib
import re
from pathlib import Path
from typing import Iterable

from pagepress.errors import UnreadableSource

BRACE_RE = re.compile(r"\{([^{}]*)\}")


def expand_braces(pattern: str) -> list[str]:
	"""
	Expand ``{a,b}`` alternations in a glob pattern.

	Nested and repeated groups expand left to right.

	Parameters:
		pattern: Glob pattern possibly containing brace groups.

	Returns:
		List of patterns without brace groups.
	"""
	m = BRACE_RE.search(pattern)
	if not m:
		return [pattern]
	head, tail = pattern[:m.start()], pattern[m.end():]
	expanded: list[str] = []
	for option in m.group(1).split(","):
		expanded.extend(expand_braces(head + option + tail))
	return expanded


def discover(pattern: str) -> list[str]:
	"""
	Return files matching a glob pattern, sorted and deduplicated.

	Directories are skipped.

	Parameters:
		pattern: Glob pattern such as ``posts/**/*.{md,markdown}``.

	Returns:
		Sorted list of matching file paths.
	"""
	found: set[str] = set()
	for expanded in expand_braces(pattern):
		for match in glob.glob(expanded, recursive=True):
			if Path(match).is_file():
				found.add(match)
	return sorted(found)


def read_source(path: str | Path) -> str:
	"""
	Read a source file as UTF-8 text, keeping its line endings.

	Raises:
		UnreadableSource: If the file is not valid UTF-8.
	"""
	try:
		with open(path, encoding="utf-8", newline="") as fh:
			return fh.read()
	except UnicodeDecodeError as e:
		raise UnreadableSource(
		    str(path), f"could not decode {str(path)!r} as UTF-8: {e}") from e


def fingerprint(paths: Iterable[str]) -> str:
	"""
	Return a stable digest of a set of paths.

	Parameters:
		paths: Source paths in any order.

	Returns:
		MD5 hex digest of the sorted paths joined by NUL bytes.
	"""
	joined = "\0".join(sorted(set(paths)))
	return hashlib.md5(joined.encode("utf-8")).hexdigest()


__all__ = ["discover", "expand_braces", "read_source", "fingerprint"]
