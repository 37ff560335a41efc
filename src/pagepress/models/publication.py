"""
Publication model.

Holds the built entries for a glob pattern together with the
fingerprint of the sources they were built from, so callers can cache
the entries and detect when the set of sources changes.
"""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any

from pydantic import BaseModel, Field

from pagepress.loaders.files import discover, fingerprint


class Publication(BaseModel):
	"""
	Built entries for one source pattern.

	Attributes:
		pattern: Glob pattern the sources were discovered with.
		paths: Sorted source paths.
		fingerprint: Digest of ``paths``.
		entries: Records returned by the builder, in path order.
	"""

	pattern: str = Field(description="Source glob pattern")
	paths: list[str] = Field(default_factory=list)
	fingerprint: str = Field(description="Digest of the sorted paths")
	entries: list[Any] = Field(default_factory=list)

	def current_fingerprint(self) -> str:
		"""Fingerprint of the files the pattern matches right now."""
		return fingerprint(discover(self.pattern))

	def is_stale(self) -> bool:
		"""Return True when files were added to or removed from the pattern."""
		return self.current_fingerprint() != self.fingerprint

	def save_fingerprint(self, path: Path | str) -> None:
		"""
		Persist the pattern and fingerprint as JSON.

		Parameters:
			path: Destination file; parent directories are created.
		"""
		Path(path).parent.mkdir(parents=True, exist_ok=True)
		Path(path).write_text(
		    json.dumps(
		        {
		            "pattern": self.pattern,
		            "fingerprint": self.fingerprint,
		            "paths": self.paths,
		        },
		        indent=2,
		    ),
		    encoding="utf-8",
		)


__all__ = ["Publication"]
