"""
Publication caching.

Builds a Publication for a glob pattern and answers whether a stored
fingerprint is out of date, without re-running the pipeline.
"""

from __future__ import annotations

import asyncio
import json
from pathlib import Path
from typing import Any

from pagepress.core.pipeline import publish_async
from pagepress.loaders.files import discover, fingerprint
from pagepress.models.config import PublisherConfig
from pagepress.models.publication import Publication
from pagepress.utils.logging import get_logger

logger = get_logger(__name__)


async def build_publication_async(
    pattern: str,
    builder: Any,
    config: PublisherConfig | None = None,
    *,
    parser: Any = None,
    converter: Any = None,
) -> Publication:
	"""
	Discover sources for a pattern, publish them and fingerprint the set.

	Parameters:
		pattern: Glob pattern for the sources.
		builder: Record builder.
		config: Pipeline configuration.
		parser: Optional custom parser.
		converter: Optional custom converter.

	Returns:
		Publication with entries in path order.
	"""
	paths = discover(pattern)
	entries = await publish_async(
	    paths,
	    builder,
	    config,
	    parser=parser,
	    converter=converter,
	)
	return Publication(
	    pattern=pattern,
	    paths=paths,
	    fingerprint=fingerprint(paths),
	    entries=entries,
	)


def build_publication(pattern: str, builder: Any,
                      config: PublisherConfig | None = None,
                      **kwargs: Any) -> Publication:
	"""Synchronous wrapper around :func:`build_publication_async`."""
	return asyncio.run(
	    build_publication_async(pattern, builder, config, **kwargs))


def load_fingerprint(path: Path | str) -> str | None:
	"""
	Read a fingerprint saved by ``Publication.save_fingerprint``.

	Returns:
		The stored fingerprint, or None if the file does not exist or
		is unreadable.
	"""
	p = Path(path)
	if not p.exists():
		return None
	try:
		data = json.loads(p.read_text(encoding="utf-8"))
	except (OSError, json.JSONDecodeError):
		logger.warning("ignoring unreadable fingerprint file %s", p)
		return None
	value = data.get("fingerprint") if isinstance(data, dict) else None
	return value if isinstance(value, str) else None


def needs_rebuild(pattern: str, stored_fingerprint: str | None) -> bool:
	"""
	Return True when the pattern's sources differ from a stored fingerprint.

	A missing fingerprint always needs a rebuild.
	"""
	if stored_fingerprint is None:
		return True
	return fingerprint(discover(pattern)) != stored_fingerprint


__all__ = [
    "build_publication",
    "build_publication_async",
    "load_fingerprint",
    "needs_rebuild",
]
