"""
Main orchestrator for publishing a set of source files.

Each file is read, parsed, converted, highlighted and built in its own
worker thread; results are gathered back in path order.
"""

from __future__ import annotations

import asyncio
from pathlib import Path
from typing import Any, Iterable

from pagepress.core.converter import convert_body, is_markdown
from pagepress.core.highlighter import Highlighter, HighlighterRegistry
from pagepress.core.parser import parse_contents
from pagepress.loaders.files import read_source
from pagepress.models.config import PublisherConfig
from pagepress.utils.logging import get_logger
from pagepress.utils.protocols import (
    Builder,
    BodyConverter,
    ContentParser,
    as_callable,
)

logger = get_logger(__name__)


def build_file(
    path: str,
    builder: Builder | Any,
    config: PublisherConfig,
    highlighter: Highlighter | None = None,
    parser: ContentParser | Any = None,
    converter: BodyConverter | Any = None,
) -> list[Any]:
	"""
	Run one file through parse, convert, highlight and build.

	Highlighting applies to bodies that were rendered to HTML, i.e.
	Markdown files or any file handled by a custom converter.

	Parameters:
		path: Source path.
		builder: Record builder (``build`` or callable).
		config: Pipeline configuration.
		highlighter: Prepared highlighter, or None to skip highlighting.
		parser: Optional custom parser.
		converter: Optional custom converter.

	Returns:
		Built records for the file, in parser order.
	"""
	build = as_callable(builder, "build")
	contents = read_source(path)
	units = parse_contents(path, contents, parser)
	logger.debug("parsed %s into %d unit(s)", path, len(units))
	renders_html = converter is not None or is_markdown(path)
	records: list[Any] = []
	for unit in units:
		body = convert_body(path, unit.body, unit.attributes, config,
		                    converter)
		if highlighter is not None and renders_html:
			body = highlighter.highlight(body, path=path)
		records.append(build(path, unit.attributes, body))
	return records


def make_highlighter(config: PublisherConfig) -> Highlighter | None:
	"""Return a highlighter for the configured languages, if any."""
	if not config.highlighting_enabled:
		return None
	registry = HighlighterRegistry(config.highlighters)
	return Highlighter(registry, config.highlight_regex)


async def publish_async(
    paths: Iterable[str | Path],
    builder: Builder | Any,
    config: PublisherConfig | None = None,
    *,
    parser: ContentParser | Any = None,
    converter: BodyConverter | Any = None,
) -> list[Any]:
	"""
	Publish all files concurrently and return their records in path order.

	Files run in worker threads bounded by ``config.max_workers``. The
	first failure aborts the run: the exception propagates and no
	partial result is returned. The builder is called from worker
	threads.

	Parameters:
		paths: Source paths; sorted and deduplicated before processing.
		builder: Record builder (``build`` or callable).
		config: Pipeline configuration; defaults from the environment.
		parser: Optional custom parser.
		converter: Optional custom converter.

	Returns:
		Flat list of records, ordered by path then by parser order.
	"""
	config = config or PublisherConfig()
	ordered = sorted({str(p) for p in paths})
	highlighter = make_highlighter(config)
	logger.info(
	    "publish start files=%d workers=%d highlighters=%s",
	    len(ordered),
	    config.max_workers,
	    ",".join(config.highlighters) or "-",
	)

	sem = asyncio.Semaphore(config.max_workers)

	async def run_one(path: str) -> list[Any]:
		async with sem:
			return await asyncio.to_thread(
			    build_file,
			    path,
			    builder,
			    config,
			    highlighter,
			    parser,
			    converter,
			)

	results = await asyncio.gather(*(run_one(p) for p in ordered))
	entries = [record for records in results for record in records]
	logger.info("publish done files=%d entries=%d", len(ordered),
	            len(entries))
	return entries


def publish(
    paths: Iterable[str | Path],
    builder: Builder | Any,
    config: PublisherConfig | None = None,
    *,
    parser: ContentParser | Any = None,
    converter: BodyConverter | Any = None,
) -> list[Any]:
	"""
	Synchronous wrapper around :func:`publish_async`.

	Must not be called from a running event loop.
	"""
	return asyncio.run(
	    publish_async(
	        paths,
	        builder,
	        config,
	        parser=parser,
	        converter=converter,
	    ))


__all__ = ["publish", "publish_async", "build_file", "make_highlighter"]
