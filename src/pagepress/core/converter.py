"""
Body conversion.

Markdown bodies render through Python-Markdown; other extensions pass
through unchanged. A custom converter replaces the dispatch entirely.
"""

from __future__ import annotations

from pathlib import Path
from typing import Any

import markdown

from pagepress.errors import ConversionFailure
from pagepress.models.config import PublisherConfig
from pagepress.utils.logging import get_logger
from pagepress.utils.protocols import BodyConverter, as_callable

logger = get_logger(__name__)

MARKDOWN_EXTENSIONS = frozenset({".md", ".markdown", ".livemd"})


def is_markdown(path: str) -> bool:
	"""Return True when the path's extension renders as Markdown."""
	return Path(path).suffix.lower() in MARKDOWN_EXTENSIONS


def render_markdown(path: str, body: str, options: PublisherConfig) -> str:
	"""
	Render a Markdown body to HTML.

	A fresh ``markdown.Markdown`` instance is used per call, since
	instances keep per-document state.

	Parameters:
		path: Source path, used for error reporting.
		body: Markdown text.
		options: Pipeline configuration holding the Markdown options.

	Returns:
		Rendered HTML.

	Raises:
		ConversionFailure: If Python-Markdown fails.
	"""
	try:
		md = markdown.Markdown(**options.markdown_options())
		return md.convert(body)
	except Exception as e:
		raise ConversionFailure(
		    path, f"could not convert {path!r} from Markdown: {e}") from e


def convert_body(path: str, body: str, attributes: dict[Any, Any],
                 options: PublisherConfig,
                 converter: BodyConverter | Any = None) -> str:
	"""
	Convert a body according to its extension or a custom converter.

	Parameters:
		path: Source path; its lower-cased extension selects the dispatch.
		body: Body text.
		attributes: Decoded attributes, passed to custom converters.
		options: Pipeline configuration.
		converter: Optional custom converter (``convert`` or callable).

	Returns:
		HTML for Markdown or custom conversion, else the body unchanged.

	Raises:
		ConversionFailure: If the Markdown engine or converter fails.
	"""
	if converter is not None:
		convert = as_callable(converter, "convert")
		try:
			return convert(path, body, attributes, options)
		except ConversionFailure:
			raise
		except Exception as e:
			raise ConversionFailure(
			    path, f"custom converter failed for {path!r}: {e}") from e
	if is_markdown(path):
		return render_markdown(path, body, options)
	logger.debug("passing %s through unconverted", path)
	return body


__all__ = [
    "convert_body",
    "render_markdown",
    "is_markdown",
    "MARKDOWN_EXTENSIONS",
]
