"""Core pipeline logic.

This subpackage contains parsing, conversion, highlighting and the
driver that runs them over a set of source files.

Key modules:
    - parser: Default and custom content parsing
    - converter: Extension-based and custom body conversion
    - highlighter: Regex-driven code block highlighting
    - pipeline: Concurrent driver via publish()/publish_async()
    - cache: Fingerprinted publications and staleness checks
"""

from pagepress.core.parser import parse_contents, normalize_units
from pagepress.core.converter import convert_body, is_markdown
from pagepress.core.highlighter import (
    DEFAULT_CODE_BLOCK_RE,
    Highlighter,
    HighlighterRegistry,
    highlight,
    render_style_css,
)
from pagepress.core.pipeline import publish, publish_async, build_file
from pagepress.core.cache import (
    build_publication,
    build_publication_async,
    load_fingerprint,
    needs_rebuild,
)

__all__ = [
    # parser
    "parse_contents",
    "normalize_units",
    # converter
    "convert_body",
    "is_markdown",
    # highlighter
    "DEFAULT_CODE_BLOCK_RE",
    "Highlighter",
    "HighlighterRegistry",
    "highlight",
    "render_style_css",
    # pipeline
    "publish",
    "publish_async",
    "build_file",
    # cache
    "build_publication",
    "build_publication_async",
    "load_fingerprint",
    "needs_rebuild",
]
