"""
pagepress - a filesystem-based publishing pipeline.

Parses source files into attributes and body, renders Markdown bodies
to HTML and highlights fenced code blocks with Pygments.

Main entry points:
    - pagepress.main: CLI entrypoint
    - pagepress.core.pipeline: publish() for batch publishing
    - pagepress.core.highlighter: highlight() for rendered HTML
    - pagepress.models.config: PublisherConfig and load_env()
"""

from pagepress.core import (
    build_publication,
    convert_body,
    highlight,
    parse_contents,
    publish,
    publish_async,
)
from pagepress.errors import (
    ConversionFailure,
    HighlightFailure,
    InvalidAttributes,
    MissingSeparator,
    PublisherError,
    UnreadableSource,
)
from pagepress.loaders import YamlFrontMatterParser, discover
from pagepress.models import Entry, PublisherConfig, Publication

__all__ = [
    "build_publication",
    "convert_body",
    "highlight",
    "parse_contents",
    "publish",
    "publish_async",
    "ConversionFailure",
    "HighlightFailure",
    "InvalidAttributes",
    "MissingSeparator",
    "PublisherError",
    "UnreadableSource",
    "YamlFrontMatterParser",
    "discover",
    "Entry",
    "PublisherConfig",
    "Publication",
]
