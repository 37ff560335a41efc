"""
pagepress models.

This subpackage contains Pydantic models for pipeline configuration,
parsed content units and cached publications.

Key models:
    - PublisherConfig: Pipeline options loaded from environment
    - ParsedUnit: One (attributes, body) pair from a source file
    - Entry: Default record built by the CLI
    - Publication: Built entries plus the fingerprint of their sources
"""

from .config import PublisherConfig, load_env, DEFAULT_MARKDOWN_EXTENSIONS
from .unit import ParsedUnit
from .entry import Entry
from .publication import Publication

__all__ = [
    "PublisherConfig",
    "load_env",
    "DEFAULT_MARKDOWN_EXTENSIONS",
    "ParsedUnit",
    "Entry",
    "Publication",
]
