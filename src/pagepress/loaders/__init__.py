"""File and content loading utilities.

This subpackage handles discovering source files and splitting their
contents into attributes and body.

Key modules:
    - files: Glob discovery, reading and fingerprinting of sources
    - frontmatter: Front-matter splitting and attribute decoding
"""

from .files import discover, expand_braces, read_source, fingerprint
from .frontmatter import (
    split_contents,
    decode_attributes,
    split_yaml_front_matter,
    YamlFrontMatterParser,
)

__all__ = [
    "discover",
    "expand_braces",
    "read_source",
    "fingerprint",
    "split_contents",
    "decode_attributes",
    "split_yaml_front_matter",
    "YamlFrontMatterParser",
]
