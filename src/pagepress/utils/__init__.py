"""Shared utility functions.

This subpackage provides common utilities used across the pipeline
with no dependencies on other subpackages.

Key modules:
    - logging: Logging configuration
    - protocols: Protocol definitions for pluggable collaborators
"""

from .logging import configure_logging, get_logger
from .protocols import (
    Attributes,
    Builder,
    ContentParser,
    BodyConverter,
    as_callable,
)

__all__ = [
    # logging
    "configure_logging",
    "get_logger",
    # protocols
    "Attributes",
    "Builder",
    "ContentParser",
    "BodyConverter",
    "as_callable",
]
