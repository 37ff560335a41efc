"""
Content unit model.

A unit is one logical (attributes, body) record parsed from a source
file. Most files yield one unit; custom parsers may yield several.
"""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, ConfigDict, Field


class ParsedUnit(BaseModel):
	"""
	One parsed (attributes, body) pair.

	Attributes:
		attributes: Decoded front-matter mapping, or the custom parser's
			object as returned.
		body: Body text; raw after parsing, HTML after conversion.
	"""

	model_config = ConfigDict(frozen=True)

	attributes: dict[Any, Any] = Field(default_factory=dict)
	body: str = Field(default="")


__all__ = ["ParsedUnit"]
