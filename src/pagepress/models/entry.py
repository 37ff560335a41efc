"""
Default entry record.

The pipeline treats records as opaque; ``Entry`` is the record the CLI
builds when no application-specific builder is supplied.
"""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, Field


class Entry(BaseModel):
	"""One published unit: its source path, attributes and HTML body."""

	path: str = Field(description="Source file path")
	attributes: dict[Any, Any] = Field(default_factory=dict)
	body: str = Field(default="", description="Rendered body")

	@classmethod
	def build(cls, path: str, attributes: dict[Any, Any],
	          body: str) -> "Entry":
		"""Builder entry point, usable directly as the pipeline builder."""
		return cls(path=path, attributes=attributes, body=body)

	def to_dict(self) -> dict[str, Any]:
		"""
		Convert to a JSON-friendly dictionary.

		Attribute keys are stringified since literal attributes may use
		non-string keys.
		"""
		return {
		    "path": self.path,
		    "attributes": {str(k): v for k, v in self.attributes.items()},
		    "body": self.body,
		}


__all__ = ["Entry"]
