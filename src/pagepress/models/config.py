from __future__ import annotations

import re
from pathlib import Path
from typing import Any

from pydantic import Field, field_validator
from pydantic_core.core_schema import ValidationInfo
from pydantic_settings import BaseSettings, SettingsConfigDict
from dotenv import load_dotenv

DEFAULT_MARKDOWN_EXTENSIONS = ["fenced_code", "tables"]


def load_env(env_file: str | Path | None = None) -> None:
	"""Load environment variables from an `.env` file if present."""
	env_path = Path(env_file) if env_file else Path(".env")
	if env_path.exists():
		load_dotenv(env_path)


def _split_csv(v: Any) -> list[str]:
	if v is None or v == "":
		return []
	if isinstance(v, list):
		return v
	if isinstance(v, tuple):
		return list(v)
	# fallback: comma-separated string
	return [p.strip() for p in str(v).split(",") if p.strip()]


class PublisherConfig(BaseSettings):
	"""Pipeline options loaded from environment variables or arguments."""

	model_config = SettingsConfigDict(env_prefix="", case_sensitive=False,
	                                  populate_by_name=True)

	highlighters: Any = Field(
	    default_factory=list,
	    alias="PAGEPRESS_HIGHLIGHTERS",
	    description="Languages to syntax-highlight (Pygments lexer aliases)",
	)
	markdown_extensions: Any = Field(
	    default_factory=lambda: list(DEFAULT_MARKDOWN_EXTENSIONS),
	    alias="PAGEPRESS_MARKDOWN_EXTENSIONS",
	    description="Python-Markdown extensions used for .md bodies",
	)
	markdown_extension_configs: dict[str, dict[str, Any]] = Field(
	    default_factory=dict,
	    alias="PAGEPRESS_MARKDOWN_EXTENSION_CONFIGS",
	    description="Per-extension settings passed through to Python-Markdown",
	)
	output_format: str = Field(
	    "html",
	    alias="PAGEPRESS_OUTPUT_FORMAT",
	    description="Python-Markdown output format",
	)
	highlight_regex: str | None = Field(
	    default=None,
	    alias="PAGEPRESS_HIGHLIGHT_REGEX",
	    description="Code block pattern with (language, code) groups",
	)
	max_workers: int = Field(
	    4,
	    alias="PAGEPRESS_MAX_WORKERS",
	    description="Files processed concurrently",
	)
	log_level: str = Field("info", alias="PAGEPRESS_LOG_LEVEL",
	                       description="Log level")

	@field_validator("highlighters", "markdown_extensions", mode="before")
	@classmethod
	def split_lists(cls, v: Any) -> list[str]:
		"""Normalize list options regardless of input format."""
		return _split_csv(v)

	@field_validator("highlight_regex")
	@classmethod
	def validate_regex(cls, v: str | None) -> str | None:
		if v is None:
			return v
		try:
			pattern = re.compile(v)
		except re.error as e:
			raise ValueError(f"highlight_regex is not a valid pattern: {e}")
		if pattern.groups < 2:
			raise ValueError(
			    "highlight_regex must have a language and a code group")
		return v

	@field_validator("max_workers")
	@classmethod
	def validate_positive(cls, v: int, info: ValidationInfo) -> int:
		if v <= 0:
			raise ValueError(f"{info.field_name} must be > 0")
		return v

	@property
	def highlighting_enabled(self) -> bool:
		"""Return True when at least one language is highlighted."""
		return bool(self.highlighters)

	def markdown_options(self) -> dict[str, Any]:
		"""Return keyword arguments for ``markdown.Markdown``."""
		return {
		    "extensions": list(self.markdown_extensions),
		    "extension_configs": dict(self.markdown_extension_configs),
		    "output_format": self.output_format,
		}

	def apply_overrides(self, **overrides: Any) -> None:
		"""Apply CLI overrides onto this config.

		Only non-None values are applied, preserving environment-based
		defaults for anything the user didn't explicitly set.

		Parameters:
			overrides: Field names mapped to override values.
		"""
		for field_name, value in overrides.items():
			if value is None:
				continue
			if field_name in ("highlighters", "markdown_extensions"):
				value = _split_csv(value)
			setattr(self, field_name, value)


__all__ = ["PublisherConfig", "load_env", "DEFAULT_MARKDOWN_EXTENSIONS"]
