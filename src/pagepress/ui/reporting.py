"""
Build summary rendering and persistence utilities.

Provides a Rich table summarizing published entries and a helper for
writing entries to disk as JSON.
"""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any, Sequence

from rich import box
from rich.console import Console
from rich.table import Table

from pagepress.models.entry import Entry

_MAX_KEYS_SHOWN = 4


def render_summary_table(entries: Sequence[Entry]) -> Table:
	"""
	Build a table with one row per entry.

	Parameters:
		entries: Published entries.

	Returns:
		Rich Table with path, attribute keys and body size.
	"""
	table = Table(box=box.ROUNDED, expand=True, show_header=True)
	table.add_column("#", justify="right", style="dim")
	table.add_column("Path", style="cyan")
	table.add_column("Attributes", style="magenta")
	table.add_column("Body", justify="right")
	for idx, entry in enumerate(entries):
		keys = [str(k) for k in entry.attributes]
		shown = ", ".join(keys[:_MAX_KEYS_SHOWN])
		if len(keys) > _MAX_KEYS_SHOWN:
			shown += f", +{len(keys) - _MAX_KEYS_SHOWN}"
		table.add_row(str(idx), entry.path, shown or "-",
		              f"{len(entry.body)} chars")
	return table


def print_summary(entries: Sequence[Entry],
                  console: Console | None = None) -> None:
	"""Print the summary table and totals to the console."""
	console = console or Console(stderr=True)
	console.print(render_summary_table(entries))
	files = len({e.path for e in entries})
	console.print(f"[bold]{len(entries)}[/bold] entries from "
	              f"[bold]{files}[/bold] files")


def entries_to_json(entries: Sequence[Entry]) -> str:
	"""Serialize entries; values JSON cannot represent are stringified."""
	return json.dumps([e.to_dict() for e in entries], indent=2, default=str)


def save_entries_json(path: Path | str, entries: Sequence[Entry]) -> None:
	"""
	Persist entries as JSON, ensuring parent directories.

	Parameters:
		path: Destination file path.
		entries: Entries to write.
	"""
	Path(path).parent.mkdir(parents=True, exist_ok=True)
	Path(path).write_text(entries_to_json(entries), encoding="utf-8")


__all__ = [
    "render_summary_table",
    "print_summary",
    "entries_to_json",
    "save_entries_json",
]
