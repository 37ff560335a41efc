"""User interface components.

This subpackage provides terminal output rendering for the CLI.

Key modules:
    - reporting: Rich build summary and JSON persistence of entries
"""

from pagepress.ui.reporting import (
    render_summary_table,
    print_summary,
    entries_to_json,
    save_entries_json,
)

__all__ = [
    "render_summary_table",
    "print_summary",
    "entries_to_json",
    "save_entries_json",
]
