"""Dialog components for Portfolio Monitor UI."""

from src.ui.dialogs.filter_dialog import FilterDialog, run_filter_dialog

__all__ = [
    "FilterDialog",
    "run_filter_dialog",
]
