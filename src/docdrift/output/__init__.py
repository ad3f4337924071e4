"""Output modules for CLI display and file writing."""

from docdrift.output.json_writer import load_report, write_report
from docdrift.output.tree import build_issue_tree, build_summary_tree, display_tree

__all__ = [
    "build_issue_tree",
    "build_summary_tree",
    "display_tree",
    "load_report",
    "write_report",
]
