"""The four independent instruction file checks."""

from docdrift.checks.actionable import check_actionable
from docdrift.checks.line_budget import check_line_budget, count_lines
from docdrift.checks.staleness import check_staleness
from docdrift.checks.tree_paths import check_tree_paths, extract_tree_nodes

__all__ = [
    "check_actionable",
    "check_line_budget",
    "check_staleness",
    "check_tree_paths",
    "count_lines",
    "extract_tree_nodes",
]
