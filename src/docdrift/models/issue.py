"""Data models for audit findings."""

from dataclasses import dataclass
from enum import Enum


class CheckKind(Enum):
    """Which check produced an issue."""

    STALENESS = "staleness"
    TREE_PATH = "tree_path"
    LINE_BUDGET = "line_budget"
    ACTIONABLE = "actionable"
    UNREADABLE = "unreadable"


class Severity(Enum):
    """How an issue should be presented. Every issue is advisory."""

    ERROR = "error"  # Objective drift: missing path, stale doc, over budget
    WARNING = "warning"  # Heuristic finding


@dataclass(frozen=True)
class Issue:
    """A single finding produced by a check."""

    check: CheckKind
    file: str | None  # Relative to the project root; None for aggregate issues
    message: str
    line: int = 0
    end_line: int = 0
    severity: Severity = Severity.ERROR

    @property
    def location(self) -> str:
        """Render ``file``, ``file:line`` or ``file:line-end``."""
        loc = self.file if self.file is not None else "(all)"
        if self.line > 0:
            if self.end_line > self.line:
                loc += f":{self.line}-{self.end_line}"
            else:
                loc += f":{self.line}"
        return loc

    @property
    def is_warning(self) -> bool:
        return self.severity is Severity.WARNING

    def sort_key(self) -> tuple:
        return (self.file or "", self.line, self.check.value, self.message)

    def to_dict(self) -> dict:
        return {
            "check": self.check.value,
            "file": self.file,
            "line": self.line,
            "end_line": self.end_line,
            "severity": self.severity.value,
            "message": self.message,
        }


def unreadable_issue(rel: str, error: OSError) -> Issue:
    """Build the issue reported when a file cannot be read or stat'ed."""
    reason = error.strerror or error.__class__.__name__
    return Issue(
        check=CheckKind.UNREADABLE,
        file=rel,
        message=f"Could not read file: {reason}",
    )
