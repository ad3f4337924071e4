"""Data models for line counts and full audit reports."""

from collections import Counter
from dataclasses import dataclass, field
from datetime import datetime
from pathlib import Path

from docdrift.models.instruction import InstructionFile
from docdrift.models.issue import CheckKind, Issue, Severity


@dataclass
class LineCounts:
    """Per-file line counts, largest first, plus their sum."""

    counts: dict[str, int] = field(default_factory=dict)
    total: int = 0

    @classmethod
    def from_mapping(cls, counts: dict[str, int]) -> "LineCounts":
        ordered = dict(sorted(counts.items(), key=lambda item: (-item[1], item[0])))
        return cls(counts=ordered, total=sum(ordered.values()))

    def items(self) -> list[tuple[str, int]]:
        return list(self.counts.items())


@dataclass
class AuditReport:
    """Everything one audit run produced."""

    root: Path
    files: list[InstructionFile] = field(default_factory=list)
    issues: list[Issue] = field(default_factory=list)
    line_counts: LineCounts = field(default_factory=LineCounts)
    line_budget: int = 0
    audited_at: datetime = field(default_factory=datetime.now)
    duration_ms: int = 0

    @property
    def ok(self) -> bool:
        return not self.issues

    @property
    def over_budget(self) -> bool:
        return self.line_counts.total > self.line_budget

    def issues_for(self, check: CheckKind) -> list[Issue]:
        return [issue for issue in self.issues if issue.check is check]

    def by_check(self) -> dict[str, int]:
        counter = Counter(issue.check.value for issue in self.issues)
        return dict(sorted(counter.items()))

    def count_severity(self, severity: Severity) -> int:
        return sum(1 for issue in self.issues if issue.severity is severity)

    def to_dict(self) -> dict:
        return {
            "root": str(self.root),
            "audited_at": self.audited_at.isoformat(),
            "duration_ms": self.duration_ms,
            "files": [f.to_dict() for f in self.files],
            "summary": {
                "issues": len(self.issues),
                "errors": self.count_severity(Severity.ERROR),
                "warnings": self.count_severity(Severity.WARNING),
                "by_check": self.by_check(),
            },
            "line_budget": {
                "budget": self.line_budget,
                "total": self.line_counts.total,
                "counts": self.line_counts.counts,
            },
            "issues": [issue.to_dict() for issue in self.issues],
        }
