"""Data models for discovered instruction files."""

from dataclasses import dataclass, field
from enum import Enum, auto
from pathlib import Path

from docdrift.paths import relative_to_root


class DocCategory(Enum):
    """Where an instruction file lives and what it governs."""

    ROOT = auto()  # Whole-project guidance at the project root
    SKILL = auto()  # SKILL.md under a skills directory
    PACKAGE = auto()  # Nested AGENTS.md scoped to its directory subtree

    @property
    def label(self) -> str:
        return self.name.lower()


@dataclass(eq=False)
class InstructionFile:
    """A discovered instruction document.

    Content and modification time are read on first access and cached, so
    every check sees the same view of the file within one run. Read errors
    propagate as ``OSError``.
    """

    path: Path
    category: DocCategory
    root: Path
    _content: str | None = field(default=None, init=False, repr=False)
    _mtime: float | None = field(default=None, init=False, repr=False)

    @property
    def rel_path(self) -> str:
        return relative_to_root(self.path, self.root)

    @property
    def name(self) -> str:
        return self.path.name

    @property
    def content(self) -> str:
        if self._content is None:
            self._content = self.path.read_text(encoding="utf-8", errors="replace")
        return self._content

    @property
    def mtime(self) -> float:
        if self._mtime is None:
            self._mtime = self.path.stat().st_mtime
        return self._mtime

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, InstructionFile):
            return NotImplemented
        return self.path == other.path

    def __hash__(self) -> int:
        return hash(self.path)

    def to_dict(self) -> dict:
        return {
            "path": self.rel_path,
            "category": self.category.label,
        }
