"""Instruction file discovery."""

import logging
import os
from collections.abc import Iterator
from pathlib import Path

from docdrift.config import AuditConfig
from docdrift.models.instruction import DocCategory, InstructionFile
from docdrift.paths import (
    AGENT_DIRS,
    COMPANION_FILES,
    PRIMARY_FILE,
    SECONDARY_FILE,
    SKILL_FILE,
)

logger = logging.getLogger(__name__)


class AuditError(RuntimeError):
    """Raised when a run cannot proceed at all, e.g. the root is unreadable."""


def instruction_names(config: AuditConfig) -> tuple[str, ...]:
    """File names that count as project or package instruction files."""
    if config.include_claude_md:
        return (PRIMARY_FILE, SECONDARY_FILE)
    return (PRIMARY_FILE,)


def is_agent_file(rel: str, config: AuditConfig) -> bool:
    """Check if a path names an agent instruction file (by exact file name)."""
    name = Path(rel).name
    return name == SKILL_FILE or name in instruction_names(config)


def walk_files(
    directory: Path,
    skip_dirs: frozenset[str],
    *,
    names: tuple[str, ...] | None = None,
    extensions: frozenset[str] | None = None,
) -> Iterator[Path]:
    """Yield files under ``directory``, never descending into ``skip_dirs``.

    Filters by exact file name and/or extension (without the dot). Directory
    walk errors are ignored; vanished or unreadable subtrees are simply not
    reported.
    """
    for dirpath, dirnames, filenames in os.walk(directory):
        # Prune in place so os.walk never enters skipped directories
        dirnames[:] = sorted(d for d in dirnames if d not in skip_dirs)
        for filename in sorted(filenames):
            if names is not None and filename not in names:
                continue
            if extensions is not None:
                _, dot, ext = filename.rpartition(".")
                if not dot or ext not in extensions:
                    continue
            yield Path(dirpath) / filename


def _scan_roots(root: Path, dir_names: tuple[str, ...], skip_dirs: frozenset[str]) -> list[Path]:
    """Existing top-level directories to search, skipping excluded names."""
    seen: list[Path] = []
    for name in dir_names:
        if name in skip_dirs:
            continue
        candidate = root / name
        if candidate.is_dir() and candidate not in seen:
            seen.append(candidate)
    return seen


def find_instruction_files(root: Path, config: AuditConfig) -> list[InstructionFile]:
    """Discover all instruction files under ``root``.

    - Root level: AGENTS.md, plus CLAUDE.md when enabled
    - Skill level: SKILL.md anywhere under .claude/ or .agents/
    - Package level: AGENTS.md (and CLAUDE.md when enabled) anywhere under
      .agents/, .claude/ or a configured source directory

    Results are deduplicated by absolute path; the first rule that claims a
    file decides its category. Sorted by path.
    """
    root = root.resolve()
    if not root.is_dir():
        raise AuditError(f"Project root is not a directory: {root}")
    try:
        with os.scandir(root) as entries:
            next(entries, None)
    except OSError as e:
        raise AuditError(f"Cannot read project root {root}: {e}") from e

    found: dict[Path, InstructionFile] = {}

    def claim(path: Path, category: DocCategory) -> None:
        key = path.resolve()
        if key not in found:
            found[key] = InstructionFile(path=key, category=category, root=root)

    names = instruction_names(config)

    for name in names:
        path = root / name
        if path.is_file():
            claim(path, DocCategory.ROOT)

    for skill_root in _scan_roots(root, AGENT_DIRS, config.skip_dirs):
        for path in walk_files(skill_root, config.skip_dirs, names=(SKILL_FILE,)):
            claim(path, DocCategory.SKILL)

    package_dirs = AGENT_DIRS + config.source_dirs
    for package_root in _scan_roots(root, package_dirs, config.skip_dirs):
        for path in walk_files(package_root, config.skip_dirs, names=names):
            claim(path, DocCategory.PACKAGE)

    result = sorted(found.values(), key=lambda f: f.path)
    logger.debug(
        "Discovered %d instruction file(s) under %s: %s",
        len(result),
        root,
        ", ".join(f.rel_path for f in result) or "none",
    )
    return result


def find_companion_docs(root: Path) -> list[Path]:
    """Root-level README.md / SPECS.md, checked for tree accuracy only."""
    return [root / name for name in COMPANION_FILES if (root / name).is_file()]
