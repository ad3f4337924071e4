"""Tests for root resolution and instruction file discovery."""

from pathlib import Path

import pytest

from docdrift.config import AuditConfig
from docdrift.discovery import (
    AuditError,
    find_companion_docs,
    find_instruction_files,
    find_root,
    is_agent_file,
)
from docdrift.models import DocCategory

# A marker no real ancestor of tmp_path will carry
UNIQUE_MARKER = "docdrift-test-marker.cfg"


def write(path: Path, content: str = "# Doc\n") -> Path:
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(content)
    return path


def rel_paths(files) -> list[str]:
    return sorted(f.rel_path for f in files)


class TestFindRoot:
    """Tests for the marker -> .git -> start fallback chain."""

    def test_marker_in_start_dir(self, tmp_path: Path) -> None:
        write(tmp_path / "Cargo.toml", "[package]\n")
        assert find_root(AuditConfig.broad(), tmp_path) == tmp_path.resolve()

    def test_walks_up_to_marker(self, tmp_path: Path) -> None:
        write(tmp_path / "pyproject.toml", "")
        start = tmp_path / "src" / "pkg"
        start.mkdir(parents=True)

        assert find_root(AuditConfig.broad(), start) == tmp_path.resolve()

    def test_nearest_marker_wins(self, tmp_path: Path) -> None:
        """Nested marker files: the closest ancestor is the root."""
        outer = tmp_path / "outer"
        inner = outer / "inner"
        write(outer / "Cargo.toml", "")
        write(inner / "Cargo.toml", "")
        start = inner / "src" / "deep"
        start.mkdir(parents=True)

        assert find_root(AuditConfig.broad(), start) == inner.resolve()

    def test_marker_beats_closer_git_dir(self, tmp_path: Path) -> None:
        """Markers are searched all the way up before .git is considered."""
        write(tmp_path / "Cargo.toml", "")
        project = tmp_path / "checkout"
        (project / ".git").mkdir(parents=True)

        assert find_root(AuditConfig.narrow(), project) == tmp_path.resolve()

    def test_falls_back_to_git(self, tmp_path: Path) -> None:
        (tmp_path / ".git").mkdir()
        start = tmp_path / "a" / "b"
        start.mkdir(parents=True)
        config = AuditConfig(root_markers=(UNIQUE_MARKER,))

        assert find_root(config, start) == tmp_path.resolve()

    def test_git_file_counts(self, tmp_path: Path) -> None:
        """Worktrees and submodules use a .git file instead of a directory."""
        write(tmp_path / ".git", "gitdir: /elsewhere\n")
        config = AuditConfig(root_markers=(UNIQUE_MARKER,))

        assert find_root(config, tmp_path) == tmp_path.resolve()

    def test_falls_back_to_start(self, tmp_path: Path) -> None:
        """Resolution is total: with no signal at all, the start dir is the root."""
        start = tmp_path / "nothing" / "here"
        start.mkdir(parents=True)
        config = AuditConfig(root_markers=(UNIQUE_MARKER,))

        assert find_root(config, start) == start.resolve()

    def test_defaults_to_cwd(self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
        write(tmp_path / "go.mod", "module x\n")
        monkeypatch.chdir(tmp_path)

        assert find_root(AuditConfig.broad()) == tmp_path.resolve()

    def test_deleted_cwd(self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
        """A working directory removed out from under the process still resolves."""
        gone = tmp_path / "gone"
        gone.mkdir()
        monkeypatch.chdir(gone)
        gone.rmdir()

        assert find_root(AuditConfig(root_markers=(UNIQUE_MARKER,))) == Path(".")


class TestIsAgentFile:
    """Tests for agent instruction file name matching."""

    def test_with_claude(self) -> None:
        config = AuditConfig.broad()
        assert is_agent_file("AGENTS.md", config)
        assert is_agent_file("SKILL.md", config)
        assert is_agent_file("CLAUDE.md", config)
        assert is_agent_file("src/AGENTS.md", config)
        assert is_agent_file(".claude/skills/email/SKILL.md", config)
        assert is_agent_file("nested/path/CLAUDE.md", config)

    def test_without_claude(self) -> None:
        config = AuditConfig.narrow()
        assert is_agent_file("AGENTS.md", config)
        assert is_agent_file("SKILL.md", config)
        assert not is_agent_file("CLAUDE.md", config)

    def test_rejects(self) -> None:
        config = AuditConfig.broad()
        assert not is_agent_file("README.md", config)
        assert not is_agent_file("agents.md", config)
        assert not is_agent_file("CHANGELOG.md", config)
        assert not is_agent_file("src/main.rs", config)


class TestFindInstructionFiles:
    """Tests for instruction file discovery."""

    def test_root_files_with_claude(self, tmp_path: Path) -> None:
        write(tmp_path / "CLAUDE.md")
        write(tmp_path / "AGENTS.md")
        write(tmp_path / "README.md")

        files = find_instruction_files(tmp_path, AuditConfig.broad())

        assert rel_paths(files) == ["AGENTS.md", "CLAUDE.md"]
        assert all(f.category is DocCategory.ROOT for f in files)

    def test_root_files_without_claude(self, tmp_path: Path) -> None:
        write(tmp_path / "CLAUDE.md")
        write(tmp_path / "AGENTS.md")

        files = find_instruction_files(tmp_path, AuditConfig.narrow())

        assert rel_paths(files) == ["AGENTS.md"]

    def test_readme_is_not_an_instruction_file(self, tmp_path: Path) -> None:
        write(tmp_path / "README.md")
        write(tmp_path / "SPECS.md")

        assert find_instruction_files(tmp_path, AuditConfig.broad()) == []
        assert [p.name for p in find_companion_docs(tmp_path)] == ["README.md", "SPECS.md"]

    def test_skill_and_package_files(self, tmp_path: Path) -> None:
        write(tmp_path / ".claude" / "skills" / "email" / "SKILL.md")
        write(tmp_path / ".agents" / "skills" / "deploy" / "SKILL.md")
        write(tmp_path / ".claude" / "settings" / "CLAUDE.md")
        write(tmp_path / "src" / "agent" / "CLAUDE.md")
        write(tmp_path / "src" / "agent" / "AGENTS.md")
        write(tmp_path / "lib" / "AGENTS.md")

        files = find_instruction_files(tmp_path, AuditConfig.broad())
        categories = {f.rel_path: f.category for f in files}

        assert categories == {
            ".agents/skills/deploy/SKILL.md": DocCategory.SKILL,
            ".claude/skills/email/SKILL.md": DocCategory.SKILL,
            ".claude/settings/CLAUDE.md": DocCategory.PACKAGE,
            "lib/AGENTS.md": DocCategory.PACKAGE,
            "src/agent/AGENTS.md": DocCategory.PACKAGE,
            "src/agent/CLAUDE.md": DocCategory.PACKAGE,
        }

    def test_narrow_skips_claude_and_unknown_dirs(self, tmp_path: Path) -> None:
        write(tmp_path / ".claude" / "skills" / "email" / "SKILL.md")
        write(tmp_path / "src" / "agent" / "CLAUDE.md")
        write(tmp_path / "src" / "agent" / "AGENTS.md")
        write(tmp_path / "lib" / "AGENTS.md")  # lib is not a narrow source dir

        files = find_instruction_files(tmp_path, AuditConfig.narrow())

        assert rel_paths(files) == [".claude/skills/email/SKILL.md", "src/agent/AGENTS.md"]

    def test_skill_file_outside_skill_dirs_ignored(self, tmp_path: Path) -> None:
        write(tmp_path / "src" / "SKILL.md")
        write(tmp_path / "docs" / "AGENTS.md")

        assert find_instruction_files(tmp_path, AuditConfig.broad()) == []

    def test_never_descends_into_skip_dirs(self, tmp_path: Path) -> None:
        write(tmp_path / "src" / "node_modules" / "pkg" / "AGENTS.md")
        write(tmp_path / "src" / "target" / "AGENTS.md")
        write(tmp_path / ".claude" / "skills" / ".git" / "SKILL.md")
        write(tmp_path / "src" / "ok" / "AGENTS.md")

        files = find_instruction_files(tmp_path, AuditConfig.broad())

        assert rel_paths(files) == ["src/ok/AGENTS.md"]

    def test_deduplicates_overlapping_rules(self, tmp_path: Path) -> None:
        """A file matched by two rules appears once, under the first category."""
        write(tmp_path / "AGENTS.md")
        write(tmp_path / ".agents" / "AGENTS.md")
        config = AuditConfig(source_dirs=(".", ".agents"))

        files = find_instruction_files(tmp_path, config)

        assert rel_paths(files) == [".agents/AGENTS.md", "AGENTS.md"]
        by_path = {f.rel_path: f.category for f in files}
        assert by_path["AGENTS.md"] is DocCategory.ROOT
        assert by_path[".agents/AGENTS.md"] is DocCategory.PACKAGE

    def test_idempotent(self, tmp_path: Path) -> None:
        write(tmp_path / "AGENTS.md")
        write(tmp_path / ".claude" / "skills" / "x" / "SKILL.md")
        write(tmp_path / "src" / "AGENTS.md")
        config = AuditConfig.broad()

        first = find_instruction_files(tmp_path, config)
        second = find_instruction_files(tmp_path, config)

        assert first == second
        assert len(set(first)) == len(first) == 3

    def test_sorted_by_path(self, tmp_path: Path) -> None:
        write(tmp_path / "CLAUDE.md")
        write(tmp_path / "AGENTS.md")
        write(tmp_path / "src" / "b" / "AGENTS.md")
        write(tmp_path / "src" / "a" / "AGENTS.md")

        files = find_instruction_files(tmp_path, AuditConfig.broad())
        paths = [f.path for f in files]

        assert paths == sorted(paths)

    def test_empty_project(self, tmp_path: Path) -> None:
        assert find_instruction_files(tmp_path, AuditConfig.broad()) == []

    def test_paths_are_absolute(self, tmp_path: Path) -> None:
        write(tmp_path / "AGENTS.md")

        files = find_instruction_files(tmp_path, AuditConfig.broad())

        assert files[0].path.is_absolute()
        assert files[0].root == tmp_path.resolve()

    def test_missing_root_is_run_level_failure(self, tmp_path: Path) -> None:
        with pytest.raises(AuditError):
            find_instruction_files(tmp_path / "missing", AuditConfig.broad())
