"""Well-known file and directory names for instruction file discovery."""

from pathlib import Path

# Instruction file names
PRIMARY_FILE = "AGENTS.md"
SECONDARY_FILE = "CLAUDE.md"
SKILL_FILE = "SKILL.md"

# Root-level docs that may carry a project structure tree but are not
# instruction files themselves
COMPANION_FILES = ("README.md", "SPECS.md")

# Top-level agent directories holding skills and nested instruction files
AGENT_DIRS = (".claude", ".agents")

# Version control metadata used as the secondary root signal
VCS_MARKER = ".git"

# Heading that introduces a declared project tree
STRUCTURE_HEADING = "Project Structure"


def relative_to_root(path: Path, root: Path) -> str:
    """Render a path relative to the project root with forward slashes."""
    try:
        return path.relative_to(root).as_posix()
    except ValueError:
        return path.as_posix()
