"""Audit configuration: presets, validation and pyproject.toml overrides."""

import dataclasses
from dataclasses import dataclass
from pathlib import Path

try:
    import tomllib
except ImportError:
    import tomli as tomllib  # type: ignore

LINE_BUDGET = 1000

BROAD_ROOT_MARKERS = (
    "Cargo.toml",
    "package.json",
    "pyproject.toml",
    "setup.py",
    "go.mod",
    "Gemfile",
    "pom.xml",
    "build.gradle",
    "CMakeLists.txt",
    "Makefile",
    "flake.nix",
    "deno.json",
    "composer.json",
)

BROAD_SOURCE_EXTENSIONS = frozenset(
    {
        "rs", "ts", "tsx", "js", "jsx", "py", "go", "rb", "java", "kt",
        "c", "cpp", "h", "hpp", "cs", "swift", "zig", "hs", "ml", "ex",
        "exs", "clj", "scala", "lua", "php", "sh", "bash", "zsh",
    }
)

BROAD_SOURCE_DIRS = ("src", "lib", "app", "pkg", "cmd", "internal")

BROAD_SKIP_DIRS = frozenset(
    {
        "node_modules",
        "target",
        "build",
        "dist",
        ".git",
        "__pycache__",
        ".venv",
        "vendor",
        ".next",
        "out",
    }
)

# Second-person directive verbs and instruction markers. Kept broad so that a
# block with any framing at all is treated as contextualized.
DEFAULT_IMPERATIVE_WORDS = frozenset(
    {
        "use", "add", "create", "run", "do", "don't", "never", "always",
        "must", "should", "avoid", "prefer", "ensure", "keep", "set",
        "follow", "call", "check", "make", "important", "note", "rule",
    }
)

DEFAULT_INFORMATIONAL_HEADINGS = frozenset(
    {
        "project structure",
        "directory layout",
        "architecture",
        "overview",
        "tech stack",
        "sources",
        "bibliography",
        "references",
        "available tools",
        "resources",
    }
)


class ConfigError(ValueError):
    """Raised when an audit configuration is malformed or contradictory."""


@dataclass(frozen=True)
class AuditConfig:
    """Tunable policy for discovery and auditing.

    Passed explicitly into every check; nothing reads process-wide defaults.
    Extension and directory names are matched literally and case-sensitively.
    """

    root_markers: tuple[str, ...] = BROAD_ROOT_MARKERS
    include_claude_md: bool = True
    source_extensions: frozenset[str] = BROAD_SOURCE_EXTENSIONS
    source_dirs: tuple[str, ...] = BROAD_SOURCE_DIRS
    skip_dirs: frozenset[str] = BROAD_SKIP_DIRS

    line_budget: int = LINE_BUDGET

    # Actionable-content heuristic
    code_block_max_lines: int = 8
    table_max_rows: int = 5
    link_list_max_items: int = 10
    context_lines: int = 2
    imperative_words: frozenset[str] = DEFAULT_IMPERATIVE_WORDS
    informational_headings: frozenset[str] = DEFAULT_INFORMATIONAL_HEADINGS

    check_companion_docs: bool = True

    def __post_init__(self) -> None:
        # Accept lists from callers and TOML, store immutable collections
        object.__setattr__(self, "root_markers", tuple(self.root_markers))
        object.__setattr__(self, "source_dirs", tuple(self.source_dirs))
        object.__setattr__(self, "source_extensions", frozenset(self.source_extensions))
        object.__setattr__(self, "skip_dirs", frozenset(self.skip_dirs))
        object.__setattr__(
            self, "imperative_words", frozenset(w.lower() for w in self.imperative_words)
        )
        object.__setattr__(
            self,
            "informational_headings",
            frozenset(h.lower() for h in self.informational_headings),
        )
        self.validate()

    def validate(self) -> None:
        """Reject malformed or contradictory settings."""
        if not self.root_markers:
            raise ConfigError("root_markers must name at least one marker file")
        for marker in self.root_markers:
            _check_plain_name("root marker", marker)
        for ext in self.source_extensions:
            if not ext or "." in ext or "/" in ext or "\\" in ext:
                raise ConfigError(
                    f"source extension {ext!r} must be a bare extension such as 'py'"
                )
        for name in self.source_dirs:
            _check_plain_name("source dir", name)
        for name in self.skip_dirs:
            _check_plain_name("skip dir", name)

        overlap = set(self.source_dirs) & self.skip_dirs
        if overlap:
            raise ConfigError(
                f"directories cannot be both source and skipped: {', '.join(sorted(overlap))}"
            )

        for name in (
            "line_budget",
            "code_block_max_lines",
            "table_max_rows",
            "link_list_max_items",
        ):
            if getattr(self, name) <= 0:
                raise ConfigError(f"{name} must be positive")
        if self.context_lines < 0:
            raise ConfigError("context_lines cannot be negative")

    @classmethod
    def broad(cls) -> "AuditConfig":
        """Many ecosystems: wide root detection, includes CLAUDE.md."""
        return cls()

    @classmethod
    def narrow(cls) -> "AuditConfig":
        """Single Cargo ecosystem: Cargo.toml root, Rust sources, no CLAUDE.md."""
        return cls(
            root_markers=("Cargo.toml",),
            include_claude_md=False,
            source_extensions=frozenset({"rs"}),
            source_dirs=("src",),
            skip_dirs=frozenset({"target", ".git"}),
        )


PRESETS = {
    "broad": AuditConfig.broad,
    "narrow": AuditConfig.narrow,
}


def get_preset(name: str) -> AuditConfig:
    """Build a named preset configuration."""
    try:
        factory = PRESETS[name]
    except KeyError:
        raise ConfigError(
            f"unknown preset {name!r} (choose from: {', '.join(sorted(PRESETS))})"
        ) from None
    return factory()


def _check_plain_name(kind: str, name: str) -> None:
    if not isinstance(name, str) or not name or "/" in name or "\\" in name:
        raise ConfigError(f"{kind} {name!r} must be a plain file or directory name")


_BOOL_FIELDS = {"include_claude_md", "check_companion_docs"}
_INT_FIELDS = {
    "line_budget",
    "code_block_max_lines",
    "table_max_rows",
    "link_list_max_items",
    "context_lines",
}
_LIST_FIELDS = {
    "root_markers",
    "source_extensions",
    "source_dirs",
    "skip_dirs",
    "imperative_words",
    "informational_headings",
}


def load_overrides(project_root: Path, base: AuditConfig) -> AuditConfig:
    """Apply ``[tool.docdrift]`` settings from the project's pyproject.toml.

    Keys may use dashes or underscores. Returns ``base`` when there is no
    pyproject.toml or no ``[tool.docdrift]`` table.
    """
    pyproject_path = project_root / "pyproject.toml"
    if not pyproject_path.is_file():
        return base

    try:
        with open(pyproject_path, "rb") as f:
            data = tomllib.load(f)
    except tomllib.TOMLDecodeError as e:
        raise ConfigError(f"{pyproject_path}: {e}") from e

    table = data.get("tool", {}).get("docdrift")
    if not table:
        return base
    if not isinstance(table, dict):
        raise ConfigError(f"{pyproject_path}: [tool.docdrift] must be a table")

    changes: dict[str, object] = {}
    for raw_key, value in table.items():
        key = raw_key.replace("-", "_")
        if key in _BOOL_FIELDS:
            if not isinstance(value, bool):
                raise ConfigError(f"tool.docdrift.{raw_key} must be true or false")
        elif key in _INT_FIELDS:
            if isinstance(value, bool) or not isinstance(value, int):
                raise ConfigError(f"tool.docdrift.{raw_key} must be an integer")
        elif key in _LIST_FIELDS:
            if not isinstance(value, list) or not all(isinstance(v, str) for v in value):
                raise ConfigError(f"tool.docdrift.{raw_key} must be a list of strings")
        else:
            raise ConfigError(f"unknown setting tool.docdrift.{raw_key}")
        changes[key] = value

    return dataclasses.replace(base, **changes)


def config_to_dict(config: AuditConfig) -> dict:
    """Serialize a config for reports, with collections sorted."""
    result: dict = {}
    for f in dataclasses.fields(config):
        value = getattr(config, f.name)
        if isinstance(value, frozenset):
            value = sorted(value)
        elif isinstance(value, tuple):
            value = list(value)
        result[f.name] = value
    return result
