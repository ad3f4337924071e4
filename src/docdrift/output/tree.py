"""Rich tree visualization for audit issues."""

from collections import defaultdict
from pathlib import PurePosixPath

from rich.console import Console
from rich.markup import escape
from rich.text import Text
from rich.tree import Tree

from docdrift.models.issue import Issue, Severity

console = Console()

AGGREGATE = "(all)"


def build_issue_tree(issues: list[Issue], root_name: str) -> Tree:
    """Build a Rich tree showing issues by file."""
    # Group by file
    by_file: dict[str, list[Issue]] = defaultdict(list)
    for issue in issues:
        by_file[issue.file or AGGREGATE].append(issue)

    root = Tree(f"[bold]{escape(root_name)}[/]", guide_style="dim")

    # Track directories we've added
    dir_nodes: dict[PurePosixPath, Tree] = {}

    for file_name in sorted(by_file, key=lambda name: (name != AGGREGATE, name)):
        parent = root
        if file_name == AGGREGATE:
            file_node = parent.add(f"[magenta]{AGGREGATE}[/]")
        else:
            file_path = PurePosixPath(file_name)
            for i, part in enumerate(file_path.parts[:-1]):
                dir_path = PurePosixPath(*file_path.parts[: i + 1])
                if dir_path not in dir_nodes:
                    dir_nodes[dir_path] = parent.add(f"[bold blue]{escape(part)}/[/]")
                parent = dir_nodes[dir_path]
            file_node = parent.add(f"[yellow]{escape(file_path.name)}[/]")

        for issue in sorted(by_file[file_name], key=Issue.sort_key):
            file_node.add(_issue_text(issue))

    return root


def _issue_text(issue: Issue) -> Text:
    text = Text()
    if issue.is_warning:
        text.append("⚠ ", style="yellow bold")
    else:
        text.append("✗ ", style="red bold")
    if issue.line:
        span = f"{issue.line}-{issue.end_line}" if issue.end_line > issue.line else str(issue.line)
        text.append(f"line {span} ", style="dim")
    text.append(issue.message, style=_severity_color(issue.severity))
    text.append(f" [{issue.check.value}]", style="dim")
    return text


def _severity_color(severity: Severity) -> str:
    """Get color based on severity."""
    if severity is Severity.ERROR:
        return "red"
    return "yellow"


def build_summary_tree(issues: list[Issue]) -> Tree:
    """Build a summary tree grouped by check."""
    by_check: dict[str, list[Issue]] = defaultdict(list)
    for issue in issues:
        by_check[issue.check.value].append(issue)

    root = Tree("[bold]Audit Summary[/]", guide_style="dim")

    for check_name, items in sorted(by_check.items()):
        check_node = root.add(f"[cyan]{check_name}[/] ({len(items)} issues)")
        # Show the first 3 locations
        for item in sorted(items, key=Issue.sort_key)[:3]:
            color = _severity_color(item.severity)
            check_node.add(f"[{color}]{escape(item.location)}[/] {escape(item.message)}")
        if len(items) > 3:
            check_node.add(f"[dim]... and {len(items) - 3} more[/]")

    return root


def display_tree(tree: Tree) -> None:
    """Display the tree to console."""
    console.print()
    console.print(tree)
    console.print()
