"""
Terminal rendering of the selection tree and tag checklist using Rich.
"""

from io import StringIO
from typing import AbstractSet, Iterable, List, Optional

from rich.console import Console
from rich.panel import Panel
from rich.table import Table
from rich.text import Text
from rich.tree import Tree

from ..core.data_models import DisplayNode, TagOption

CHECKED_MARK = "[x] "
UNCHECKED_MARK = "[ ] "

COLORS = {
    "header": "bold cyan",
    "checked": "green",
    "unchecked": "dim",
    "virtual": "italic",
    "disabled": "red",
}


def _node_label(node: DisplayNode, checked_keys: AbstractSet[str]) -> Text:
    checked = node.key in checked_keys
    style = COLORS["checked"] if checked else COLORS["unchecked"]
    if node.virtual:
        style = f"{style} {COLORS['virtual']}"
    return Text.assemble(
        (CHECKED_MARK if checked else UNCHECKED_MARK, style),
        (node.title, style),
        (f"  ({node.key})", "dim"),
    )


def build_selection_tree(display: DisplayNode, checked_keys: AbstractSet[str]) -> Tree:
    """
    Build a Rich tree mirroring the display tree with check marks.

    Keys are shown next to titles so they can be passed back on the
    command line.
    """
    root = Tree(_node_label(display, checked_keys))
    stack = [(display, root)]
    while stack:
        node, branch = stack.pop()
        for child in node.children:
            stack.append((child, branch.add(_node_label(child, checked_keys))))
    return root


def build_tag_table(options: Iterable[TagOption]) -> Table:
    table = Table(show_header=True, header_style=COLORS["header"], title="Tags")
    table.add_column("Tag")
    table.add_column("Checked")
    table.add_column("Note")

    for option in options:
        note = ""
        if option.disabled and option.checked:
            note = "always attached"
        elif option.disabled:
            note = "name too long"
        table.add_row(
            Text(option.name),
            Text("yes" if option.checked else "no",
                 style=COLORS["checked"] if option.checked else COLORS["unchecked"]),
            Text(note, style=COLORS["disabled"] if note == "name too long" else ""),
        )
    return table


def render_selection(
    display: DisplayNode,
    checked_keys: AbstractSet[str],
    options: Iterable[TagOption],
    summary: Optional[str] = None,
    width: int = 100,
) -> str:
    """
    Render the selection tree, tag table and summary as terminal text.

    Returns:
        Terminal-formatted string
    """
    output = StringIO()
    console = Console(file=output, force_terminal=True, width=width)

    renderables: List = [build_selection_tree(display, checked_keys), build_tag_table(options)]
    if summary:
        renderables.append(Panel(Text(summary), style=COLORS["header"], expand=False))

    for renderable in renderables:
        console.print(renderable)
        console.print()

    return output.getvalue()
