"""Render the folded view as Rich Text (TUI) or plain lines (--dump).

// [LAW:one-source-of-truth] format_row is the one line format for every output.
"""

from rich.style import Style
from rich.text import Text

from thread_fold.core.engine import FoldingEngine
from thread_fold.core.regions import FoldStyle
from thread_fold.core.rows import Row
from thread_fold.tui.styles import CURSOR_STYLE, UNREAD_STYLE


def format_row(row: Row, hidden: int = 0) -> str:
    """One display line: unread marker, child indent, subject, hidden counter."""
    marker = "*" if row.unread else " "
    indent = "  " if row.is_child else ""
    suffix = f" [+{hidden}]" if hidden else ""
    return f"{marker} {indent}{row.subject}{suffix}"


def visible_lines(engine: FoldingEngine) -> list[str]:
    index = engine.index
    lines = []
    for position in engine.visible_positions():
        row = index.row_at(position)
        hidden = engine.hidden_count(position) if row.is_root else 0
        lines.append(format_row(row, hidden))
    return lines


def render_text(
    engine: FoldingEngine,
    styles: dict[FoldStyle, Style],
    cursor: int | None = None,
) -> Text:
    index = engine.index
    text = Text(no_wrap=True, overflow="ellipsis")
    for n, position in enumerate(engine.visible_positions()):
        if n:
            text.append("\n")
        row = index.row_at(position)
        hidden = engine.hidden_count(position) if row.is_root else 0
        style = Style()
        slot = engine.style_at(position)
        if slot is not None:
            style += styles[slot]
        if row.unread:
            style += UNREAD_STYLE
        if position == cursor:
            style += CURSOR_STYLE
        text.append(format_row(row, hidden), style=style)
    return text
