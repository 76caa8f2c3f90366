"""Load a message list from JSON.

Format: a list of objects with keys role, has_children, unread, subject.
Only role is required. A top-level object with a "rows" key is accepted too.
"""

import json
from pathlib import Path

from thread_fold.core.errors import RowSourceError
from thread_fold.core.rows import Row, ThreadRole

SAMPLE_ROWS: list[dict] = [
    {"role": "root", "has_children": True, "subject": "Release planning for 0.2"},
    {"role": "child", "subject": "Re: Release planning for 0.2"},
    {"role": "child", "subject": "Re: Release planning for 0.2"},
    {"role": "child", "unread": True, "subject": "Re: Release planning for 0.2"},
    {"role": "root", "subject": "Weekly digest"},
    {"role": "root", "has_children": True, "subject": "Build broken on main"},
    {"role": "child", "subject": "Re: Build broken on main"},
    {"role": "child", "subject": "Re: Build broken on main"},
    {"role": "orphan", "has_children": True, "subject": "Re: Old discussion"},
    {"role": "child", "unread": True, "subject": "Re: Re: Old discussion"},
    {"role": "child", "subject": "Re: Re: Old discussion"},
    {"role": "none", "subject": "Draft: notes to self"},
]


def row_from_dict(entry: object, index: int | None = None) -> Row:
    if not isinstance(entry, dict):
        raise RowSourceError(f"expected an object, got {type(entry).__name__}", index)
    try:
        role = ThreadRole(str(entry.get("role", "")).strip().lower())
    except ValueError:
        raise RowSourceError(f"unknown role {entry.get('role')!r}", index) from None
    subject = entry.get("subject", "")
    if not isinstance(subject, str):
        raise RowSourceError("subject must be a string", index)
    return Row(
        role=role,
        has_children=bool(entry.get("has_children", False)),
        unread=bool(entry.get("unread", False)),
        subject=subject,
    )


def rows_from_data(data: object) -> list[Row]:
    if isinstance(data, dict):
        data = data.get("rows")
    if not isinstance(data, list):
        raise RowSourceError("expected a list of rows")
    return [row_from_dict(entry, i) for i, entry in enumerate(data)]


def load_rows(path: str | Path) -> list[Row]:
    """Read rows from a JSON file. Raises RowSourceError on unreadable input."""
    try:
        data = json.loads(Path(path).read_text(encoding="utf-8"))
    except OSError as exc:
        raise RowSourceError(f"cannot read {path}: {exc}") from exc
    except UnicodeDecodeError as exc:
        raise RowSourceError(f"{path} is not UTF-8: {exc}") from exc
    except json.JSONDecodeError as exc:
        raise RowSourceError(f"invalid JSON in {path}: {exc}") from exc
    return rows_from_data(data)


def sample_rows() -> list[Row]:
    return rows_from_data(SAMPLE_ROWS)
