"""Shared fixtures for thread-fold tests."""

import pytest

import thread_fold.io.logging_setup as logging_setup
from thread_fold.core.rows import Row, RowList, ThreadRole

# One letter per row:
#   R  root with children     r  root without children
#   O  orphan with children   o  orphan without children
#   c  read child             u  unread child
#   N  row outside any thread
_CODES = {
    "R": (ThreadRole.ROOT, True, False),
    "r": (ThreadRole.ROOT, False, False),
    "O": (ThreadRole.ORPHAN, True, False),
    "o": (ThreadRole.ORPHAN, False, False),
    "c": (ThreadRole.CHILD, False, False),
    "u": (ThreadRole.CHILD, False, True),
    "N": (ThreadRole.NONE, False, False),
}


def build_rows(pattern: str) -> list[Row]:
    rows = []
    for n, code in enumerate(pattern.replace(" ", "")):
        role, has_children, unread = _CODES[code]
        rows.append(Row(role, has_children, unread, subject=f"msg {n}"))
    return rows


@pytest.fixture
def view():
    """Build a RowList from a pattern string, e.g. view("Rccu r Rcc")."""
    return lambda pattern: RowList(build_rows(pattern))


@pytest.fixture
def rows():
    """Build a plain list of Rows from a pattern string."""
    return build_rows


@pytest.fixture(autouse=True)
def isolated_config(tmp_path, monkeypatch):
    """Point the settings file and log dir at tmp_path; clear env overrides."""
    monkeypatch.setenv("XDG_CONFIG_HOME", str(tmp_path / "config"))
    monkeypatch.setenv("THREAD_FOLD_LOG_DIR", str(tmp_path / "logs"))
    monkeypatch.delenv("THREAD_FOLD_DEFAULT_VIEW", raising=False)
    monkeypatch.delenv("THREAD_FOLD_LOG_FILE", raising=False)
    monkeypatch.delenv("THREAD_FOLD_LOG_LEVEL", raising=False)
    return tmp_path / "config"


@pytest.fixture(autouse=True)
def reset_logging():
    """Undo logging_setup.configure() so caplog keeps seeing thread_fold records."""
    yield
    logging_setup.reset()
