"""CLI entry point for thread-fold."""

import argparse
import logging
import sys

import thread_fold.app.settings_store
import thread_fold.io.logging_setup
import thread_fold.io.row_source
from thread_fold.core.engine import FoldingEngine
from thread_fold.core.errors import RowSourceError
from thread_fold.core.regions import FoldView
from thread_fold.core.rows import RowList
from thread_fold.tui.app import ThreadFoldApp
from thread_fold.tui.rendering import visible_lines

logger = logging.getLogger(__name__)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="thread-fold",
        description="Browse a threaded message list with collapsible threads",
    )
    parser.add_argument(
        "rows",
        nargs="?",
        default=None,
        help="JSON file with the message rows (default: built-in sample)",
    )
    parser.add_argument(
        "--default-view",
        choices=[view.value for view in FoldView],
        default=None,
        help="Initial fold state (default: from settings, else unfolded)",
    )
    parser.add_argument(
        "--save-default-view",
        action="store_true",
        default=False,
        help="Persist --default-view to the settings file",
    )
    parser.add_argument(
        "--dump",
        action="store_true",
        default=False,
        help="Print the view with the default fold state applied and exit",
    )
    parser.add_argument(
        "--log-level",
        default=None,
        help="Log level (default: THREAD_FOLD_LOG_LEVEL or WARNING)",
    )
    return parser


def main(argv: list[str] | None = None) -> int:
    args = build_parser().parse_args(argv)
    thread_fold.io.logging_setup.configure(args.log_level, stream=args.dump)

    overrides = {}
    if args.default_view is not None:
        overrides["default_view"] = args.default_view
    settings = thread_fold.app.settings_store.create(overrides)
    if args.save_default_view and args.default_view is not None:
        thread_fold.app.settings_store.save_default_view(settings.default_view)

    try:
        if args.rows is None:
            rows = thread_fold.io.row_source.sample_rows()
        else:
            rows = thread_fold.io.row_source.load_rows(args.rows)
    except RowSourceError as exc:
        print(f"thread-fold: {exc}", file=sys.stderr)
        return 2

    logger.debug("loaded %d rows, default view %s", len(rows), settings.default_view.value)

    if args.dump:
        engine = FoldingEngine(RowList(rows), settings.default_view)
        engine.apply_view(settings.default_view)
        for line in visible_lines(engine):
            print(line)
        return 0

    ThreadFoldApp(rows, settings).run()
    return 0


if __name__ == "__main__":
    sys.exit(main())
