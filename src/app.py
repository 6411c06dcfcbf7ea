from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path

from PySide6.QtWidgets import QApplication

from src.core.app_logging import configure_logging, set_debug_logging
from src.core.config import SettingsStore
from src.ui.main_window import MainWindow


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="paste-transform",
        description="Paste clipboard text through ordered regex replacement rules.",
    )
    parser.add_argument(
        "--settings",
        type=Path,
        default=None,
        help="settings file to load and save (default: settings.json next to the app)",
    )
    parser.add_argument(
        "--debug",
        action="store_true",
        help="turn debug mode on for this run and save it",
    )
    return parser


def main(argv: list[str] | None = None) -> int:
    args, qt_args = build_parser().parse_known_args(argv)
    log_file = configure_logging()
    logger = logging.getLogger("paste_transform.app")

    store = SettingsStore(args.settings) if args.settings else SettingsStore.default()
    settings = store.load()
    if args.debug and not settings.debug_mode:
        settings.debug_mode = True
        store.save(settings)
    set_debug_logging(settings.debug_mode)
    logger.info(
        "Startup. settings=%s log=%s rules=%s debug=%s",
        store.path,
        log_file,
        settings.effective_rule_count,
        settings.debug_mode,
    )

    app = QApplication([sys.argv[0], *qt_args])
    window = MainWindow(store, settings)
    window.show()
    exit_code = app.exec()
    logger.info("Application exiting with code %s", exit_code)
    return exit_code


if __name__ == "__main__":
    raise SystemExit(main())
