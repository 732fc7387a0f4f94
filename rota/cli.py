"""Command-line front door for rota.

Loads config, sets up logging, and dispatches into the interactive browser.
The browser always starts in the current working directory.
"""

from __future__ import annotations

import argparse
import logging
import termios

from . import __version__
from .config import load_browser_config
from .logs import configure_logging
from .runtime import run_browser

logger = logging.getLogger(__name__)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="rota",
        description="Browse the current directory in a read-only terminal view.",
    )
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    return parser


def main(argv: list[str] | None = None) -> None:
    """Run the browser; exit non-zero when the session cannot start or end cleanly."""
    build_parser().parse_args(argv)
    config = load_browser_config()
    configure_logging(config)
    try:
        run_browser(config)
    except (OSError, termios.error) as exc:
        logger.error("browser session failed: %s", exc)
        raise SystemExit(f"rota: {exc}") from exc


if __name__ == "__main__":
    main()
