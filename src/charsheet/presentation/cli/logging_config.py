"""Logging setup for the editor session."""
from __future__ import annotations

import logging
import logging.handlers
from pathlib import Path

from rich.console import Console
from rich.logging import RichHandler

LOG_FILENAME = "charsheet.log"


def setup_logging(log_dir: Path | str, *, verbose: bool = False) -> logging.Logger:
    """
    Configure logging for the application.

    Args:
        log_dir: Directory for the rotating log file.
        verbose: Log DEBUG records to the file instead of INFO.

    Returns:
        The package logger.
    """
    log_path = Path(log_dir)
    file_format = logging.Formatter(
        "%(asctime)s - %(levelname)s - %(name)s:%(lineno)d - %(message)s"
    )

    root_logger = logging.getLogger()
    root_logger.setLevel(logging.DEBUG if verbose else logging.INFO)

    try:
        log_path.mkdir(parents=True, exist_ok=True)
        file_handler = logging.handlers.RotatingFileHandler(
            log_path / LOG_FILENAME,
            maxBytes=5_242_880,  # 5MB
            backupCount=3,
            encoding="utf-8",
        )
    except OSError:
        file_handler = None
    if file_handler is not None:
        file_handler.setFormatter(file_format)
        root_logger.addHandler(file_handler)

    # Only warnings reach the terminal; the editor screen owns stdout.
    console_handler = RichHandler(
        console=Console(stderr=True),
        show_time=False,
        show_path=False,
        markup=False,
    )
    console_handler.setLevel(logging.WARNING)
    root_logger.addHandler(console_handler)

    return logging.getLogger("charsheet")
