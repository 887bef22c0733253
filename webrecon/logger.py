"""Coloured console logging and simple file logging."""

from __future__ import annotations

import logging
import os
import sys
from datetime import datetime
from typing import Any

from termcolor import colored


def _format(message: str, args: tuple[Any, ...]) -> str:
    return message % args if args else message


class Logger:
    """Prints tagged, coloured messages to standard output."""

    def __init__(self, verbose: bool = False) -> None:
        self.verbose = verbose

    def _emit(self, tag: str, color: str, message: str, args: tuple[Any, ...]) -> None:
        print(colored(f"[{tag}] {_format(message, args)}", color))

    def info(self, message: str, *args: Any) -> None:
        """Print an informational message."""
        self._emit("INFO", "cyan", message, args)

    def success(self, message: str, *args: Any) -> None:
        """Print a success message."""
        self._emit("SUCCESS", "green", message, args)

    def warning(self, message: str, *args: Any) -> None:
        """Print a warning."""
        self._emit("WARNING", "yellow", message, args)

    def error(self, message: str, *args: Any) -> None:
        """Print an error."""
        self._emit("ERROR", "red", message, args)

    def debug(self, message: str, *args: Any) -> None:
        """Print a debug message when verbose."""
        if self.verbose:
            self._emit("DEBUG", "magenta", message, args)

    def fatal(self, message: str, *args: Any) -> None:
        """Print a fatal error and exit with status 1."""
        self._emit("FATAL", "red", message, args)
        raise SystemExit(1)

    def log_to_file(self, file: str | os.PathLike[str], message: str, *args: Any) -> None:
        """Append a timestamped line to a file."""
        timestamp = datetime.now().strftime("%Y-%m-%d %H:%M:%S")
        with open(file, "a", encoding="utf-8") as handle:
            handle.write(f"[{timestamp}] {_format(message, args)}\n")


def setup_file_logger(file: str | os.PathLike[str]) -> logging.Logger:
    """Return a logger appending timestamped lines to the file; exit if it cannot be opened."""
    try:
        handler = logging.FileHandler(file, mode="a", encoding="utf-8")
    except OSError as exc:
        print(f"Failed to open log file: {exc}", file=sys.stderr)
        raise SystemExit(1) from exc

    handler.setFormatter(
        logging.Formatter("%(asctime)s %(message)s", datefmt="%Y/%m/%d %H:%M:%S")
    )
    logger = logging.getLogger(f"webrecon.file:{os.path.abspath(file)}")
    for old in list(logger.handlers):
        logger.removeHandler(old)
        old.close()
    logger.addHandler(handler)
    logger.setLevel(logging.DEBUG)
    logger.propagate = False
    return logger