"""Human readable logging with an optional debug level."""

from __future__ import annotations

import logging


class MortalLogger:
    """Writes ``[INFO]`` and ``[DEBUG]`` lines to a standard logger.

    Without a logger every call is a no-op. Debug lines appear only in
    verbose mode.
    """

    def __init__(self, logger: logging.Logger | None = None, verbose: bool = False) -> None:
        self.logger = logger
        self.verbose = verbose

    @staticmethod
    def _format(msg: str, args: tuple) -> str:
        return msg % args if args else msg

    def debug(self, msg: str, *args: object) -> None:
        """Log a debug message if verbose mode is on."""
        if self.logger is None or not self.verbose:
            return
        self.logger.debug("[DEBUG] %s", self._format(msg, args))

    def info(self, msg: str, *args: object) -> None:
        """Log an info message."""
        if self.logger is None:
            return
        self.logger.info("[INFO] %s", self._format(msg, args))