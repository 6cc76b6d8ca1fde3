"""The assistant interface and the assistant that only reports steps."""

from __future__ import annotations

import logging
from abc import ABC, abstractmethod

from .logger import MortalLogger
from .options import Options

_ESCAPES = {
    "\a": "\\a",
    "\b": "\\b",
    "\f": "\\f",
    "\n": "\\n",
    "\r": "\\r",
    "\t": "\\t",
    "\v": "\\v",
    '"': '\\"',
    "\\": "\\\\",
}


def _quote(text: str) -> str:
    """Quote text as a double-quoted string literal with escapes."""
    pieces = ['"']
    for ch in text:
        if ch in _ESCAPES:
            pieces.append(_ESCAPES[ch])
        elif ch.isprintable():
            pieces.append(ch)
        else:
            code = ord(ch)
            if code < 0x80:
                pieces.append(f"\\x{code:02x}")
            elif code < 0x10000:
                pieces.append(f"\\u{code:04x}")
            else:
                pieces.append(f"\\U{code:08x}")
    pieces.append('"')
    return "".join(pieces)


def _string_list(items: tuple[str, ...]) -> str:
    """Render a list of strings the way the step log shows it."""
    if not items:
        return "[]string(nil)"
    return "[]string{" + ", ".join(_quote(item) for item in items) + "}"


class Assistant(ABC):
    """Executes the low-level commands that spells are made of."""

    @abstractmethod
    def git(self, dir: str, *args: str) -> None:
        """Run a git command in the given directory."""

    @abstractmethod
    def copy(self, src: str, dst: str) -> None:
        """Copy a file or directory."""

    @abstractmethod
    def makedir(self, dir: str) -> None:
        """Create a directory with all missing parents."""

    @abstractmethod
    def debug(self, msg: str, *args: object) -> None:
        """Emit a debug message."""

    @abstractmethod
    def info(self, msg: str, *args: object) -> None:
        """Emit an info message."""


class Novice(Assistant):
    """An assistant that only logs the steps at debug level; used in test mode."""

    def __init__(self, logger: logging.Logger | None, opt: Options) -> None:
        self._log = MortalLogger(logger, opt.verbose)

    def debug(self, msg: str, *args: object) -> None:
        self._log.debug(msg, *args)

    def info(self, msg: str, *args: object) -> None:
        self._log.info(msg, *args)

    def git(self, dir: str, *args: str) -> None:
        self.debug("%s: git %s", _quote(dir), _string_list(args))

    def copy(self, src: str, dst: str) -> None:
        self.debug("copy %s to %s", _quote(src), _quote(dst))

    def makedir(self, dir: str) -> None:
        self.debug("makedir %s", _quote(dir))