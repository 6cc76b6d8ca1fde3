"""Exceptions raised while reading and executing formulas."""

from __future__ import annotations

from collections.abc import Iterable


class AlchemistError(Exception):
    """Base class of all errors raised by the package."""


class MissingValueError(AlchemistError):
    """A required value is missing from a formula definition."""

    def __init__(self, variable: str) -> None:
        self.variable = variable
        super().__init__(f"value for {variable} is missing")

    def __eq__(self, other: object) -> bool:
        if type(other) is not type(self):
            return NotImplemented
        return self.variable == other.variable

    def __hash__(self) -> int:
        return hash((type(self), self.variable))


class InvalidValueError(AlchemistError):
    """A value in a formula definition is not usable."""

    def __init__(self, variable: str, reason: str) -> None:
        self.variable = variable
        self.reason = reason
        super().__init__(f"value for {variable}: {reason}")

    def __eq__(self, other: object) -> bool:
        if type(other) is not type(self):
            return NotImplemented
        return (self.variable, self.reason) == (other.variable, other.reason)

    def __hash__(self) -> int:
        return hash((type(self), self.variable, self.reason))


class YamlDecodeError(AlchemistError):
    """Decoding the YAML of a formula failed."""

    def __init__(self, element: str, err: BaseException) -> None:
        self.element = element
        self.err = err
        super().__init__(f"yaml decode {element}: {err}")


class ExecError(AlchemistError):
    """Running an external command failed."""

    def __init__(
        self,
        cmd: str,
        args: Iterable[str] = (),
        err: BaseException | str | None = None,
    ) -> None:
        self.cmd = cmd
        self.command_args = list(args)
        self.err = err
        super().__init__(self._describe())

    def _describe(self) -> str:
        result = f"{self.cmd} " if self.cmd else ""
        if self.command_args:
            result += " ".join(self.command_args)
        if self.cmd:
            result += ": "
        return result + ("" if self.err is None else str(self.err))


class AlchemistIOError(AlchemistError):
    """A file system operation failed."""

    def __init__(self, cmd: str, arg: str, err: BaseException) -> None:
        self.cmd = cmd
        self.arg = arg
        self.err = err
        super().__init__(f"{cmd}: {err}")