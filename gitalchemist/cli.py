"""Command line entry point: parse options and execute formulas."""

from __future__ import annotations

import logging
import os
import shutil
import sys
from collections.abc import Callable
from dataclasses import dataclass, field
from importlib.metadata import PackageNotFoundError, version
from typing import TextIO

from .book import list_book_content, list_pages
from .errors import (
    AlchemistError,
    AlchemistIOError,
    ExecError,
    InvalidValueError,
    MissingValueError,
    YamlDecodeError,
)
from .formula import Formula, read, transmute
from .laboratory import FORMULA_FILE_NAME
from .options import Options

DEFAULT_CWD = "cwd"

TransmuteFunc = Callable[[Formula, Options, "logging.Logger | None"], None]


class UsageError(Exception):
    """The command line could not be parsed."""


class HelpRequested(UsageError):
    """Help was asked for with -h or -help."""

    def __init__(self) -> None:
        super().__init__("flag: help requested")


@dataclass
class CliOptions:
    """Settings from the command line."""

    targetdir: str = ""
    cfg_dir: str = ""
    verbose: bool = False
    test: bool = False
    task_list: list[str] = field(default_factory=list)
    max_steps: int = 0
    run_all: bool = False
    clean: bool = False
    version: bool = False


@dataclass
class _Flag:
    name: str
    kind: type
    default: object
    usage: str


def _quote(text: str) -> str:
    return '"' + text.replace("\\", "\\\\").replace('"', '\\"') + '"'


def _parse_bool(text: str) -> bool:
    if text in ("1", "t", "T", "TRUE", "true", "True"):
        return True
    if text in ("0", "f", "F", "FALSE", "false", "False"):
        return False
    raise ValueError(text)


def _defaults(flags: dict[str, _Flag]) -> str:
    lines = []
    for name in sorted(flags):
        flag = flags[name]
        line = f"  -{name}"
        if flag.kind is str:
            line += " string"
        elif flag.kind is int:
            line += " int"
        line += " " if len(name) <= 1 else "\n    \t"
        line += flag.usage.replace("\n", "\n    \t")
        if flag.kind is str and flag.default:
            line += f" (default {_quote(flag.default)})"
        elif flag.kind is int and flag.default:
            line += f" (default {flag.default})"
        lines.append(line + "\n")
    return "".join(lines)


def get_options(
    args: list[str], getenv: Callable[[str], str], stderr: TextIO
) -> CliOptions:
    """Parse the command line; raises UsageError or HelpRequested."""
    prog = args[0]
    flags = {
        "targetdir": _Flag(
            "targetdir",
            str,
            getenv("GITALCHEMIST_TARGETDIR") or DEFAULT_CWD,
            "base directory for generated git repos (default: $GITALCHEMIST_TARGETDIR)",
        ),
        "cfgdir": _Flag(
            "cfgdir",
            str,
            getenv("GITALCHEMIST_CFGDIR"),
            "base directory for git alchemy recipes (default: $GITALCHEMIST_CFGDIR)",
        ),
        "maxsteps": _Flag(
            "maxsteps", int, 0, "execute only number of specified steps\n0 executes all steps"
        ),
        "verbose": _Flag("verbose", bool, False, "verbose messages"),
        "test": _Flag("test", bool, False, "test run, steps are logged but not executed"),
        "runall": _Flag("runall", bool, False, "run all recipes"),
        "clean": _Flag("clean", bool, False, "remove targetdir"),
        "version": _Flag("version", bool, False, "show version"),
    }
    values = {name: flag.default for name, flag in flags.items()}

    def usage() -> None:
        stderr.write(
            f"usage: {prog} <path/to/dir> [ path/to/dir ... ]]\n"
            f"usage: {prog} -runall\n"
            f"usage: {prog} -clean\n\n"
            f"The directories must contain a definition file named "
            f"{_quote(FORMULA_FILE_NAME)} \n"
            "and all the files that are used in the definition.\n\n"
        )
        stderr.write(f"usage of {prog}:\n")
        stderr.write(_defaults(flags))

    def fail(message: str) -> UsageError:
        stderr.write(message + "\n")
        usage()
        return UsageError(message)

    rest = list(args[1:])
    while rest:
        arg = rest[0]
        if len(arg) < 2 or arg[0] != "-":
            break
        minus = 2 if arg[1] == "-" else 1
        if minus == 2 and len(arg) == 2:
            rest.pop(0)
            break
        name = arg[minus:]
        if not name or name[0] in "-=":
            raise fail(f"bad flag syntax: {arg}")
        rest.pop(0)
        name, has_value, value = name.partition("=")

        flag = flags.get(name)
        if flag is None:
            if name in ("help", "h"):
                usage()
                raise HelpRequested()
            raise fail(f"flag provided but not defined: -{name}")

        if flag.kind is bool:
            if has_value:
                try:
                    values[name] = _parse_bool(value)
                except ValueError:
                    raise fail(
                        f'invalid boolean value "{value}" for -{name}: parse error'
                    ) from None
            else:
                values[name] = True
            continue

        if not has_value:
            if not rest:
                raise fail(f"flag needs an argument: -{name}")
            value = rest.pop(0)
        if flag.kind is int:
            try:
                values[name] = int(value, 0)
            except ValueError:
                raise fail(
                    f'invalid value "{value}" for flag -{name}: parse error'
                ) from None
        else:
            values[name] = value

    chosen = sum([bool(values["clean"]), bool(values["runall"]), bool(rest)])
    if chosen != 1 and not values["version"]:
        usage()
        raise UsageError("specify a task, runall, or clean")

    return CliOptions(
        targetdir=values["targetdir"],
        cfg_dir=values["cfgdir"],
        verbose=values["verbose"],
        test=values["test"],
        task_list=rest,
        max_steps=values["maxsteps"],
        run_all=values["runall"],
        clean=values["clean"],
        version=values["version"],
    )


def _relative(base: str, target: str) -> str:
    base = base or "."
    if os.path.isabs(base) != os.path.isabs(target):
        raise AlchemistError(f"Rel: can't make {target} relative to {base}")
    return os.path.relpath(target, base)


def run_one_task(
    fn: TransmuteFunc, file: str, opt: Options, logger: logging.Logger | None
) -> None:
    """Read one formula file and transmute it."""
    formula = read(file)
    task_dir = _relative(opt.cfg_dir, os.path.dirname(file) or ".")
    fn(formula, Options(**{**vars(opt), "task_dir": task_dir}), logger)


def run_task_list(
    fn: TransmuteFunc,
    file_list: list[str],
    opt: Options,
    logger: logging.Logger | None,
) -> None:
    """Run every formula in the list, stopping at the first error."""
    for file in file_list:
        run_one_task(fn, file, opt, logger)


def run(opt: CliOptions) -> None:
    """Execute the program for the parsed options."""
    logger = logging.getLogger("gitalchemist")
    if opt.clean:
        logger.info("[INFO] remove %s", opt.targetdir)
        if os.path.lexists(opt.targetdir):
            if os.path.isdir(opt.targetdir) and not os.path.islink(opt.targetdir):
                shutil.rmtree(opt.targetdir)
            else:
                os.remove(opt.targetdir)
        return

    alchemist_opt = Options(
        repo_dir=opt.targetdir,
        cfg_dir=opt.cfg_dir,
        verbose=opt.verbose,
        test=opt.test,
        execute_spells=opt.max_steps,
    )
    if opt.run_all:
        file_list = list_book_content(alchemist_opt.cfg_dir)
    else:
        file_list = list_pages(alchemist_opt.cfg_dir, *opt.task_list)
    run_task_list(transmute, file_list, alchemist_opt, logger)


def _error_chain(err: BaseException) -> list[BaseException]:
    chain: list[BaseException] = []
    current: object = err
    while isinstance(current, BaseException) and current not in chain:
        chain.append(current)
        current = current.__cause__ or getattr(current, "err", None)
    return chain


_EXIT_CODES = (
    (MissingValueError, 2),
    (InvalidValueError, 3),
    (YamlDecodeError, 4),
    (ExecError, 5),
    (AlchemistIOError, 6),
)


def _exit_code(err: BaseException) -> int:
    chain = _error_chain(err)
    for kind, code in _EXIT_CODES:
        if any(isinstance(item, kind) for item in chain):
            return code
    return 42


def _program_version() -> str:
    try:
        return version("gitalchemist")
    except PackageNotFoundError:
        return ""


def _configure_logging() -> logging.Logger:
    logger = logging.getLogger("gitalchemist")
    if not logger.handlers:
        handler = logging.StreamHandler(sys.stderr)
        handler.setFormatter(
            logging.Formatter("%(asctime)s %(message)s", "%Y/%m/%d %H:%M:%S")
        )
        logger.addHandler(handler)
    logger.setLevel(logging.DEBUG)
    logger.propagate = False
    return logger


def main(argv: list[str] | None = None) -> int:
    """Run the command line program and return its exit status."""
    args = list(sys.argv) if argv is None else ["gitalchemist", *argv]
    try:
        opt = get_options(args, lambda name: os.environ.get(name, ""), sys.stderr)
    except HelpRequested:
        return 1
    except UsageError as err:
        sys.stderr.write(f"{err}\n")
        return 1

    if opt.version:
        print(_program_version())
        return 0

    logger = _configure_logging()
    try:
        run(opt)
    except Exception as err:  # every failure maps to an exit status
        logger.error("[ERROR] %s", err)
        return _exit_code(err)
    logger.info("[INFO] ok")
    return 0