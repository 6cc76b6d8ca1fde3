"""The assistant that really executes git and file system commands."""

from __future__ import annotations

import logging
import os
import subprocess

from .errors import AlchemistIOError, ExecError
from .laboratory import DIR_MODE, GIT_CMD
from .novice import Novice
from .options import Options

_CHUNK_SIZE = 1 << 16


def _base(path: str) -> str:
    """Return the last element of a path, ignoring trailing separators."""
    return os.path.basename(os.path.normpath(path))


def examine_target(dst: str) -> tuple[bool, bool]:
    """Return whether the copy target exists and whether it is or should be a directory."""
    try:
        is_dir = os.path.isdir(dst) if os.path.exists(dst) else None
        if is_dir is None:
            os.stat(dst)
    except FileNotFoundError:
        return False, dst.endswith(os.sep)
    except OSError as err:
        raise AlchemistIOError("stat", dst, err) from err
    return True, is_dir


def examine(src: str, dst: str) -> tuple[str, str, bool]:
    """Work out the real copy target.

    Returns the new target, a directory to create (possibly empty) and
    whether the copy is recursive.
    """
    try:
        os.stat(src)
    except OSError as err:
        raise AlchemistIOError("stat", src, err) from err
    src_is_dir = os.path.isdir(src)

    target_exists, target_is_dir = examine_target(dst)
    target = os.path.normpath(dst)

    if src_is_dir:
        if target_exists:
            target = os.path.join(target, _base(src))
        return target, target, True

    directory = ""
    if not target_exists:
        directory = target if target_is_dir else (os.path.dirname(target) or ".")
    if target_is_dir:
        return os.path.join(target, _base(src)), directory, False
    return target, directory, False


class Adept(Novice):
    """An assistant that executes every step and logs it like the novice."""

    def __init__(
        self, logger: logging.Logger | None, opt: Options, exe: str = GIT_CMD
    ) -> None:
        super().__init__(logger, opt)
        self.exe = exe

    def git(self, dir: str, *args: str) -> None:
        """Run git with the arguments in the directory; output goes to debug."""
        super().git(dir, *args)
        try:
            completed = subprocess.run(
                [self.exe, *args],
                cwd=dir or None,
                stdout=subprocess.PIPE,
                stderr=subprocess.STDOUT,
                check=False,
            )
        except OSError as err:
            raise ExecError(GIT_CMD, args, err) from err

        output = completed.stdout.decode("utf-8", errors="replace")
        for line in output.split("\n"):
            if line:
                self.debug("%s", line)

        if completed.returncode != 0:
            raise ExecError(GIT_CMD, args, f"exit status {completed.returncode}")

    def makedir(self, dir: str) -> None:
        """Create the directory and all missing parents."""
        super().makedir(dir)
        try:
            os.makedirs(dir, DIR_MODE, exist_ok=True)
        except OSError as err:
            raise AlchemistIOError("make dir", dir, err) from err

    def copy(self, src: str, dst: str) -> None:
        """Copy a file or, recursively, a directory."""
        super().copy(src, dst)
        target, directory, recursive = examine(src, dst)
        if directory:
            self.makedir(directory)

        if not recursive:
            self.copy_file(src, target)
            return

        def _walk_error(err: OSError) -> None:
            raise AlchemistIOError("WalkDirFunc", err.filename or src, err) from err

        for root, dirs, files in os.walk(src, onerror=_walk_error):
            dirs.sort()
            for name in sorted(files):
                path = os.path.join(root, name)
                real_target = os.path.join(target, os.path.relpath(path, src))
                parent = os.path.dirname(real_target)
                try:
                    os.makedirs(parent, DIR_MODE, exist_ok=True)
                except OSError as err:
                    raise AlchemistIOError("make dir", parent, err) from err
                self.copy_file(path, real_target)

    def copy_file(self, src: str, dst: str) -> None:
        """Copy a single file; the target directory must exist."""
        try:
            fd = os.open(src, os.O_RDONLY | getattr(os, "O_BINARY", 0))
        except OSError as err:
            raise AlchemistIOError("open", src, err) from err
        try:
            try:
                target = open(dst, "wb")
            except OSError as err:
                raise AlchemistIOError("create", dst, err) from err
            with target:
                try:
                    while chunk := os.read(fd, _CHUNK_SIZE):
                        target.write(chunk)
                except OSError as err:
                    raise AlchemistIOError("copy", f"{src} - {dst}", err) from err
        finally:
            os.close(fd)