"""Locating formula files in the configuration directory."""

from __future__ import annotations

import os

from .errors import AlchemistIOError
from .laboratory import FORMULA_FILE_NAME, join_path


def list_pages(cfgdir: str, *args: str) -> list[str]:
    """Return the formula file of each named task directory.

    Raises AlchemistIOError if a formula file cannot be accessed.
    """
    result = []
    for task in args:
        file_name = join_path(cfgdir, task, FORMULA_FILE_NAME)
        try:
            os.stat(file_name)
        except OSError as err:
            raise AlchemistIOError("stat", file_name, err) from err
        result.append(file_name)
    return result


def list_book_content(cfgdir: str) -> list[str]:
    """Return the formula files of all subdirectories of cfgdir.

    Subdirectories without a formula file are left out. Raises
    AlchemistIOError if the directories cannot be read.
    """
    try:
        with os.scandir(cfgdir) as scanned:
            entries = sorted(scanned, key=lambda entry: entry.name)
    except OSError as err:
        raise AlchemistIOError("read dir", cfgdir, err) from err

    result = []
    for entry in entries:
        if not entry.is_dir(follow_symlinks=False):
            continue
        try:
            result.extend(list_pages(cfgdir, entry.name))
        except AlchemistIOError as err:
            if not isinstance(err.err, FileNotFoundError):
                raise
    return result