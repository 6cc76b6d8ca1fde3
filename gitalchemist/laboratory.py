"""Shared constants: dummy git identities, file names and command names."""

from __future__ import annotations

import os

EMAIL: dict[str, str] = {
    "red": "red@example.com",
    "blue": "blue@example.com",
    "green": "green@example.com",
    "api": "api@example.com",
    "blacklist": "blacklist@example.com",
    "config": "config@example.com",
}

AUTHOR: dict[str, str] = {
    "red": "Richard Red",
    "blue": "Betty Blue",
    "green": "Garry Green",
    "api": "Alissa Api",
    "blacklist": "Benjamin Blacklist",
    "config": "Carry Config",
}

DEFAULT_USER = "red"
FORMULA_FILE_NAME = "gitalchemist.yaml"
DIR_MODE = 0o755
DEFAULT_BRANCH = "main"

LINUX_GIT_CMD = "git"
WINDOWS_GIT_CMD = "git.exe"
GIT_CMD = WINDOWS_GIT_CMD if os.name == "nt" else LINUX_GIT_CMD


def get_author(name: str) -> str:
    """Return the known author with mail address, or the name unchanged."""
    try:
        author = AUTHOR[name]
    except KeyError:
        return name
    return f"{author} <{EMAIL[name]}>"


def join_path(*parts: str) -> str:
    """Join path elements, ignoring empty ones, and normalise the result."""
    present = [part for part in parts if part]
    if not present:
        return ""
    return os.path.normpath(os.path.join(*present))