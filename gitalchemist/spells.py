"""The spells a formula is made of: each one validates itself and casts its git steps."""

from __future__ import annotations

import re
from abc import ABC, abstractmethod
from collections.abc import Iterator
from dataclasses import dataclass
from typing import NamedTuple

from .errors import InvalidValueError, MissingValueError
from .laboratory import (
    AUTHOR,
    DEFAULT_BRANCH,
    DEFAULT_USER,
    EMAIL,
    LINUX_GIT_CMD,
    WINDOWS_GIT_CMD,
    get_author,
    join_path,
)
from .novice import Assistant
from .options import Options

GIT_COMMIT_DATE_FORMAT = "format:relative:5.hours.ago"

# Go-style \s: ASCII whitespace only.
_SPLIT_FILE_PAIR = re.compile(r"[\t\n\f\r ]*=>[\t\n\f\r ]*")


class _Hint(NamedTuple):
    """A directory and the git arguments to run in it."""

    dir: str
    args: tuple[str, ...]


def _bool_text(value: bool) -> str:
    return "true" if value else "false"


def _progress(opt: Options) -> str:
    return f"{opt.current_spell}/{opt.number_of_spells}"


def _cast_hints(assistant: Assistant, opt: Options, hints: list[_Hint]) -> None:
    for hint in hints:
        assistant.info("%s: %s", _progress(opt), " ".join(hint.args))
        assistant.git(hint.dir, *hint.args)


def _clone_dir(opt: Options) -> str:
    return join_path(opt.repo_dir, opt.clone_to)


class Spell(ABC):
    """A single command of a formula."""

    @abstractmethod
    def validate(self) -> None:
        """Raise an error if a value is missing or invalid."""

    @abstractmethod
    def cast(self, assistant: Assistant, opt: Options) -> None:
        """Execute the spell with the help of the assistant."""


@dataclass(frozen=True)
class InitRepoSpell(Spell):
    """Initialise a bare repository and clone it."""

    bare: str = ""
    clone_to: str = ""

    def validate(self) -> None:
        if not self.bare:
            raise MissingValueError("bare")
        if not self.clone_to:
            raise MissingValueError("clone_to")

    def cast(self, assistant: Assistant, opt: Options) -> None:
        bare_dir = join_path(opt.repo_dir, self.bare)
        assistant.info("%s: make directory %s", _progress(opt), bare_dir)
        assistant.makedir(bare_dir)

        clone_dir = join_path(opt.repo_dir, self.clone_to)
        hints = [
            _Hint(bare_dir, ("init", "--bare", f"--initial-branch={DEFAULT_BRANCH}", ".")),
            _Hint(opt.repo_dir, ("clone", self.bare, self.clone_to)),
            _Hint(clone_dir, ("remote", "set-url", "origin", join_path("..", self.bare))),
            _Hint(clone_dir, ("config", "user.name", AUTHOR[DEFAULT_USER])),
            _Hint(clone_dir, ("config", "user.email", EMAIL[DEFAULT_USER])),
            _Hint(clone_dir, ("config", "init.defaultBranch", DEFAULT_BRANCH)),
        ]
        _cast_hints(assistant, opt, hints)


@dataclass(frozen=True)
class CreateFileSpell(Spell):
    """Copy a file or directory from the task directory into the clone."""

    source: str = ""
    target: str = ""

    def validate(self) -> None:
        if not self.source:
            raise MissingValueError("source")
        if not self.target:
            raise MissingValueError("target")

    def cast(self, assistant: Assistant, opt: Options) -> None:
        src = join_path(opt.cfg_dir, opt.task_dir, self.source)
        dst = join_path(opt.repo_dir, opt.clone_to, self.target)
        assistant.info("%s: copy %s to %s", _progress(opt), src, dst)
        assistant.copy(src, dst)


@dataclass(frozen=True)
class AddSpell(Spell):
    """Add files to the git index."""

    files: tuple[str, ...] = ()

    def __post_init__(self) -> None:
        object.__setattr__(self, "files", tuple(self.files))

    def validate(self) -> None:
        if not self.files:
            raise MissingValueError("files")

    def cast(self, assistant: Assistant, opt: Options) -> None:
        assistant.info("%s: add %d files", _progress(opt), len(self.files))
        directory = _clone_dir(opt)
        for file_name in self.files:
            assistant.git(directory, "add", file_name)


@dataclass(frozen=True)
class CommitSpell(Spell):
    """Commit the index to the repository."""

    message: str = ""
    author: str = ""

    def validate(self) -> None:
        if not self.message:
            raise MissingValueError("message")
        if not self.author:
            raise MissingValueError("author")

    def cast(self, assistant: Assistant, opt: Options) -> None:
        assistant.info("%s: commit", _progress(opt))
        assistant.git(
            _clone_dir(opt),
            "commit",
            f"--date={GIT_COMMIT_DATE_FORMAT}",
            "-m",
            self.message,
            f"--author={get_author(self.author)}",
        )


@dataclass(frozen=True)
class CreateAddCommitSpell(Spell):
    """Copy files, add everything to the index and commit it.

    Each entry of ``files`` has the form ``source => target``.
    """

    files: tuple[str, ...] = ()
    message: str = ""
    author: str = ""

    def __post_init__(self) -> None:
        object.__setattr__(self, "files", tuple(self.files))

    def validate(self) -> None:
        if not self.files:
            raise MissingValueError("files")
        if not self.message:
            raise MissingValueError("message")
        if not self.author:
            raise MissingValueError("author")

        for file_pair in self.files:
            elements = _SPLIT_FILE_PAIR.split(file_pair)
            if len(elements) < 2:
                raise InvalidValueError("files", "missing '=>'")
            if not elements[0]:
                raise InvalidValueError("files", "source missing")
            if not elements[1]:
                raise InvalidValueError("files", "target missing")

    def _spells(self) -> Iterator[Spell]:
        for file_pair in self.files:
            elements = _SPLIT_FILE_PAIR.split(file_pair)
            yield CreateFileSpell(source=elements[0], target=elements[1])
        yield AddSpell(files=(".",))
        yield CommitSpell(message=self.message, author=self.author)

    def cast(self, assistant: Assistant, opt: Options) -> None:
        for spell in self._spells():
            spell.cast(assistant, opt)


@dataclass(frozen=True)
class GitSpell(Spell):
    """Run an arbitrary git command."""

    command: str = ""

    def validate(self) -> None:
        if not self.command:
            raise MissingValueError("command")

    def split_args(self) -> list[str]:
        """Split the command like a shell: double-quoted text may contain spaces.

        A leading git command name is removed.
        """
        args: list[str] = []
        current: list[str] = []
        quoted = False
        for ch in self.command:
            if ch == '"':
                quoted = not quoted
                is_separator = True
            else:
                is_separator = not quoted and ch == " "
            if is_separator:
                if current:
                    args.append("".join(current))
                    current = []
            else:
                current.append(ch)
        if current:
            args.append("".join(current))

        if args and args[0] in (LINUX_GIT_CMD, WINDOWS_GIT_CMD):
            args = args[1:]
        return args

    def cast(self, assistant: Assistant, opt: Options) -> None:
        args = self.split_args()
        assistant.info("%s: %s", _progress(opt), " ".join(args))
        assistant.git(_clone_dir(opt), *args)


@dataclass(frozen=True)
class MergeSpell(Spell):
    """Merge a source branch into a target branch."""

    source: str = ""
    target: str = ""
    delete_source: bool = False

    def validate(self) -> None:
        if not self.source:
            raise MissingValueError("source")
        if not self.target:
            raise MissingValueError("target")

    def cast(self, assistant: Assistant, opt: Options) -> None:
        directory = _clone_dir(opt)
        assistant.info(
            "%s: merge %s with %s  (delete: %s)",
            _progress(opt),
            self.source,
            self.target,
            _bool_text(self.delete_source),
        )
        hints = [
            _Hint(directory, ("checkout", self.target)),
            _Hint(directory, ("merge", self.source)),
        ]
        if self.delete_source:
            hints.append(_Hint(directory, ("branch", "-d", self.source)))
        _cast_hints(assistant, opt, hints)


@dataclass(frozen=True)
class MoveSpell(Spell):
    """Move a file in the clone with git mv."""

    source: str = ""
    target: str = ""

    def validate(self) -> None:
        if not self.source:
            raise MissingValueError("source")
        if not self.target:
            raise MissingValueError("target")

    def cast(self, assistant: Assistant, opt: Options) -> None:
        assistant.info("%s: mv %s %s", _progress(opt), self.source, self.target)
        assistant.git(_clone_dir(opt), "mv", self.source, self.target)


@dataclass(frozen=True)
class PushSpell(Spell):
    """Push the main branch to the remote when ``main`` is set."""

    main: bool = False

    def validate(self) -> None:
        return None

    def cast(self, assistant: Assistant, opt: Options) -> None:
        assistant.info("%s: push (%s)", _progress(opt), _bool_text(self.main))
        if self.main:
            assistant.git(_clone_dir(opt), "push", "origin", "main")


@dataclass(frozen=True)
class RemoveAndCommitSpell(Spell):
    """Remove files with git rm and commit the result."""

    files: tuple[str, ...] = ()
    message: str = ""
    author: str = ""

    def __post_init__(self) -> None:
        object.__setattr__(self, "files", tuple(self.files))

    def validate(self) -> None:
        if not self.files:
            raise MissingValueError("files")
        if not self.message:
            raise MissingValueError("message")
        if not self.author:
            raise MissingValueError("author")

    def cast(self, assistant: Assistant, opt: Options) -> None:
        directory = _clone_dir(opt)
        assistant.info(
            "%s: remove and commit %d files", _progress(opt), len(self.files)
        )
        _cast_hints(
            assistant, opt, [_Hint(directory, ("rm", name)) for name in self.files]
        )
        CommitSpell(message=self.message, author=self.author).cast(assistant, opt)