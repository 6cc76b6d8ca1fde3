"""Reading formula files and transmuting them into git repositories."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field, replace
from typing import IO, Any

import yaml

from .errors import AlchemistError, AlchemistIOError, YamlDecodeError
from .novice import Assistant, Novice
from .options import Options
from .spells import (
    AddSpell,
    CommitSpell,
    CreateAddCommitSpell,
    CreateFileSpell,
    GitSpell,
    InitRepoSpell,
    MergeSpell,
    MoveSpell,
    PushSpell,
    RemoveAndCommitSpell,
    Spell,
)

SYMBOL_INIT = "init_bare_repo"

_STR, _BOOL, _LIST = "str", "bool", "list"

# Each symbol: the spell class and the kind of every field it reads.
_SYMBOLS: dict[str, tuple[type, dict[str, str]]] = {
    SYMBOL_INIT: (InitRepoSpell, {"bare": _STR, "clone_to": _STR}),
    "create_file": (CreateFileSpell, {"source": _STR, "target": _STR}),
    "add": (AddSpell, {"files": _LIST}),
    "commit": (CommitSpell, {"message": _STR, "author": _STR}),
    "git": (GitSpell, {"command": _STR}),
    "create_add_commit": (
        CreateAddCommitSpell,
        {"files": _LIST, "message": _STR, "author": _STR},
    ),
    "merge": (MergeSpell, {"source": _STR, "target": _STR, "delete_source": _BOOL}),
    "push": (PushSpell, {"main": _BOOL}),
    "mv": (MoveSpell, {"source": _STR, "target": _STR}),
    "remove_and_commit": (
        RemoveAndCommitSpell,
        {"files": _LIST, "message": _STR, "author": _STR},
    ),
}


class _SpellValidationError(AlchemistError):
    """A spell in a formula failed validation; the cause holds the reason."""


@dataclass
class Symbols:
    """The spells of a formula and the clone directory they work in."""

    clone_to: str = ""
    spells: list[Spell] = field(default_factory=list)


@dataclass
class Formula:
    """The content of a formula file."""

    title: str = ""
    commands: Symbols = field(default_factory=Symbols)


def _scalar_text(value: Any) -> str:
    if value is None:
        return ""
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, (str, int, float)):
        return str(value)
    raise ValueError(f"cannot unmarshal {type(value).__name__} into string")


def _decode_value(kind: str, value: Any) -> Any:
    if kind == _STR:
        return _scalar_text(value)
    if kind == _BOOL:
        if not isinstance(value, bool):
            raise ValueError(f"cannot unmarshal {value!r} into bool")
        return value
    if not isinstance(value, list):
        raise ValueError(f"cannot unmarshal {type(value).__name__} into list")
    return tuple(_scalar_text(item) for item in value)


def _decode_spell(cls: type, kinds: dict[str, str], content: Any) -> Spell:
    try:
        if content is None:
            content = {}
        if not isinstance(content, dict):
            raise ValueError(
                f"yaml: unmarshal errors: cannot unmarshal "
                f"{type(content).__name__} into {cls.__name__}"
            )
        values = {
            key: _decode_value(kind, content[key])
            for key, kind in kinds.items()
            if key in content and content[key] is not None
        }
    except ValueError as err:
        raise YamlDecodeError(f"node {cls.__name__}", err) from err
    return cls(**values)


def parse_commands(nodes: Any) -> Symbols:
    """Turn the command list of a formula into validated spells."""
    symbols = Symbols()
    if nodes is None:
        return symbols
    if not isinstance(nodes, list):
        raise YamlDecodeError(
            "", ValueError(f"cannot unmarshal {type(nodes).__name__} into commands")
        )

    for number, node in enumerate(nodes, start=1):
        if not isinstance(node, dict) or not node:
            raise YamlDecodeError("", ValueError(f"yaml node too small: {node!r}"))
        cmd, content = next(iter(node.items()))
        try:
            cls, kinds = _SYMBOLS[cmd]
        except (KeyError, TypeError):
            raise AlchemistError(f'unkonwn command "{cmd}"') from None

        spell = _decode_spell(cls, kinds, content)
        if isinstance(spell, InitRepoSpell):
            symbols.clone_to = spell.clone_to

        try:
            spell.validate()
        except AlchemistError as err:
            raise _SpellValidationError(f"validate {cmd} ({number}): {err}") from err

        symbols.spells.append(spell)
    return symbols


def _decode_formula(data: Any) -> Formula:
    if data is None:
        raise AlchemistError("EOF")
    if not isinstance(data, dict):
        raise AlchemistError(
            f"yaml: unmarshal errors: cannot unmarshal {type(data).__name__} into Formula"
        )
    return Formula(
        title=_scalar_text(data.get("title")),
        commands=parse_commands(data.get("commands")),
    )


def read_formula(stream: IO[str] | str) -> Formula:
    """Decode a formula from YAML text or a text stream."""
    try:
        data = yaml.safe_load(stream)
    except yaml.YAMLError as err:
        raise YamlDecodeError("Formula", err) from err
    try:
        return _decode_formula(data)
    except (AlchemistError, ValueError) as err:
        raise YamlDecodeError("Formula", err) from err


def read(filename: str) -> Formula:
    """Read the formula file."""
    try:
        handle = open(filename, encoding="utf-8")
    except OSError as err:
        raise AlchemistIOError("open", filename, err) from err
    with handle:
        return read_formula(handle)


def transmute(formula: Formula, opt: Options, logger: logging.Logger | None) -> None:
    """Cast the spells of the formula, honouring test mode and the step limit."""
    from .adept import Adept

    helper: Assistant = Novice(logger, opt) if opt.test else Adept(logger, opt)
    helper.info("execute formula %s", formula.title)

    opt = replace(
        opt,
        clone_to=formula.commands.clone_to,
        task_name=formula.title,
        number_of_spells=len(formula.commands.spells),
    )
    for index, spell in enumerate(formula.commands.spells):
        if opt.execute_spells > 0 and opt.execute_spells == index:
            return
        spell.cast(helper, replace(opt, current_spell=index + 1))