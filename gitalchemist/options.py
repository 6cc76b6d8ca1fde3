"""Settings for executing a formula."""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class Options:
    """Options given to the execution of the spells.

    The last four fields are filled in while a formula is processed.
    """

    task_dir: str = ""
    repo_dir: str = ""
    cfg_dir: str = ""
    verbose: bool = False
    test: bool = False
    execute_spells: int = 0

    task_name: str = ""
    clone_to: str = ""
    number_of_spells: int = 0
    current_spell: int = 0