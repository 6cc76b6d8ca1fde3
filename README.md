# gitalchemist

gitalchemist builds git repositories from short YAML recipes called
*formulas*. A formula lists steps: create a bare repository and clone
it, copy files in, add, commit, merge, move, remove, push, or run any
git command. It is meant for preparing reproducible example
repositories, for instance for git training.

## Installation

```
pip install .
```

Executing formulas runs the `git` executable (`git.exe` on Windows),
which must be on the `PATH`. Test mode (`-test`) does not need it.

## Usage

Each task is a directory under the configuration directory. It holds a
file named `gitalchemist.yaml` and every file the formula refers to.

```
gitalchemist -cfgdir recipes basic_workflow cmd_merge
gitalchemist -cfgdir recipes -runall
gitalchemist -clean
gitalchemist -version
```

Exactly one of a task list, `-runall` or `-clean` must be given
(`-version` may stand alone). Tasks run in the order given and
processing stops at the first error. `-runall` runs every subdirectory
of the configuration directory that contains a `gitalchemist.yaml`, in
name order; subdirectories without one are skipped.

Options (one or two leading dashes; values as `-flag value` or
`-flag=value`):

- `-targetdir DIR` – base directory for the generated repositories
  (default: `$GITALCHEMIST_TARGETDIR`, or `cwd` if that is unset)
- `-cfgdir DIR` – base directory of the recipes
  (default: `$GITALCHEMIST_CFGDIR`)
- `-maxsteps N` – execute only the first N steps of each formula;
  0 executes all steps
- `-verbose` – also log every executed command and git's output
- `-test` – log the steps without executing them
- `-runall` – run every recipe found in the configuration directory
- `-clean` – remove the target directory
- `-version` – print the installed package version
- `-h`, `-help` – print the usage text

Log lines go to standard error. The exit status tells what happened:
0 on success, 1 for a command-line problem, 2 for a missing value in a
formula, 3 for an invalid value, 4 for a YAML decoding problem, 5 for a
failed git command, 6 for a file system error, and 42 for anything
else.

## Formula format

```yaml
title: basic_workflow
commands:
  - init_bare_repo:
      bare: remotes/basic_workflow
      clone_to: basic_workflow
  - create_file:
      source: files/project_plan_v1.md
      target: project_plan.md
  - add:
      files:
        - project_plan.md
  - commit:
      message: Added first file
      author: red
  - create_add_commit:
      files:
        - files/folder1 => folder1/
      message: added folder1
      author: blue
  - git:
      command: git commit -m "my message"
  - merge:
      source: feature/start_project
      target: main
      delete_source: true
  - mv:
      source: main.py
      target: generator.py
  - remove_and_commit:
      files:
        - notes-timeline.txt
      message: clean up timeline notes
      author: red
  - push:
      main: true
```

What each command does:

- `init_bare_repo` – creates `<targetdir>/<bare>`, runs
  `git init --bare --initial-branch=main` there, clones it to
  `<targetdir>/<clone_to>`, points `origin` at `../<bare>` and sets
  `user.name`, `user.email` and `init.defaultBranch` in the clone. All
  later commands work inside this clone.
- `create_file` – copies `<cfgdir>/<task>/<source>` to `<target>` in
  the clone. Directories are copied recursively; a target ending in a
  path separator, or an existing directory, receives the source under
  its own name. Missing parent directories are created.
- `add` – runs `git add` for each file.
- `commit` – commits with the message, the given author and a commit
  date of five hours ago.
- `create_add_commit` – for each `source => target` entry copies the
  file as `create_file` does, then runs `git add .` and commits.
- `git` – runs any git command. Double-quoted text stays one argument;
  a leading `git` is dropped.
- `merge` – checks out `target`, merges `source` into it and, with
  `delete_source: true`, deletes the source branch.
- `mv` – runs `git mv source target`.
- `remove_and_commit` – runs `git rm` for each file, then commits.
- `push` – runs `git push origin main` when `main` is true.

The authors `red`, `blue`, `green`, `api`, `blacklist` and `config`
stand for made-up identities with addresses at example.com (`red`,
Richard Red, is the identity configured by `init_bare_repo`). Any other
author value is passed to git unchanged.

Formulas are validated while they are read: an unknown command, a
missing required value or a `create_add_commit` entry without `=>`,
source or target is reported before any step runs.

## Library use

```python
import logging
from gitalchemist.formula import read, transmute
from gitalchemist.options import Options

logging.basicConfig(level=logging.DEBUG, format="%(message)s")

formula = read("recipes/basic_workflow/gitalchemist.yaml")
opt = Options(repo_dir="cwd", cfg_dir="recipes", task_dir="basic_workflow",
              test=True, verbose=True)
transmute(formula, opt, logging.getLogger("gitalchemist"))
```

The modules:

- `gitalchemist.formula` – `read`, `read_formula`, `parse_commands`,
  `transmute`, and the `Formula` and `Symbols` dataclasses.
- `gitalchemist.spells` – one dataclass per command (`InitRepoSpell`,
  `CreateFileSpell`, `AddSpell`, `CommitSpell`, `CreateAddCommitSpell`,
  `GitSpell`, `MergeSpell`, `MoveSpell`, `PushSpell`,
  `RemoveAndCommitSpell`), each with `validate()` and `cast()`.
- `gitalchemist.novice` – the `Assistant` interface and `Novice`, which
  only logs the steps.
- `gitalchemist.adept` – `Adept`, which runs git and copies files, and
  the `examine` / `examine_target` helpers that decide copy targets.
- `gitalchemist.book` – `list_pages` and `list_book_content` for
  locating formula files.
- `gitalchemist.options` – the frozen `Options` dataclass.
- `gitalchemist.errors` – `AlchemistError` and its subclasses
  `MissingValueError`, `InvalidValueError`, `YamlDecodeError`,
  `ExecError` and `AlchemistIOError`.
- `gitalchemist.logger` – `MortalLogger`, writing `[INFO]` and
  `[DEBUG]` lines to a standard `logging.Logger`.
- `gitalchemist.cli` – `get_options`, `run`, `run_task_list`,
  `run_one_task` and `main`, the command-line entry point.