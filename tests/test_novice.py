import io
import logging

import pytest

from gitalchemist.novice import Assistant, Novice
from gitalchemist.options import Options


@pytest.fixture
def logger(request):
    log = logging.getLogger(f"gitalchemist.tests.novice.{request.node.name}")
    log.handlers.clear()
    log.propagate = False
    log.setLevel(logging.DEBUG)
    handler = logging.StreamHandler(io.StringIO())
    handler.setFormatter(logging.Formatter("%(message)s"))
    log.addHandler(handler)
    yield log
    log.handlers.clear()


def logged(log):
    return log.handlers[0].stream.getvalue()


def test_novice_logs_steps(logger):
    novice = Novice(logger, Options(verbose=True))

    novice.git("dir", "init")
    novice.copy("from", "to")
    novice.makedir("dir")

    assert logged(logger) == (
        '[DEBUG] "dir": git []string{"init"}\n'
        '[DEBUG] copy "from" to "to"\n'
        '[DEBUG] makedir "dir"\n'
    )


def test_novice_copy_with_new_dir(logger):
    novice = Novice(logger, Options(verbose=True))
    novice.copy("testdata/source.txt", "testdata/new_page/new_dir")
    assert logged(logger) == (
        '[DEBUG] copy "testdata/source.txt" to "testdata/new_page/new_dir"\n'
    )


def test_novice_git_with_several_args(logger):
    novice = Novice(logger, Options(verbose=True))
    novice.git("", "-test.run=TestCalledByAdeptGit", "ERROR")
    assert logged(logger) == (
        '[DEBUG] "": git []string{"-test.run=TestCalledByAdeptGit", "ERROR"}\n'
    )


def test_novice_quotes_backslashes(logger):
    novice = Novice(logger, Options(verbose=True))
    novice.makedir("repodir\\workflow")
    assert logged(logger) == '[DEBUG] makedir "repodir\\\\workflow"\n'


def test_novice_silent_without_verbose(logger):
    novice = Novice(logger, Options())
    novice.git("dir", "init")
    novice.copy("from", "to")
    novice.makedir("dir")
    assert logged(logger) == ""


def test_novice_info_is_logged_without_verbose(logger):
    novice = Novice(logger, Options())
    novice.info("execute formula %s", "test_workflow")
    assert logged(logger) == "[INFO] execute formula test_workflow\n"


def test_novice_does_not_touch_file_system(logger, tmp_path):
    novice = Novice(logger, Options(verbose=True))
    target = tmp_path / "new_dir"
    novice.makedir(str(target))
    novice.copy(str(tmp_path / "missing.txt"), str(tmp_path / "copy.txt"))
    assert not target.exists()
    assert list(tmp_path.iterdir()) == []


def test_assistant_is_abstract():
    with pytest.raises(TypeError):
        Assistant()