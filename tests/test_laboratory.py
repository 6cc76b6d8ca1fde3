import os

from gitalchemist.laboratory import AUTHOR, DEFAULT_USER, EMAIL, get_author, join_path


def test_known_author_gets_mail_address():
    assert get_author("red") == AUTHOR["red"] + " <" + EMAIL["red"] + ">"


def test_unknown_author_is_returned_unchanged():
    assert get_author("skywalker") == "skywalker"


def test_every_author_has_mail_address():
    for name, author in AUTHOR.items():
        result = get_author(name)
        assert result.startswith(author)
        assert result.endswith("<" + EMAIL[name] + ">")


def test_default_user_is_known():
    assert DEFAULT_USER == "red"
    assert get_author(DEFAULT_USER) == "Richard Red <" + EMAIL["red"] + ">"


def test_join_path_skips_empty_elements():
    assert join_path("repodir", "") == "repodir"
    assert join_path("repodir", "", "workflow") == os.path.join("repodir", "workflow")


def test_join_path_of_nothing_is_empty():
    assert join_path("", "") == ""


def test_join_path_is_normalised():
    joined = join_path("a", os.path.join("b", "..", "c"))
    assert joined == os.path.join("a", "c")
    assert join_path(joined) == joined