import os

import pytest

from gitalchemist.book import list_book_content, list_pages
from gitalchemist.errors import AlchemistIOError
from gitalchemist.laboratory import FORMULA_FILE_NAME


@pytest.fixture
def book(tmp_path):
    for page in ("page1", "page2"):
        page_dir = tmp_path / page
        page_dir.mkdir()
        (page_dir / FORMULA_FILE_NAME).write_text("title: " + page + "\n")
        (page_dir / "file1.txt").write_text("file1\n")
    (tmp_path / "page1" / "dir1").mkdir()
    (tmp_path / "page1" / "dir1" / "file3.txt").write_text("file3\n")
    (tmp_path / "files").mkdir()
    (tmp_path / "source.txt").write_text("hello 世界\n")
    return str(tmp_path)


def formula(base, page):
    return os.path.join(base, page, FORMULA_FILE_NAME)


def test_list_pages_one_file(book):
    assert list_pages(book, "page1") == [formula(book, "page1")]


def test_list_pages_two_files(book):
    assert list_pages(book, "page1", "page2") == [
        formula(book, "page1"),
        formula(book, "page2"),
    ]


def test_list_pages_file_not_found(book):
    with pytest.raises(AlchemistIOError) as info:
        list_pages(book, "page1", "page3")
    assert info.value.cmd == "stat"
    assert info.value.arg == formula(book, "page3")
    assert isinstance(info.value.err, FileNotFoundError)


def test_list_pages_dir_not_found(book):
    with pytest.raises(AlchemistIOError) as info:
        list_pages(book, "page1", "notexist", "page3")
    assert info.value.cmd == "stat"
    assert info.value.arg == formula(book, "notexist")


def test_list_pages_empty_list(book):
    assert list_pages(book) == []


def test_list_book_content(book):
    assert list_book_content(book) == [formula(book, "page1"), formula(book, "page2")]


def test_list_book_content_no_subdirs(book):
    assert list_book_content(os.path.join(book, "page1")) == []


def test_list_book_content_dir_not_found(tmp_path):
    missing = str(tmp_path / "not found")
    with pytest.raises(AlchemistIOError) as info:
        list_book_content(missing)
    assert info.value.cmd == "read dir"
    assert info.value.arg == missing


def test_list_book_content_pages_are_listable(book):
    pages = list_book_content(book)
    names = [os.path.basename(os.path.dirname(page)) for page in pages]
    assert list_pages(book, *names) == pages