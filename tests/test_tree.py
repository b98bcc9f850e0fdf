"""
Tests for the recursive tree copy and its visitor results.
"""

from pathlib import Path

import pytest

from pagesmith.tree import Copy, Replace, Skip, copy_tree

from conftest import read_tree, write_files


@pytest.fixture
def src_dir(tmp_path):
    root = tmp_path / "src"
    write_files(
        root,
        {
            "a.txt": "alpha",
            "page.tpl": "template",
            "nested/deeper/b.txt": "beta",
            "nested/skip.me": "ignored",
        },
    )
    return root


def test_copies_everything_without_visitor(src_dir, tmp_path):
    dst = tmp_path / "out" / "mirror"
    copy_tree(src_dir, dst)

    assert read_tree(dst) == read_tree(src_dir)


def test_replace_writes_under_new_name(src_dir, tmp_path):
    dst = tmp_path / "out"

    def visit(path: Path):
        if path.suffix == ".tpl":
            return Replace(f"{path.stem}.html", path.read_text().upper())
        return Copy()

    copy_tree(src_dir, dst, visit)

    assert (dst / "page.html").read_text() == "TEMPLATE"
    assert not (dst / "page.tpl").exists()
    assert (dst / "nested" / "deeper" / "b.txt").read_text() == "beta"


def test_skip_emits_nothing(src_dir, tmp_path):
    dst = tmp_path / "out"
    copy_tree(src_dir, dst, lambda path: Skip() if path.suffix == ".me" else Copy())

    assert not (dst / "nested" / "skip.me").exists()
    assert (dst / "nested").is_dir()


def test_returns_written_files_in_sorted_order(src_dir, tmp_path):
    dst = tmp_path / "out"
    written = copy_tree(src_dir, dst)

    assert [p.relative_to(dst).as_posix() for p in written] == [
        "a.txt",
        "nested/deeper/b.txt",
        "nested/skip.me",
        "page.tpl",
    ]


def test_rejects_unknown_visitor_result(src_dir, tmp_path):
    with pytest.raises(TypeError):
        copy_tree(src_dir, tmp_path / "out", lambda path: ("name.html", "content"))


def test_missing_source_is_fatal(tmp_path):
    with pytest.raises(FileNotFoundError):
        copy_tree(tmp_path / "nope", tmp_path / "out")
