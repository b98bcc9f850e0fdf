"""
Tests for the asset pass-through.
"""

import pytest

from pagesmith.assets import copy_assets

from conftest import write_files


@pytest.fixture
def root(tmp_path):
    staging = tmp_path / "staging"
    write_files(
        staging,
        {
            "assets/css/site.css": "body {}",
            "assets/logo.svg": "<svg/>",
            "favicon.svg": "<svg/>",
            "robots.txt": "User-agent: *\n",
        },
    )
    return staging


def test_copies_assets_and_top_level_files(root, tmp_path):
    out = tmp_path / "public"
    written = copy_assets(root, out, "assets", ["favicon.svg", "robots.txt"])

    assert (out / "assets" / "css" / "site.css").read_text() == "body {}"
    assert (out / "assets" / "logo.svg").exists()
    assert (out / "robots.txt").read_text() == "User-agent: *\n"
    assert len(written) == 4


def test_missing_static_file_is_fatal(root, tmp_path):
    with pytest.raises(FileNotFoundError):
        copy_assets(root, tmp_path / "public", "assets", ["missing.ico"])


def test_missing_assets_dir_is_fatal(root, tmp_path):
    with pytest.raises(FileNotFoundError):
        copy_assets(root, tmp_path / "public", "static", [])


def test_assets_can_be_disabled(root, tmp_path):
    written = copy_assets(root, tmp_path / "public", "", ["robots.txt"])

    assert written == [tmp_path / "public" / "robots.txt"]
    assert not (tmp_path / "public" / "assets").exists()
