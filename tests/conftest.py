import json
from pathlib import Path

import pytest

from pagesmith.cli import make_parser

SITE_TOML = """\
static_files = ["favicon.svg", "robots.txt"]

[site]
title = "Default Title"
greeting = "Hello"
"""

FILES = {
    "layouts/base.j2": "<title>{{ title }}</title>{% block content %}{% endblock %}",
    "pages/index.j2": '{% extends "layouts/base.j2" %}{% block content %}<p>{{ greeting }}</p>{% endblock %}',
    "pages/about.j2": '{% extends "layouts/base.j2" %}{% block content %}<p>{{ team }}</p>{% endblock %}',
    "pages/about.json": json.dumps({"title": "About us", "team": "Ada &amp; Grace"}),
    "pages/notes.txt": "plain text, copied as-is\n",
    "pages/blog/index.json": json.dumps(
        {
            "posts": [
                {"slug": "hello", "title": "Hello World", "published": True},
                {"slug": "draft", "title": "Not yet", "published": False},
            ]
        }
    ),
    "pages/blog/hello.md": "# Hi\n",
    "pages/blog/draft.md": "# Draft\n",
    "blog-gen/post.j2": '<h1>{{ title }}</h1>{{ source("__filename") | markdown }}',
    "assets/app.css": "body { color: #222; }\n",
    "favicon.svg": "<svg xmlns=\"http://www.w3.org/2000/svg\"/>\n",
    "robots.txt": "User-agent: *\n",
}


def write_files(root: Path, files: dict) -> None:
    for name, text in files.items():
        path = root / name
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(text, encoding="utf-8")


def read_tree(root: Path) -> dict:
    return {path.relative_to(root).as_posix(): path.read_bytes() for path in sorted(root.rglob("*")) if path.is_file()}


@pytest.fixture
def project(tmp_path, monkeypatch):
    """A project directory with a site.toml and a small src/ tree, used as cwd."""
    root = tmp_path / "project"
    root.mkdir()
    (root / "site.toml").write_text(SITE_TOML, encoding="utf-8")
    write_files(root / "src", FILES)
    monkeypatch.chdir(root)
    return root


@pytest.fixture
def make_args(project):
    def _make_args(*argv):
        argv = list(argv)
        return make_parser("test", argv).parse_args(argv)

    return _make_args
