"""Blog-style content collections driven by a manifest file.

The manifest lists item records under a single key. Every published record
gets one page rendered from a shared template, in which the marker
``__filename`` is replaced with the path of the item's content file before
the template is parsed.
"""
from __future__ import annotations

import logging
from pathlib import Path
from typing import Any

from .config import load_mapping
from .render import RenderDefaults
from .utils import parse_bool, write_text

PLACEHOLDER = "__filename"
CONTENT_SUFFIX = ".md"

logger = logging.getLogger(__name__)


def load_manifest(path: Path, key: str = "posts") -> list[dict]:
    data = load_mapping(path)
    if key not in data:
        raise ValueError(f"Manifest {path} has no '{key}' list")
    records = data[key]
    if not isinstance(records, list):
        raise ValueError(f"Manifest key '{key}' in {path} must be a list, got {type(records).__name__}")
    return records


def check_slug(slug: str) -> str:
    if not slug or slug in {".", ".."} or Path(slug).name != slug:
        raise ValueError(f"Invalid slug: {slug!r}")
    return slug


def published_items(records: list[Any]) -> list[dict]:
    """Published records in manifest order; unpublished ones are not validated."""
    items = []
    seen = set()
    for index, record in enumerate(records):
        if not isinstance(record, dict):
            raise ValueError(f"Manifest entry {index} must be a mapping, got {type(record).__name__}")
        if not parse_bool(record.get("published")):
            continue
        if "slug" not in record:
            raise ValueError(f"Manifest entry {index} has no slug")
        slug = check_slug(str(record["slug"]))
        if slug in seen:
            raise ValueError(f"Duplicate slug in manifest: {slug}")
        seen.add(slug)
        items.append(record)
    return items


def collection_sources(manifest_path: Path, key: str = "posts") -> frozenset[Path]:
    """Content files of every manifest entry, published or not.

    These feed the collection pages only and are kept out of the copied page tree.
    """
    sources = set()
    for record in load_manifest(manifest_path, key):
        if isinstance(record, dict) and "slug" in record:
            slug = str(record["slug"])
            if slug and Path(slug).name == slug:
                sources.add(content_path_for(manifest_path, slug).resolve())
    return frozenset(sources)


def substitute_placeholder(template_text: str, value: str, placeholder: str = PLACEHOLDER) -> str:
    return template_text.replace(placeholder, value)


def content_path_for(manifest_path: Path, slug: str) -> Path:
    return manifest_path.parent / f"{slug}{CONTENT_SUFFIX}"


def render_item(
    defaults: RenderDefaults, template_text: str, item: dict, content_path: Path, root: Path
) -> str:
    if not content_path.is_file():
        raise FileNotFoundError(f"Content file for '{item['slug']}' not found: {content_path}")
    source = substitute_placeholder(template_text, content_path.relative_to(root).as_posix())
    return defaults.render_string(source, {"page_name": item.get("title", item["slug"])}, item)


def generate_collection(
    defaults: RenderDefaults,
    root: Path,
    manifest_path: Path,
    template_path: Path,
    output_dir: Path,
    key: str = "posts",
) -> list[Path]:
    """Render one ``<slug>.html`` per published manifest entry into ``output_dir``."""
    records = load_manifest(manifest_path, key)
    items = published_items(records)
    skipped = len(records) - len(items)
    if skipped:
        logger.info("Skipping %d unpublished item(s) from %s", skipped, manifest_path)
    template_text = template_path.read_text(encoding="utf-8")
    output_dir.mkdir(parents=True, exist_ok=True)

    written = []
    for item in items:
        slug = str(item["slug"])
        html_doc = render_item(defaults, template_text, item, content_path_for(manifest_path, slug), root)
        out_path = output_dir / f"{slug}.html"
        write_text(out_path, html_doc)
        logger.info("Built %s", out_path)
        written.append(out_path)
    return written
