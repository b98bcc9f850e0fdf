from __future__ import annotations

import logging
from pathlib import Path
from typing import Iterable

from .config import find_sidecar, load_mapping
from .render import RenderDefaults
from .tree import Action, Copy, Replace, Skip, Visitor, copy_tree

TEMPLATE_SUFFIX = ".j2"
OUTPUT_SUFFIX = ".html"

logger = logging.getLogger(__name__)


def page_options(page: Path) -> dict:
    sidecar = find_sidecar(page)
    if sidecar is None:
        return {}
    logger.debug("Options for %s from %s", page, sidecar)
    return load_mapping(sidecar)


def compile_page(defaults: RenderDefaults, root: Path, page: Path) -> Replace:
    name = page.relative_to(root).as_posix()
    html_doc = defaults.render_template(name, page_options(page))
    logger.info("Compiled %s", name)
    return Replace(f"{page.stem}{OUTPUT_SUFFIX}", html_doc)


def page_visitor(
    defaults: RenderDefaults,
    root: Path,
    suffix: str = TEMPLATE_SUFFIX,
    skip: Iterable[Path] = (),
) -> Visitor:
    skipped = frozenset(path.resolve() for path in skip)

    def visit(path: Path) -> Action:
        if path.suffix == suffix:
            return compile_page(defaults, root, path)
        if path.resolve() in skipped:
            return Skip()
        return Copy()

    return visit


def compile_pages(
    defaults: RenderDefaults,
    root: Path,
    pages_dir: Path,
    output_dir: Path,
    suffix: str = TEMPLATE_SUFFIX,
    skip: Iterable[Path] = (),
) -> list[Path]:
    """Render every ``suffix`` template under ``pages_dir``; copy everything else but ``skip``."""
    return copy_tree(pages_dir, output_dir, page_visitor(defaults, root, suffix, skip))
