"""Recursive directory mirroring with a per-file visitor.

A visitor receives the source path of every file and answers with one of
``Copy``, ``Replace`` or ``Skip``. Without a visitor every file is copied.
"""
from __future__ import annotations

import logging
import shutil
from dataclasses import dataclass
from pathlib import Path
from typing import Callable, Optional, Union

from .utils import write_text

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Copy:
    """Copy the file verbatim under its own name."""


@dataclass(frozen=True)
class Replace:
    """Write ``content`` under ``name`` instead of the source file."""

    name: str
    content: str


@dataclass(frozen=True)
class Skip:
    """Emit nothing for this file."""


Action = Union[Copy, Replace, Skip]
Visitor = Callable[[Path], Action]


def copy_tree(src_dir: Path, dst_dir: Path, visit: Optional[Visitor] = None) -> list[Path]:
    """Mirror ``src_dir`` into ``dst_dir`` and return the files written."""
    written: list[Path] = []
    dst_dir.mkdir(parents=True, exist_ok=True)
    for entry in sorted(src_dir.iterdir(), key=lambda p: p.name):
        target = dst_dir / entry.name
        if entry.is_dir():
            written.extend(copy_tree(entry, target, visit))
            continue
        action = visit(entry) if visit is not None else Copy()
        if isinstance(action, Copy):
            shutil.copyfile(entry, target)
            logger.debug("Copied %s -> %s", entry, target)
            written.append(target)
        elif isinstance(action, Replace):
            out_path = dst_dir / action.name
            write_text(out_path, action.content)
            logger.debug("Wrote %s from %s", out_path, entry)
            written.append(out_path)
        elif isinstance(action, Skip):
            logger.debug("Skipped %s", entry)
        else:
            raise TypeError(f"Visitor returned {action!r} for {entry}; expected Copy, Replace or Skip")
    return written
