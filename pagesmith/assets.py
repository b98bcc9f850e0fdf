from __future__ import annotations

import logging
import shutil
from pathlib import Path
from typing import Iterable

from .tree import copy_tree

logger = logging.getLogger(__name__)


def copy_assets(root: Path, output_dir: Path, assets: str = "assets", static_files: Iterable[str] = ()) -> list[Path]:
    written = []
    output_dir.mkdir(parents=True, exist_ok=True)
    if assets:
        assets_dir = root / assets
        written.extend(copy_tree(assets_dir, output_dir / assets_dir.name))
    for name in static_files:
        src = root / name
        target = output_dir / Path(name).name
        shutil.copyfile(src, target)
        logger.debug("Copied %s -> %s", src, target)
        written.append(target)
    return written
