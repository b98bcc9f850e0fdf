from __future__ import annotations

import argparse
import logging
import sys
import time
from pathlib import Path
from typing import Optional, Sequence

from .assets import copy_assets
from .config import load_config
from .content import collection_sources, generate_collection
from .pages import TEMPLATE_SUFFIX, compile_pages
from .render import DEFAULT_HIGHLIGHT_STYLE, RenderDefaults
from .tree import copy_tree
from .utils import clean_output_dir, parse_bool, parse_int, parse_list

STAGING_NAME = "src"
OUTPUT_NAME = "public"
DEFAULT_PORT = 8080

logger = logging.getLogger(__name__)


def staging_dir(args: argparse.Namespace) -> Path:
    return Path(args.build) / STAGING_NAME


def output_dir(args: argparse.Namespace) -> Path:
    return Path(args.build) / OUTPUT_NAME


def build_site(args: argparse.Namespace) -> list[Path]:
    """Run the whole pipeline once and return the files written to the output tree."""
    project_root = Path.cwd()
    source = Path(args.source)
    build_dir = Path(args.build)
    staging = staging_dir(args)
    public = output_dir(args)

    site = getattr(args, "site", None) or {}
    if not isinstance(site, dict):
        print("Config key 'site' must be a table/mapping.", file=sys.stderr)
        sys.exit(1)
    defaults = RenderDefaults.create(staging, site, args.highlight_style)

    clean_output_dir(build_dir, project_root)
    copy_tree(source, staging)
    logger.debug("Staged %s -> %s", source, staging)

    written: list[Path] = []
    content_sources: frozenset[Path] = frozenset()
    if args.manifest:
        content_sources = collection_sources(staging / args.manifest, args.manifest_key)
        written.extend(
            generate_collection(
                defaults,
                staging,
                staging / args.manifest,
                staging / args.post_template,
                public / args.posts_dir,
                key=args.manifest_key,
            )
        )
    written.extend(
        compile_pages(defaults, staging, staging / args.pages, public, args.template_suffix, skip=content_sources)
    )
    written.extend(copy_assets(staging, public, args.assets, parse_list(args.static_files)))
    return written


def configure_logging(verbose: bool) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.INFO,
        format="%(levelname)s %(name)s: %(message)s",
    )


def make_parser(description: str, argv: Optional[Sequence[str]] = None) -> argparse.ArgumentParser:
    pre_parser = argparse.ArgumentParser(add_help=False)
    pre_parser.add_argument(
        "--config",
        default="site.toml",
        help="Path to site config file (TOML/YAML/JSON).",
    )
    pre_args, _ = pre_parser.parse_known_args(argv)
    config = load_config(Path(pre_args.config))

    def cfg_value(key: str, default: object) -> object:
        value = config.get(key)
        return default if value is None else value

    def cfg_str(key: str, default: str) -> str:
        value = cfg_value(key, default)
        return default if value is None else str(value)

    def cfg_bool(key: str, default: bool) -> bool:
        value = cfg_value(key, default)
        return parse_bool(value) if value is not None else default

    def cfg_int(key: str, default: int) -> int:
        value = cfg_value(key, default)
        return parse_int(value, default)

    parser = argparse.ArgumentParser(description=description)
    parser.add_argument("--config", default=pre_args.config, help="Path to site config file (TOML/YAML/JSON).")
    parser.add_argument("--source", default=cfg_str("source", "src"), help="Source tree to build from.")
    parser.add_argument(
        "--build",
        default=cfg_str("build", "build"),
        help="Build directory; wiped on every run. Holds the staging copy (src/) and the output (public/).",
    )
    parser.add_argument("--pages", default=cfg_str("pages", "pages"), help="Page tree, relative to the source tree.")
    parser.add_argument(
        "--manifest",
        default=cfg_str("manifest", "pages/blog/index.json"),
        help="Content manifest, relative to the source tree. Empty to skip the collection.",
    )
    parser.add_argument(
        "--manifest-key",
        default=cfg_str("manifest_key", "posts"),
        help="Key of the item list inside the manifest.",
    )
    parser.add_argument(
        "--post-template",
        default=cfg_str("post_template", "blog-gen/post.j2"),
        help="Template rendered once per published item, relative to the source tree.",
    )
    parser.add_argument(
        "--posts-dir",
        default=cfg_str("posts_dir", "blog"),
        help="Output subdirectory for generated items.",
    )
    parser.add_argument("--assets", default=cfg_str("assets", "assets"), help="Assets directory, copied as-is.")
    parser.add_argument(
        "--static-files",
        default=",".join(parse_list(cfg_value("static_files", ["favicon.svg", "robots.txt"]))),
        help="Comma-separated top-level files copied to the output root.",
    )
    parser.add_argument(
        "--template-suffix",
        default=cfg_str("template_suffix", TEMPLATE_SUFFIX),
        help="Suffix of page templates.",
    )
    parser.add_argument(
        "--highlight-style",
        default=cfg_str("highlight_style", DEFAULT_HIGHLIGHT_STYLE),
        help="Pygments style for code blocks.",
    )
    parser.add_argument("--host", default=cfg_str("host", "localhost"), help="Host for the preview server.")
    parser.add_argument("--port", default=cfg_int("port", DEFAULT_PORT), type=int, help="Port for the preview server.")
    parser.add_argument(
        "-v",
        "--verbose",
        action=argparse.BooleanOptionalAction,
        default=cfg_bool("verbose", False),
        help="Log every copied file.",
    )
    parser.set_defaults(site=cfg_value("site", {}))
    return parser


def run_build(args: argparse.Namespace) -> list[Path]:
    start = time.perf_counter()
    written = build_site(args)
    elapsed = time.perf_counter() - start
    print(f"Build completed in {elapsed:.2f}s.")
    print(f"Site generated in: {output_dir(args)}")
    return written


def main(argv: Optional[Sequence[str]] = None) -> None:
    parser = make_parser("Build a static site from page templates, a content manifest and assets.", argv)
    args = parser.parse_args(argv)
    configure_logging(args.verbose)
    run_build(args)
