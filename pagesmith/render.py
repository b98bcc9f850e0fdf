from __future__ import annotations

import datetime as dt
import logging
from dataclasses import dataclass
from pathlib import Path
from types import MappingProxyType
from typing import Any, Mapping, Optional

import markdown
from dateutil.parser import isoparse
from jinja2 import Environment, FileSystemLoader, StrictUndefined, pass_environment
from markupsafe import Markup
from pygments.styles import get_style_by_name

from .utils import parse_bool

DEFAULT_HIGHLIGHT_STYLE = "one-dark"

logger = logging.getLogger(__name__)


class MarkdownRenderer:
    """Markdown to HTML with fenced code highlighted by Pygments."""

    def __init__(self, style: str = DEFAULT_HIGHLIGHT_STYLE):
        # Unknown styles raise ClassNotFound here, before any page is rendered.
        get_style_by_name(style)
        self.style = style
        self._md = markdown.Markdown(
            extensions=["fenced_code", "tables", "codehilite"],
            extension_configs={
                "codehilite": {
                    "pygments_style": style,
                    "noclasses": True,
                    "guess_lang": False,
                }
            },
        )

    def render(self, text: str) -> Markup:
        html_content = self._md.convert(str(text))
        self._md.reset()
        return Markup(html_content)


def format_date(value: object, fmt: Optional[str] = None) -> str:
    if isinstance(value, (dt.date, dt.datetime)):
        parsed = value
    else:
        parsed = isoparse(str(value).strip())
    if fmt:
        return parsed.strftime(fmt)
    return f"{parsed:%B} {parsed.day}, {parsed.year}"


def is_published(record: object) -> bool:
    if isinstance(record, Mapping):
        return parse_bool(record.get("published"))
    return False


@pass_environment
def read_source(env: Environment, name: str) -> str:
    """Raw text of a file under the loader root, not parsed as a template."""
    source, _, _ = env.loader.get_source(env, name)
    return source


def make_environment(root: Path, renderer: MarkdownRenderer) -> Environment:
    env = Environment(
        loader=FileSystemLoader(str(root)),
        undefined=StrictUndefined,
        autoescape=True,
        keep_trailing_newline=True,
    )
    env.filters["markdown"] = renderer.render
    env.filters["md"] = renderer.render
    env.filters["date"] = format_date
    env.globals["format_date"] = format_date
    env.globals["source"] = read_source
    env.tests["published"] = is_published
    return env


@dataclass(frozen=True)
class RenderDefaults:
    """Render settings shared by every page of one build.

    ``constants`` is read-only; per-page data is layered on top of it with
    :meth:`context`, later layers winning on key collisions.
    """

    env: Environment
    constants: Mapping[str, Any]

    @classmethod
    def create(
        cls,
        root: Path,
        constants: Optional[Mapping[str, Any]] = None,
        highlight_style: str = DEFAULT_HIGHLIGHT_STYLE,
    ) -> "RenderDefaults":
        renderer = MarkdownRenderer(highlight_style)
        env = make_environment(root, renderer)
        logger.debug("Template root %s, highlight style %s", root, highlight_style)
        return cls(env=env, constants=MappingProxyType(dict(constants or {})))

    def context(self, *layers: Optional[Mapping[str, Any]]) -> dict:
        merged = dict(self.constants)
        for layer in layers:
            if layer:
                merged.update(layer)
        return merged

    def render_template(self, name: str, *layers: Optional[Mapping[str, Any]]) -> str:
        return self.env.get_template(name).render(self.context(*layers))

    def render_string(self, source: str, *layers: Optional[Mapping[str, Any]]) -> str:
        return self.env.from_string(source).render(self.context(*layers))
