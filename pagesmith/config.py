from __future__ import annotations

import json
import sys
import tomllib
from pathlib import Path

import yaml

DATA_SUFFIXES = (".json", ".yaml", ".yml", ".toml")


def load_data(path: Path) -> object:
    """Parse a JSON, YAML or TOML file chosen by suffix.

    Parser errors are not caught: a malformed manifest or sidecar aborts the build.
    """
    suffix = path.suffix.lower()
    text = path.read_text(encoding="utf-8")
    if suffix == ".toml":
        return tomllib.loads(text)
    if suffix in {".yml", ".yaml"}:
        return yaml.safe_load(text)
    return json.loads(text)


def load_mapping(path: Path) -> dict:
    data = load_data(path)
    if data is None:
        return {}
    if not isinstance(data, dict):
        raise ValueError(f"Expected a mapping in {path}, got {type(data).__name__}")
    return data


def find_sidecar(page: Path) -> Path | None:
    for suffix in DATA_SUFFIXES:
        candidate = page.with_suffix(suffix)
        if candidate.is_file():
            return candidate
    return None


def load_config(path: Path) -> dict:
    if not path.exists():
        return {}
    suffix = path.suffix.lower()
    try:
        data = load_data(path)
    except tomllib.TOMLDecodeError as exc:
        print(f"Invalid TOML in config file {path}: {exc}", file=sys.stderr)
        sys.exit(1)
    except yaml.YAMLError as exc:
        print(f"Invalid YAML in config file {path}: {exc}", file=sys.stderr)
        sys.exit(1)
    except json.JSONDecodeError as exc:
        print(f"Invalid JSON in config file {path}: {exc}", file=sys.stderr)
        sys.exit(1)
    if data is None:
        return {}
    if not isinstance(data, dict):
        kind = suffix.lstrip(".").upper() or "JSON"
        print(f"{kind} config must be a mapping: {path}", file=sys.stderr)
        sys.exit(1)
    return data
