from __future__ import annotations

import json
import os
import sys
from pathlib import Path
from typing import Mapping, Optional

try:
    import tomllib as toml
except ImportError:
    import tomli as toml

import yaml

ENV_KEYS = {
    "build_dir": "BLOG_BUILD_DIR",
    "title": "BLOG_TITLE",
    "description": "BLOG_DESCRIPTION",
    "long_description": "BLOG_LONG_DESCRIPTION",
    "http_url": "BLOG_HTTP_URL",
    "posts": "BLOG_POSTS_DIR",
    "assets": "BLOG_ASSETS_DIR",
    "converter": "BLOG_CONVERTER",
    "per_page": "BLOG_PER_PAGE",
    "tag_pages": "BLOG_TAG_PAGES",
}

DEFAULTS = {
    "build_dir": "build",
    "title": "Title",
    "description": "Default title",
    "long_description": "Long description",
    "http_url": "https://example.com",
    "posts": ".",
    "assets": "assets",
    "converter": "markdown",
    "per_page": 0,
    "tag_pages": False,
}

# An empty value for these falls back to the default instead of being used.
NON_EMPTY_KEYS = {"build_dir", "posts"}


def load_config(path: Path) -> dict:
    if not path.exists():
        return {}
    suffix = path.suffix.lower()
    text = path.read_text(encoding="utf-8")
    if suffix == ".toml":
        try:
            data = toml.loads(text)
        except toml.TOMLDecodeError as exc:
            print(f"Invalid TOML in config file {path}: {exc}", file=sys.stderr)
            sys.exit(1)
        return data
    if suffix in {".yml", ".yaml"}:
        try:
            data = yaml.safe_load(text)
        except yaml.YAMLError as exc:
            print(f"Invalid YAML in config file {path}: {exc}", file=sys.stderr)
            sys.exit(1)
        if data is None:
            return {}
        if not isinstance(data, dict):
            print(f"YAML config must be a mapping: {path}", file=sys.stderr)
            sys.exit(1)
        return data
    try:
        data = json.loads(text)
    except json.JSONDecodeError as exc:
        print(f"Invalid JSON in config file {path}: {exc}", file=sys.stderr)
        sys.exit(1)
    if not isinstance(data, dict):
        print(f"JSON config must be a mapping: {path}", file=sys.stderr)
        sys.exit(1)
    return data


def setting(config: Mapping, key: str, environ: Optional[Mapping[str, str]] = None) -> object:
    """Resolve ``key`` from the environment, then the config file, then defaults."""
    environ = os.environ if environ is None else environ
    default = DEFAULTS[key]
    value = environ.get(ENV_KEYS[key])
    if value is None:
        value = config.get(key)
    if value is None:
        return default
    if key in NON_EMPTY_KEYS and not str(value).strip():
        return default
    return value
