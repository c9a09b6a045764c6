from __future__ import annotations

import json
import tomllib
from dataclasses import dataclass
from pathlib import Path

import yaml

from .errors import ConfigError


@dataclass(frozen=True)
class Collection:
    """Naming for one kind of document: URL route, output folder, templates."""

    name: str
    route: str
    output_dir: str
    record_key: str
    document_template: str
    page_template: str = "page.html"
    index_template: str = "index.html"

    def link_for(self, basename: str) -> str:
        return f"{self.route}/{basename}"


COLLECTIONS = {
    "articles": Collection(
        name="articles",
        route="/articles",
        output_dir="articles",
        record_key="article",
        document_template="article.html",
    ),
    "posts": Collection(
        name="posts",
        route="/posts",
        output_dir="posts",
        record_key="post",
        document_template="post.html",
    ),
}


def get_collection(name: str) -> Collection:
    try:
        return COLLECTIONS[name]
    except KeyError:
        choices = ", ".join(sorted(COLLECTIONS))
        raise ConfigError(f"Unknown collection {name!r} (expected one of: {choices})") from None


def load_config(path: Path) -> dict:
    if not path.exists():
        return {}
    suffix = path.suffix.lower()
    try:
        text = path.read_text(encoding="utf-8")
    except UnicodeDecodeError as exc:
        raise ConfigError(f"Config file {path} is not valid UTF-8: {exc}") from exc
    if suffix == ".toml":
        try:
            data = tomllib.loads(text)
        except tomllib.TOMLDecodeError as exc:
            raise ConfigError(f"Invalid TOML in config file {path}: {exc}") from exc
    elif suffix in {".yml", ".yaml"}:
        try:
            data = yaml.safe_load(text)
        except yaml.YAMLError as exc:
            raise ConfigError(f"Invalid YAML in config file {path}: {exc}") from exc
        if data is None:
            return {}
    else:
        try:
            data = json.loads(text)
        except json.JSONDecodeError as exc:
            raise ConfigError(f"Invalid JSON in config file {path}: {exc}") from exc
    if not isinstance(data, dict):
        raise ConfigError(f"Config must be a mapping: {path}")
    return data


def site_meta(config: dict) -> dict:
    meta = config.get("meta") or {}
    if not isinstance(meta, dict):
        raise ConfigError("The 'meta' table must be a mapping.")
    return dict(meta)
