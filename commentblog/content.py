from __future__ import annotations

import logging
from pathlib import Path

from jinja2 import Environment, TemplateError

from .attributes import extract_attributes, split_excerpt
from .config import Collection
from .errors import DocumentError, MetadataError
from .render import render_document
from .utils import run_parallel

logger = logging.getLogger(__name__)


def load_record(path: Path, collection: Collection, env: Environment) -> dict:
    try:
        source = path.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as exc:
        raise DocumentError(path, f"cannot read source: {exc}") from exc
    try:
        attributes = extract_attributes(source)
    except MetadataError as exc:
        raise DocumentError(path, str(exc)) from exc
    try:
        body = render_document(env, source, attributes)
        head = split_excerpt(source)
        excerpt = body if head is None else render_document(env, head, attributes)
    except TemplateError as exc:
        raise DocumentError(path, f"template error: {exc}") from exc
    basename = path.stem
    record = dict(attributes)
    record.update(
        {
            "body": body,
            "excerpt": excerpt,
            "basename": basename,
            "link": collection.link_for(basename),
        }
    )
    return record


def sort_records(records: list[dict]) -> list[dict]:
    # undated records go last, after pre-1970 ones too
    return sorted(records, key=lambda r: ("timestamp" in r, r.get("timestamp", 0)), reverse=True)


def thread_links(items: list[dict]) -> list[dict]:
    """Point each item at its newer (`next_link`) and older (`prev_link`) neighbour."""
    for i, item in enumerate(items):
        if i > 0:
            item["next_link"] = items[i - 1]["link"]
        if i < len(items) - 1:
            item["prev_link"] = items[i + 1]["link"]
    return items


def load_records(paths: list[Path], collection: Collection, env: Environment, workers: int = 0) -> list[dict]:
    records = run_parallel(lambda path: load_record(Path(path), collection, env), paths, workers)
    logger.info("Loaded %d documents", len(records))
    return thread_links(sort_records(records))
