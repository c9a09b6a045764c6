from __future__ import annotations

import datetime as dt
import re
from typing import Optional

from .errors import MetadataError

COMMENT_MARKER = "//-"
MORE_RE = re.compile(r"^[ \t]*//-[ \t]*more[ \t]*\r?$", re.MULTILINE)
DATE_FORMATS = ("%Y-%m-%d", "%Y-%m-%d %H:%M", "%Y-%m-%d %H:%M:%S")


def parse_tags(value: str) -> list[str]:
    value = value.strip()
    if not value:
        return []
    return [item.strip() for item in value.split(",")]


def parse_timestamp(value: str) -> int:
    """Convert a `date` attribute to a UTC Unix timestamp.

    Slashes count as dashes, so `2020/01/01` and `2020-01-01` are equal.
    Values without an offset are read as UTC.
    """
    text = value.strip().replace("/", "-")
    parsed: Optional[dt.datetime] = None
    try:
        parsed = dt.datetime.fromisoformat(text)
    except ValueError:
        for fmt in DATE_FORMATS:
            try:
                parsed = dt.datetime.strptime(text, fmt)
                break
            except ValueError:
                continue
    if parsed is None:
        raise MetadataError(f"Unparseable date: {value!r}")
    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=dt.timezone.utc)
    return int(parsed.timestamp())


def is_attribute_line(line: str) -> bool:
    return line.lstrip().startswith(COMMENT_MARKER) and ":" in line


def extract_attributes(text: str) -> dict:
    attributes: dict = {}
    for line in text.lstrip("\ufeff").splitlines():
        if not is_attribute_line(line):
            continue
        name, value = line.strip().lstrip(" /-").split(":", 1)
        name = name.strip()
        value = value.strip()
        if name == "date":
            attributes["timestamp"] = parse_timestamp(value)
            attributes["date"] = value
        elif name == "tags":
            attributes["tags"] = parse_tags(value)
        else:
            attributes[name] = value
    return attributes


def split_excerpt(text: str) -> Optional[str]:
    match = MORE_RE.search(text)
    if match is None:
        return None
    return text[: match.start()]


def strip_comment_lines(text: str) -> str:
    """Drop whole `//-` lines (metadata, `more` marker) before rendering."""
    lines = text.splitlines(keepends=True)
    return "".join(line for line in lines if not line.lstrip().startswith(COMMENT_MARKER))
