from __future__ import annotations

import math
import secrets

from .errors import ConfigError

POSTS_PER_PAGE = 5
ROOT_LINK = "/"


def page_link(index: int) -> str:
    return f"/pages/{index}"


def page_count(total: int, per_page: int) -> int:
    return max(1, math.ceil(total / per_page))


def paginate(records: list[dict], per_page: int = POSTS_PER_PAGE) -> list[dict]:
    if per_page < 1:
        raise ConfigError(f"Posts per page must be at least 1, got {per_page}.")
    pages = [
        {
            "index": index,
            "link": page_link(index),
            "posts": records[index * per_page : (index + 1) * per_page],
        }
        for index in range(page_count(len(records), per_page))
    ]
    for i, page in enumerate(pages):
        if i > 0:
            # page 0 is served as the site root
            page["next_link"] = ROOT_LINK if i == 1 else pages[i - 1]["link"]
        if i < len(pages) - 1:
            page["prev_link"] = pages[i + 1]["link"]
    return pages


def build_blog_props(records: list[dict], meta: dict, per_page: int = POSTS_PER_PAGE) -> dict:
    return {
        "meta": meta,
        "pages": paginate(records, per_page),
        "cache_token": secrets.token_hex(8),
    }
