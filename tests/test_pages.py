from __future__ import annotations

import pytest

from commentblog.errors import ConfigError
from commentblog.pages import build_blog_props, paginate


def make_records(count: int) -> list[dict]:
    return [{"basename": f"doc{i}", "link": f"/articles/doc{i}"} for i in range(count)]


@pytest.mark.parametrize("count,pages", [(0, 1), (1, 1), (5, 1), (6, 2), (10, 2), (11, 3)])
def test_page_count(count, pages):
    assert len(paginate(make_records(count))) == pages


def test_empty_input_gives_one_empty_page():
    pages = paginate([])
    assert pages == [{"index": 0, "link": "/pages/0", "posts": []}]


def test_pages_cover_every_record_once_in_order():
    records = make_records(12)
    pages = paginate(records)
    assert [r for page in pages for r in page["posts"]] == records
    assert [len(page["posts"]) for page in pages] == [5, 5, 2]


def test_page_links():
    pages = paginate(make_records(11))
    assert [page["link"] for page in pages] == ["/pages/0", "/pages/1", "/pages/2"]
    assert "next_link" not in pages[0]
    assert pages[0]["prev_link"] == "/pages/1"
    assert pages[1]["next_link"] == "/"
    assert pages[1]["prev_link"] == "/pages/2"
    assert pages[2]["next_link"] == "/pages/1"
    assert "prev_link" not in pages[2]


def test_custom_page_size():
    assert len(paginate(make_records(7), per_page=2)) == 4


def test_page_size_must_be_positive():
    with pytest.raises(ConfigError):
        paginate(make_records(3), per_page=0)


def test_blog_props():
    meta = {"title": "Blog"}
    first = build_blog_props(make_records(3), meta)
    second = build_blog_props(make_records(3), meta)
    assert first["meta"] is meta
    assert len(first["pages"]) == 1
    assert first["cache_token"] != second["cache_token"]
