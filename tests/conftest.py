from __future__ import annotations

from pathlib import Path

import pytest

from commentblog.config import COLLECTIONS
from commentblog.render import create_environment

TEMPLATES = {
    "article.html": (
        "<h1>{{ article.title }}</h1>\n"
        "{{ article.body | safe }}\n"
        '<a rel="next" href="{{ article.next_link }}"></a>\n'
        '<a rel="prev" href="{{ article.prev_link }}"></a>\n'
    ),
    "post.html": "<h1>{{ post.title }}</h1>\n{{ post.body | safe }}\n",
    "page.html": "page {{ page.index }}: {% for p in page.posts %}{{ p.basename }},{% endfor %}\n",
    "index.html": (
        "<title>{{ meta.title }}</title>\n"
        '{% for p in page.posts %}<a href="{{ p.link }}">{{ p.title }}</a>\n{% endfor %}'
        "<!-- {{ cache_token }} -->\n"
    ),
}


def write_templates(root: Path) -> Path:
    root.mkdir(parents=True, exist_ok=True)
    for name, text in TEMPLATES.items():
        (root / name).write_text(text, encoding="utf-8")
    return root


def write_source(folder: Path, name: str, text: str) -> Path:
    folder.mkdir(parents=True, exist_ok=True)
    path = folder / name
    path.write_text(text, encoding="utf-8")
    return path


@pytest.fixture
def templates_dir(tmp_path: Path) -> Path:
    return write_templates(tmp_path / "templates")


@pytest.fixture
def env(templates_dir: Path):
    return create_environment(templates_dir)


@pytest.fixture
def articles():
    return COLLECTIONS["articles"]
