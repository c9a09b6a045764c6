from __future__ import annotations

import logging
import shutil
from pathlib import Path

import markdown
from jinja2 import Environment, FileSystemLoader, TemplateError, select_autoescape

from .attributes import strip_comment_lines
from .config import Collection
from .errors import RenderError
from .utils import run_parallel

logger = logging.getLogger(__name__)

MARKDOWN_EXTENSIONS = ["fenced_code", "tables", "codehilite"]
MARKDOWN_CONFIGS = {"codehilite": {"guess_lang": False, "css_class": "codehilite"}}


def create_environment(templates_dir: Path) -> Environment:
    """Jinja2 environment shared by source documents and site templates."""
    return Environment(
        loader=FileSystemLoader(str(templates_dir)),
        autoescape=select_autoescape(["html", "xml"]),
        trim_blocks=True,
        lstrip_blocks=True,
    )


def render_markdown(text: str) -> str:
    md = markdown.Markdown(extensions=MARKDOWN_EXTENSIONS, extension_configs=MARKDOWN_CONFIGS)
    return md.convert(text)


def render_document(env: Environment, source: str, attributes: dict) -> str:
    text = env.from_string(strip_comment_lines(source)).render({**attributes, "attributes": attributes})
    return render_markdown(text)


def render_template(env: Environment, name: str, context: dict) -> str:
    try:
        return env.get_template(name).render(**context)
    except TemplateError as exc:
        raise RenderError(f"Template {name} failed: {exc}") from exc


def write_text(path: Path, text: str) -> None:
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(text, encoding="utf-8")


def copy_static(static_dir: Path, output_dir: Path) -> None:
    for item in static_dir.iterdir():
        dest = output_dir / item.name
        if item.is_dir():
            if dest.exists():
                shutil.rmtree(dest)
            shutil.copytree(item, dest)
        else:
            shutil.copy2(item, dest)


def render_documents(
    blog_props: dict, output_dir: Path, collection: Collection, env: Environment, workers: int = 0
) -> int:
    target_dir = output_dir / collection.output_dir
    target_dir.mkdir(parents=True, exist_ok=True)

    def write_record(record: dict) -> None:
        context = {**blog_props, collection.record_key: record}
        html_text = render_template(env, collection.document_template, context)
        write_text(target_dir / f"{record['basename']}.html", html_text)

    records = [record for page in blog_props["pages"] for record in page["posts"]]
    run_parallel(write_record, records, workers)
    logger.info("Wrote %d documents to %s", len(records), target_dir)
    return len(records)


def render_pages(
    blog_props: dict, output_dir: Path, collection: Collection, env: Environment, workers: int = 0
) -> None:
    pages_dir = output_dir / "pages"
    pages_dir.mkdir(parents=True, exist_ok=True)

    def write_page(page: dict) -> None:
        context = {**blog_props, "page": page}
        html_text = render_template(env, collection.page_template, context)
        write_text(pages_dir / f"{page['index']}.html", html_text)

    run_parallel(write_page, blog_props["pages"], workers)
    logger.info("Wrote %d pages to %s", len(blog_props["pages"]), pages_dir)


def render_index(blog_props: dict, output_dir: Path, collection: Collection, env: Environment) -> None:
    output_dir.mkdir(parents=True, exist_ok=True)
    context = {**blog_props, "page": blog_props["pages"][0]}
    write_text(output_dir / "index.html", render_template(env, collection.index_template, context))
    logger.info("Wrote %s", output_dir / "index.html")


def render_site(
    blog_props: dict, output_dir: Path, collection: Collection, env: Environment, workers: int = 0
) -> int:
    output_dir.mkdir(parents=True, exist_ok=True)
    count = render_documents(blog_props, output_dir, collection, env, workers)
    render_pages(blog_props, output_dir, collection, env, workers)
    render_index(blog_props, output_dir, collection, env)
    return count
