from __future__ import annotations

import argparse
import glob
import logging
import sys
import time
from pathlib import Path
from typing import Optional

from .config import get_collection, load_config, site_meta
from .content import load_records
from .errors import BuildError
from .pages import POSTS_PER_PAGE, build_blog_props
from .render import copy_static, create_environment, render_site
from .utils import clean_output_dir, parse_bool, parse_int

logger = logging.getLogger(__name__)


def build_site(args: argparse.Namespace, meta: dict) -> int:
    collection = get_collection(args.collection)
    templates_dir = Path(args.templates)
    output_dir = Path(args.output)
    static_dir = Path(args.static)
    project_root = Path.cwd()

    if not templates_dir.exists():
        raise BuildError(f"Templates directory not found: {templates_dir}")

    pattern = args.sources or f"{collection.name}/*.md"
    source_paths = sorted((Path(p) for p in glob.glob(pattern)), key=lambda p: p.as_posix())
    logger.info("Found %d sources matching %s", len(source_paths), pattern)

    env = create_environment(templates_dir)
    records = load_records(source_paths, collection, env, args.build_workers)
    blog_props = build_blog_props(records, meta, args.per_page)

    if args.clean:
        clean_output_dir(output_dir, project_root)
    output_dir.mkdir(parents=True, exist_ok=True)
    if static_dir.exists():
        copy_static(static_dir, output_dir)

    return render_site(blog_props, output_dir, collection, env, args.build_workers)


def main(argv: Optional[list[str]] = None) -> int:
    pre_parser = argparse.ArgumentParser(add_help=False)
    pre_parser.add_argument(
        "--config",
        default="site.toml",
        help="Path to site config file (TOML/YAML/JSON).",
    )
    pre_args, _ = pre_parser.parse_known_args(argv)
    try:
        config = load_config(Path(pre_args.config))
        meta = site_meta(config)
    except BuildError as exc:
        print(exc, file=sys.stderr)
        return 1

    def cfg_value(key: str, default: object) -> object:
        value = config.get(key)
        return default if value is None else value

    def cfg_str(key: str, default: str) -> str:
        return str(cfg_value(key, default))

    def cfg_bool(key: str, default: bool) -> bool:
        return parse_bool(cfg_value(key, default))

    def cfg_int(key: str, default: int) -> int:
        return parse_int(cfg_value(key, default), default)

    parser = argparse.ArgumentParser(description="Static blog generator for comment-annotated documents.")
    parser.add_argument("--config", default=pre_args.config, help="Path to site config file (TOML/YAML/JSON).")
    parser.add_argument(
        "--collection",
        default=cfg_str("collection", "articles"),
        help="Collection naming to use: articles or posts.",
    )
    parser.add_argument(
        "--sources",
        default=cfg_str("sources", ""),
        help="Glob pattern for source documents (default: <collection>/*.md).",
    )
    parser.add_argument("--templates", default=cfg_str("templates", "templates"), help="Templates directory.")
    parser.add_argument("--static", default=cfg_str("static", "static"), help="Directory containing static assets.")
    parser.add_argument("--output", default=cfg_str("output", "public"), help="Output directory for the site.")
    parser.add_argument(
        "--per-page",
        default=cfg_int("per_page", POSTS_PER_PAGE),
        type=int,
        help="Number of documents per listing page.",
    )
    parser.add_argument(
        "--build-workers",
        default=cfg_int("build_workers", 0),
        type=int,
        help="Number of worker threads for reading/rendering (0 = auto).",
    )
    parser.add_argument(
        "--clean",
        action=argparse.BooleanOptionalAction,
        default=cfg_bool("clean", False),
        help="Clean output directory before build.",
    )
    parser.add_argument(
        "--verbose",
        action=argparse.BooleanOptionalAction,
        default=cfg_bool("verbose", False),
        help="Log each pipeline stage.",
    )
    args = parser.parse_args(argv)
    if args.verbose:
        logging.basicConfig(level=logging.INFO, format="%(levelname)s %(name)s: %(message)s")

    start = time.perf_counter()
    try:
        count = build_site(args, meta)
    except (BuildError, OSError) as exc:
        print(exc, file=sys.stderr)
        return 1
    elapsed = time.perf_counter() - start
    print(f"Blog is constructed! {count} documents in {elapsed:.2f}s.")
    print(f"Site generated in: {args.output}")
    return 0
