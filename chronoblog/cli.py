from __future__ import annotations

import argparse
import enum
import sys
import time
from pathlib import Path
from typing import Callable, Optional, Sequence

from . import __version__
from .config import load_config, setting
from .converters import ConverterKind, get_converter
from .errors import BlogError
from .models import BuildContext, SiteConfig
from .pages import build_site
from .repository import build_repository
from .tags import build_tag_index
from .utils import parse_bool, parse_int


class Command(enum.Enum):
    BUILD = "build"
    TAGS = "tags"

    @classmethod
    def parse(cls, name: Optional[str]) -> "Command":
        """Unknown or missing command names run the default build."""
        try:
            return cls((name or "").strip().lower())
        except ValueError:
            return cls.BUILD


def run_build(ctx: BuildContext) -> None:
    start = time.perf_counter()
    result = build_site(ctx)
    elapsed = time.perf_counter() - start
    if not ctx.quiet:
        print(f"Build completed in {elapsed:.2f}s.")
        print(f"Site generated in: {result.output_dir}")


def run_tags(ctx: BuildContext) -> None:
    repository = build_repository(ctx.source_dir, ctx)
    if not ctx.quiet:
        print()
    for tag, indices in build_tag_index(repository).items():
        print(f"{tag}\t{len(indices)}")


COMMANDS: dict[Command, Callable[[BuildContext], None]] = {
    Command.BUILD: run_build,
    Command.TAGS: run_tags,
}


def build_parser(config: dict, config_path: str) -> argparse.ArgumentParser:
    def cfg_str(key: str) -> str:
        return str(setting(config, key))

    parser = argparse.ArgumentParser(description="Static blog generator for date-named Markdown posts.")
    parser.add_argument(
        "command",
        nargs="?",
        default=Command.BUILD.value,
        help="Command to run: build (default) or tags. Unknown commands build.",
    )
    parser.add_argument("--config", default=config_path, help="Path to site config file (TOML/YAML/JSON).")
    parser.add_argument("--posts", default=cfg_str("posts"), help="Directory containing YYYY-MM-DD-*.md posts.")
    parser.add_argument("--assets", default=cfg_str("assets"), help="Directory copied to <output>/assets.")
    parser.add_argument("--output", default=cfg_str("build_dir"), help="Output directory for the site.")
    parser.add_argument("--title", default=cfg_str("title"), help="Site title.")
    parser.add_argument("--description", default=cfg_str("description"), help="Short site description.")
    parser.add_argument(
        "--long-description",
        default=cfg_str("long_description"),
        help="Long site description used when a page has none.",
    )
    parser.add_argument("--site-url", default=cfg_str("http_url"), help="Base URL used for absolute links.")
    parser.add_argument(
        "--converter",
        default=cfg_str("converter"),
        help=f"Content converter: {', '.join(kind.value for kind in ConverterKind)}.",
    )
    parser.add_argument(
        "--per-page",
        default=parse_int(setting(config, "per_page"), 0),
        type=int,
        help="Posts per archive page (0 = single index page).",
    )
    parser.add_argument(
        "--tag-pages",
        action=argparse.BooleanOptionalAction,
        default=parse_bool(setting(config, "tag_pages")),
        help="Generate a listing page per tag.",
    )
    parser.add_argument("--quiet", action="store_true", help="Only report errors.")
    return parser


def context_from_args(args: argparse.Namespace) -> BuildContext:
    return BuildContext(
        config=SiteConfig(
            title=args.title,
            description=args.description,
            long_description=args.long_description,
            http_url=args.site_url,
        ),
        source_dir=Path(args.posts),
        output_dir=Path(args.output),
        assets_dir=Path(args.assets),
        converter=get_converter(args.converter),
        per_page=max(0, args.per_page),
        tag_pages=args.tag_pages,
        quiet=args.quiet,
    )


def main(argv: Optional[Sequence[str]] = None) -> None:
    pre_parser = argparse.ArgumentParser(add_help=False)
    pre_parser.add_argument("--config", default="site.toml")
    pre_args, _ = pre_parser.parse_known_args(argv)
    config = load_config(Path(pre_args.config))

    args = build_parser(config, pre_args.config).parse_args(argv)
    ctx = context_from_args(args)
    command = Command.parse(args.command)
    if not ctx.quiet and command is Command.BUILD:
        print("chronoblog: static site generator")
        print(f"chronoblog: version {__version__}")
    try:
        COMMANDS[command](ctx)
    except BlogError as exc:
        if not ctx.quiet:
            print()
        print(f"chronoblog: error: {exc}", file=sys.stderr)
        sys.exit(1)


if __name__ == "__main__":
    main()
