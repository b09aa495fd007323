from __future__ import annotations

import html
import shutil
from dataclasses import dataclass, field
from pathlib import Path
from typing import Mapping, Optional

from .models import BuildContext, Document
from .navigation import neighbors
from .render import (
    render_about,
    render_archive_index,
    render_post_page,
    render_tag_list,
)
from .repository import PageRepository, build_repository
from .tags import assign_tag_slugs, build_tag_index, collect_tags, filter_by_tag
from .utils import copy_static, join_url, make_staging_dir, paginate, swap_output_dir, write_text


@dataclass
class BuildResult:
    output_dir: Path
    pages: int = 0
    files: list[str] = field(default_factory=list)


def archive_page_path(number: int) -> str:
    if number == 1:
        return "index.html"
    return f"page/{number}/index.html"


def build_archive_pagination(number: int, total_pages: int) -> str:
    if total_pages <= 1:
        return ""
    items = []
    if number > 1:
        items.append(f'<a class="page-link" href="/{archive_page_path(number - 1)}">Newer posts</a>')
    else:
        items.append('<span class="page-link is-disabled">Newer posts</span>')
    numbers = []
    for num in range(1, total_pages + 1):
        if num == number:
            numbers.append(f'<span class="page-number is-active">{num}</span>')
        else:
            numbers.append(f'<a class="page-number" href="/{archive_page_path(num)}">{num}</a>')
    items.append(f'<div class="page-numbers">{"".join(numbers)}</div>')
    if number < total_pages:
        items.append(f'<a class="page-link" href="/{archive_page_path(number + 1)}">Older posts</a>')
    else:
        items.append('<span class="page-link is-disabled">Older posts</span>')
    return f'<nav class="pagination">{"".join(items)}</nav>'


def build_archive_head(ctx: BuildContext, number: int, total_pages: int) -> str:
    links = []
    if number > 1:
        href = join_url(ctx.config.http_url, archive_page_path(number - 1))
        links.append(f'    <link rel="prev" href="{html.escape(href)}" />')
    if number < total_pages:
        href = join_url(ctx.config.http_url, archive_page_path(number + 1))
        links.append(f'    <link rel="next" href="{html.escape(href)}" />')
    return "\n".join(links)


def build_posts(
    output_dir: Path,
    repository: PageRepository,
    ctx: BuildContext,
    tag_slugs: Optional[Mapping[str, str]] = None,
) -> list[str]:
    written = []
    for page in repository:
        nav = neighbors(repository, page.index)
        write_text(output_dir / page.target, render_post_page(ctx, page, nav, tag_slugs))
        written.append(page.target)
    return written


def build_index(output_dir: Path, repository: PageRepository, ctx: BuildContext) -> list[str]:
    pages = list(repository)
    if ctx.per_page > 0:
        batches = paginate(pages, ctx.per_page) or [[]]
    else:
        batches = [pages]
    total_pages = len(batches)
    written = []
    for number, batch in enumerate(batches, start=1):
        target = archive_page_path(number)
        document = Document(absolute_url=join_url(ctx.config.http_url, target))
        html_doc = render_archive_index(
            ctx,
            batch,
            document=document,
            pagination=build_archive_pagination(number, total_pages),
            extra_head=build_archive_head(ctx, number, total_pages),
        )
        write_text(output_dir / target, html_doc)
        written.append(target)
    return written


def build_about(output_dir: Path, ctx: BuildContext) -> list[str]:
    target = "uncopyright/index.html"
    write_text(output_dir / target, render_about(ctx))
    return [target]


def build_tag_pages(
    output_dir: Path, repository: PageRepository, ctx: BuildContext, tag_slugs: Mapping[str, str]
) -> list[str]:
    written = []
    for tag in collect_tags(repository):
        target = f"tags/{tag_slugs[tag]}/index.html"
        document = Document(
            title=f"Posts tagged {tag}",
            absolute_url=join_url(ctx.config.http_url, target),
        )
        html_doc = render_archive_index(
            ctx, filter_by_tag(repository, tag), document=document, heading=f"#{tag}"
        )
        write_text(output_dir / target, html_doc)
        written.append(target)
    target = "tags/index.html"
    write_text(output_dir / target, render_tag_list(ctx, build_tag_index(repository), tag_slugs))
    written.append(target)
    return written


def build_site(ctx: BuildContext, project_root: Optional[Path] = None) -> BuildResult:
    """Parse every post, render the whole site and swap it into place.

    Output is written to a staging directory first; the previous output
    directory is only replaced once every page rendered.
    """
    if not ctx.quiet:
        print("chronoblog: Transforming posts", end="", flush=True)
    repository = build_repository(ctx.source_dir, ctx)

    result = BuildResult(output_dir=ctx.output_dir, pages=len(repository))
    tag_slugs = assign_tag_slugs(collect_tags(repository)) if ctx.tag_pages else None
    staging_dir = make_staging_dir(ctx.output_dir)
    try:
        result.files.extend(build_posts(staging_dir, repository, ctx, tag_slugs))
        result.files.extend(build_index(staging_dir, repository, ctx))
        result.files.extend(build_about(staging_dir, ctx))
        if ctx.tag_pages:
            result.files.extend(build_tag_pages(staging_dir, repository, ctx, tag_slugs))
        if ctx.assets_dir is not None and ctx.assets_dir.is_dir():
            copy_static(ctx.assets_dir, staging_dir / "assets")
        swap_output_dir(staging_dir, ctx.output_dir, project_root or Path.cwd())
    finally:
        if staging_dir.exists():
            shutil.rmtree(staging_dir)

    if not ctx.quiet:
        print("ok")
    return result
