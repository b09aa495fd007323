"""HTML composition: post fragments, the default layout and archive lists.

Templates live in ``chronoblog/templates`` and use ``{{key}}`` placeholders.
Front matter values are escaped here; converted post content is inserted
as-is.
"""

from __future__ import annotations

import html
import json
import re
from functools import lru_cache
from pathlib import Path
from typing import Iterable, Mapping, Optional, Protocol

from .models import BuildContext, Document, Page
from .navigation import Navigation
from .utils import join_url

TEMPLATES_DIR = Path(__file__).parent / "templates"
NAV_PLACEHOLDER = "&nbsp;"
PLACEHOLDER_RE = re.compile(r"\{\{(\w+)\}\}")


class HeadMetadata(Protocol):
    title: str
    description: str
    absolute_url: str


def tag_url(slug: str) -> str:
    return f"/tags/{slug}/"


@lru_cache(maxsize=None)
def read_template(name: str) -> str:
    return (TEMPLATES_DIR / name).read_text(encoding="utf-8")


def render_template(template: str, **context: str) -> str:
    """Fill every placeholder in one pass; inserted values are not rescanned."""
    return PLACEHOLDER_RE.sub(lambda m: context.get(m.group(1), m.group(0)), template)


def render_nav_block(label: str, page: Optional[Page]) -> str:
    if page is None:
        return NAV_PLACEHOLDER
    return f'<div>{label}</div><a href="{html.escape(page.url)}">{html.escape(page.title)}</a>'


def render_tag_links(page: Page, tag_slugs: Optional[Mapping[str, str]] = None) -> str:
    links = []
    for tag in page.tags:
        href = tag_url(tag_slugs[tag]) if tag_slugs is not None else "#"
        links.append(f'<a class="post-tag" href="{html.escape(href)}">{html.escape(tag)}</a>')
    return " ".join(links)


def render_post(page: Page, nav: Navigation, tag_slugs: Optional[Mapping[str, str]] = None) -> str:
    """Render the body of one post.

    Both navigation slots are always present; a missing neighbour is
    rendered as a blank placeholder so the layout does not shift. Tags link
    to their listing pages when ``tag_slugs`` is given.
    """
    author = f' <span class="post-author">{html.escape(page.author)}</span>' if page.author else ""
    return render_template(
        read_template("post.html"),
        url=html.escape(page.url),
        title=html.escape(page.title),
        date=html.escape(page.display_date),
        author=author,
        tags=render_tag_links(page, tag_slugs),
        next_block=render_nav_block("Next post", nav.next),
        prev_block=render_nav_block("Previous post", nav.prev),
        content=page.content,
    )


def site_json_ld(ctx: BuildContext) -> str:
    data = {
        "@type": "WebSite",
        "url": join_url(ctx.config.http_url, "") + "/",
        "headline": ctx.config.title,
        "description": ctx.config.long_description,
        "name": ctx.config.title,
        "@context": "http://schema.org",
    }
    return json.dumps(data, ensure_ascii=False).replace("</", "<\\/")


def render_layout(ctx: BuildContext, document: HeadMetadata, inner: str, extra_head: str = "") -> str:
    config = ctx.config
    if document.title:
        head_title = f"{document.title} | {config.title}"
    else:
        head_title = f"{config.title} | {config.description}"
    return render_template(
        read_template("default.html"),
        head_title=html.escape(head_title),
        og_title=html.escape(document.title or config.title),
        description=html.escape(document.description or config.long_description),
        absolute_url=html.escape(document.absolute_url),
        site_title=html.escape(config.title),
        extra_head=extra_head,
        json_ld=site_json_ld(ctx),
        content=inner,
    )


def render_post_page(
    ctx: BuildContext, page: Page, nav: Navigation, tag_slugs: Optional[Mapping[str, str]] = None
) -> str:
    article = render_template(
        read_template("article.html"),
        url=html.escape(page.url),
        content=render_post(page, nav, tag_slugs),
    )
    return render_layout(ctx, page, article)


def render_archive_item(page: Page) -> str:
    return (
        f'<li><a href="{html.escape(page.url)}">{html.escape(page.title)}</a> '
        f'<span class="all-posts-date">{html.escape(page.display_date)}</span></li>'
    )


def render_archive_index(
    ctx: BuildContext,
    pages: Iterable[Page],
    document: Optional[HeadMetadata] = None,
    heading: Optional[str] = None,
    pagination: str = "",
    extra_head: str = "",
) -> str:
    if document is None:
        document = Document(absolute_url=join_url(ctx.config.http_url, "index.html"))
    listing = render_template(
        read_template("archive.html"),
        heading=html.escape(heading if heading is not None else ctx.config.title),
        about=html.escape(ctx.config.description),
        pagination=pagination,
        items="\n".join(render_archive_item(page) for page in pages),
    )
    return render_layout(ctx, document, listing, extra_head)


def render_about(ctx: BuildContext) -> str:
    document = Document(title="About", absolute_url=join_url(ctx.config.http_url, "uncopyright/"))
    body = render_template(
        read_template("about.html"),
        site_title=html.escape(ctx.config.title),
        site_description=html.escape(ctx.config.description),
    )
    return render_layout(ctx, document, body)


def render_tag_list(ctx: BuildContext, tag_index: dict[str, list[int]], tag_slugs: Mapping[str, str]) -> str:
    items = "\n".join(
        f'<li><a href="{html.escape(tag_url(tag_slugs[tag]))}">{html.escape(tag)}</a> '
        f'<span class="all-posts-date">{len(indices)}</span></li>'
        for tag, indices in tag_index.items()
    )
    document = Document(title="Tags", absolute_url=join_url(ctx.config.http_url, "tags/index.html"))
    listing = render_template(
        read_template("archive.html"),
        heading="Tags",
        about=html.escape(ctx.config.description),
        pagination="",
        items=items,
    )
    return render_layout(ctx, document, listing)
