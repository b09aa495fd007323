from __future__ import annotations

from typing import Iterable

from .models import Page
from .utils import slugify


def page_has_tag(page: Page, tag: str) -> bool:
    return tag in page.tag_string.split()


def collect_tags(pages: Iterable[Page]) -> list[str]:
    found = set()
    for page in pages:
        found.update(page.tag_string.split())
    return sorted(found)


def filter_by_tag(pages: Iterable[Page], tag: str) -> list[Page]:
    return [page for page in pages if page_has_tag(page, tag)]


def build_tag_index(pages: Iterable[Page]) -> dict[str, list[int]]:
    index: dict[str, list[int]] = {}
    for page in pages:
        for tag in page.tags:
            index.setdefault(tag, []).append(page.index)
    return dict(sorted(index.items()))


def assign_tag_slugs(tags: Iterable[str]) -> dict[str, str]:
    """Give every tag its own URL slug; later clashes get ``-2``, ``-3``, ..."""
    slugs: dict[str, str] = {}
    used: set[str] = set()
    for tag in sorted(set(tags)):
        base = slugify(tag)
        slug = base
        counter = 2
        while slug in used:
            slug = f"{base}-{counter}"
            counter += 1
        used.add(slug)
        slugs[tag] = slug
    return slugs
