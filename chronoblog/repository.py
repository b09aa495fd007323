from __future__ import annotations

import re
from dataclasses import dataclass, replace
from pathlib import Path
from typing import Iterator

from .content import parse_page
from .errors import DuplicateTarget, EmptyRepository, SourceDirectoryNotFound
from .models import BuildContext, Page

SOURCE_NAME_RE = re.compile(r"^\d{4}-\d{2}-\d{2}-.+")


@dataclass(frozen=True)
class PageRepository:
    """All pages of one build, newest first (descending source file name)."""

    pages: tuple[Page, ...] = ()

    def __len__(self) -> int:
        return len(self.pages)

    def __iter__(self) -> Iterator[Page]:
        return iter(self.pages)

    def __getitem__(self, index: int) -> Page:
        return self.pages[index]

    @property
    def last_index(self) -> int:
        if not self.pages:
            raise EmptyRepository("no pages in repository")
        return len(self.pages) - 1

    @property
    def newest(self) -> Page:
        if not self.pages:
            raise EmptyRepository("no pages in repository")
        return self.pages[0]


def list_sources(source_dir: Path) -> list[Path]:
    if not source_dir.is_dir():
        raise SourceDirectoryNotFound("source directory not found", source_dir)
    sources = [
        path for path in source_dir.iterdir() if path.is_file() and SOURCE_NAME_RE.match(path.name)
    ]
    return sorted(sources, key=lambda p: p.name, reverse=True)


def build_repository(source_dir: Path, ctx: BuildContext) -> PageRepository:
    pages = []
    targets: dict[str, Path] = {}
    for index, path in enumerate(list_sources(source_dir)):
        page = parse_page(path, ctx)
        if page.target in targets:
            raise DuplicateTarget(f"same output {page.target} as {targets[page.target]}", path)
        targets[page.target] = path
        pages.append(replace(page, index=index))
        if not ctx.quiet:
            print(".", end="", flush=True)
    return PageRepository(tuple(pages))
