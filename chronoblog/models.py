"""Build-scoped records: pages, site configuration and the build context."""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import Callable, Dict, Optional, Tuple

from .utils import format_date, join_url, target_for

Converter = Callable[[str], str]


@dataclass(frozen=True)
class SiteConfig:
    """Site-wide strings used by the layout and for absolute URLs."""

    title: str = "Title"
    description: str = "Default title"
    long_description: str = "Long description"
    http_url: str = "https://example.com"


@dataclass(frozen=True)
class BuildContext:
    """Everything a build needs, constructed once and passed to each step.

    The converter turns a full source document (front matter included)
    into an HTML fragment.
    """

    config: SiteConfig
    source_dir: Path
    output_dir: Path
    converter: Converter
    assets_dir: Optional[Path] = None
    per_page: int = 0
    tag_pages: bool = False
    quiet: bool = False


@dataclass(frozen=True)
class Document:
    """Head metadata for generated pages that have no source file."""

    title: str = ""
    description: str = ""
    absolute_url: str = ""


@dataclass(frozen=True)
class Page:
    """One published post.

    Location fields are derived from ``source_path`` and ``site_url`` and
    cannot be set independently. Unrecognised front matter keys end up in
    ``extra``.
    """

    source_path: str
    title: str
    date: str
    content: str
    site_url: str
    author: Optional[str] = None
    tags: Tuple[str, ...] = ()
    extra: Dict[str, str] = field(default_factory=dict)
    index: int = -1

    @property
    def target(self) -> str:
        return target_for(self.source_path)

    @property
    def url(self) -> str:
        return f"/{self.target}"

    @property
    def absolute_url(self) -> str:
        return join_url(self.site_url, self.target)

    @property
    def tag_string(self) -> str:
        return " ".join(self.tags)

    @property
    def description(self) -> str:
        return self.extra.get("description", "")

    @property
    def display_date(self) -> str:
        return format_date(self.date)
