from __future__ import annotations

from typing import NamedTuple, Optional

from .models import Page
from .repository import PageRepository


class Navigation(NamedTuple):
    prev: Optional[Page] = None
    next: Optional[Page] = None


def neighbors(repository: PageRepository, index: int) -> Navigation:
    """Older post is at ``index + 1``, newer one at ``index - 1``."""
    size = len(repository)
    if not 0 <= index < size:
        raise IndexError(f"page index {index} out of range for {size} pages")
    prev_page = repository[index + 1] if index + 1 < size else None
    next_page = repository[index - 1] if index - 1 >= 0 else None
    return Navigation(prev_page, next_page)
