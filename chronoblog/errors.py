from __future__ import annotations

from pathlib import Path
from typing import Optional


class BlogError(Exception):
    """Fatal build error. Carries the offending file when one is known."""

    def __init__(self, message: str, path: Optional[Path | str] = None) -> None:
        super().__init__(message)
        self.message = message
        self.path = path

    def __str__(self) -> str:
        if self.path is None:
            return self.message
        return f"{self.path}: {self.message}"


class MalformedFrontMatter(BlogError):
    pass


class ConversionError(BlogError):
    pass


class SourceDirectoryNotFound(BlogError):
    pass


class DuplicateTarget(BlogError):
    pass


class EmptyRepository(BlogError):
    pass


class InvalidPageSize(BlogError, ValueError):
    pass
