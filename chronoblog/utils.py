from __future__ import annotations

import os
import re
import shutil
import tempfile
from pathlib import Path, PurePosixPath
from typing import Sequence, TypeVar

from .errors import BlogError, InvalidPageSize

T = TypeVar("T")

DATE_PREFIX_RE = re.compile(r"^(\d{4})-(\d{2})-(\d{2})-")
DISPLAY_DATE_RE = re.compile(r"^(\d{4})-(\d{2})-(\d{2})(?=\s|$)")
SLUG_RE = re.compile(r"[^\w]+", re.UNICODE)


def parse_bool(value: object) -> bool:
    if isinstance(value, bool):
        return value
    if value is None:
        return False
    if isinstance(value, (int, float)):
        return value != 0
    if isinstance(value, str):
        return value.strip().lower() in {"1", "true", "yes", "y", "on"}
    return False


def parse_int(value: object, default: int) -> int:
    if value is None:
        return default
    if isinstance(value, bool):
        return int(value)
    if isinstance(value, int):
        return value
    try:
        return int(str(value).strip())
    except ValueError:
        return default


def slugify(text: str) -> str:
    text = SLUG_RE.sub("-", text.lower())
    text = text.strip("-_").replace("_", "-")
    return text or "tag"

def join_url(base: str, path: str) -> str:
    base = base.rstrip("/")
    path = path.lstrip("/")
    if not path:
        return base
    return f"{base}/{path}"


def target_for(source_path: str) -> str:
    """Map ``2020-03-21-foo.md`` to ``2020/03/21/foo.html``."""
    name = DATE_PREFIX_RE.sub(r"\1/\2/\3/", source_path, count=1)
    return str(PurePosixPath(name).with_suffix(".html"))


def format_date(value: str) -> str:
    """``2020-03-21 10:00:00 +0100`` -> ``2020/03/21``; other text is kept."""
    value = value.strip()
    match = DISPLAY_DATE_RE.match(value)
    if not match:
        return value
    return "/".join(match.groups())


def paginate(items: Sequence[T], size: int) -> list[list[T]]:
    if size <= 0:
        raise InvalidPageSize(f"page size must be positive, got {size}")
    return [list(items[start : start + size]) for start in range(0, len(items), size)]


def write_text(path: Path, text: str) -> None:
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(text, encoding="utf-8")


def copy_static(static_dir: Path, output_dir: Path) -> None:
    output_dir.mkdir(parents=True, exist_ok=True)
    for item in sorted(static_dir.iterdir()):
        dest = output_dir / item.name
        if item.is_dir():
            if dest.exists():
                shutil.rmtree(dest)
            shutil.copytree(item, dest)
        else:
            shutil.copy2(item, dest)


def make_staging_dir(output_dir: Path) -> Path:
    """Create an empty directory next to ``output_dir`` to build into."""
    parent = output_dir.resolve().parent
    parent.mkdir(parents=True, exist_ok=True)
    staging_dir = Path(tempfile.mkdtemp(prefix=f".{output_dir.name}.staging-", dir=parent))
    staging_dir.chmod(0o755)
    return staging_dir


def swap_output_dir(staging_dir: Path, output_dir: Path, project_root: Path) -> None:
    """Replace ``output_dir`` with the finished ``staging_dir``."""
    output_resolved = output_dir.resolve()
    root_resolved = project_root.resolve()
    if output_resolved == root_resolved or root_resolved.is_relative_to(output_resolved):
        raise BlogError("refusing to replace a directory containing the project root", output_dir)
    if not output_dir.exists():
        os.replace(staging_dir, output_dir)
        return
    backup = output_resolved.with_name(f".{output_dir.name}.previous")
    if backup.exists():
        shutil.rmtree(backup)
    os.replace(output_dir, backup)
    try:
        os.replace(staging_dir, output_dir)
    except OSError:
        os.replace(backup, output_dir)
        raise
    shutil.rmtree(backup)
