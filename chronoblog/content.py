from __future__ import annotations

import re
from pathlib import Path
from typing import Optional

from .errors import BlogError, ConversionError, MalformedFrontMatter
from .models import BuildContext, Page
from .utils import DATE_PREFIX_RE

FRONT_MATTER_DELIMITER = "---"
KNOWN_KEYS = {"title", "date", "author", "tags"}
CONTINUATION_RE = re.compile(r"^-(?:\s+(?P<value>.*))?$")
KEY_RE = re.compile(r"^(?P<key>[^\s:]+)\s*:(?P<value>.*)$")
QUOTED_RE = re.compile(r'^"(.*)"$')
LIST_MARKER_RE = re.compile(r"^(?P<indent>[ \t]*)(?:[-+*]|\d+[.)])\s+")
FENCE_RE = re.compile(r"^(?P<indent>[ \t]*)(`{3,}|~{3,})")


def parse_front_matter(text: str, path: Optional[Path] = None) -> tuple[dict[str, str], str]:
    """Split a document into its front matter fields and the body.

    The block opens with a ``---`` line and ends at the next ``---`` line.
    ``- value`` lines extend the previous key, space-joined, so a YAML-style
    list becomes one space-separated string.
    """
    lines = text.lstrip("\ufeff").splitlines()
    if not lines or lines[0].rstrip() != FRONT_MATTER_DELIMITER:
        raise MalformedFrontMatter("document does not start with a '---' front matter block", path)

    meta: dict[str, str] = {}
    last_key = None
    end = None
    for number, raw_line in enumerate(lines[1:], start=2):
        line = raw_line.strip()
        if raw_line.rstrip() == FRONT_MATTER_DELIMITER:
            end = number - 1
            break
        if not line or line.startswith("#"):
            continue
        continuation = CONTINUATION_RE.match(line)
        if continuation:
            if last_key is None:
                raise MalformedFrontMatter(f"line {number}: list entry before any key", path)
            value = (continuation.group("value") or "").strip()
            meta[last_key] = " ".join(part for part in (meta[last_key], value) if part)
            continue
        match = KEY_RE.match(line)
        if not match:
            raise MalformedFrontMatter(f"line {number}: expected 'key: value', got {line!r}", path)
        key = match.group("key")
        value = match.group("value").strip()
        if key == "title":
            value = QUOTED_RE.sub(r"\1", value)
        meta[key] = value
        last_key = key

    if end is None:
        raise MalformedFrontMatter("front matter block has no terminating '---'", path)
    return meta, "\n".join(lines[end + 1 :])


def split_tags(value: str) -> tuple[str, ...]:
    return tuple(dict.fromkeys(value.split()))


def parse_page(path: Path, ctx: BuildContext) -> Page:
    text = path.read_text(encoding="utf-8")
    meta, _ = parse_front_matter(text, path)
    try:
        content = ctx.converter(text)
    except BlogError as exc:
        if exc.path is None:
            exc.path = path
        raise
    except Exception as exc:
        raise ConversionError(f"content conversion failed: {exc}", path) from exc

    date = meta.get("date", "")
    if not date:
        prefix = DATE_PREFIX_RE.match(path.name)
        if prefix:
            date = "-".join(prefix.groups())
    return Page(
        source_path=path.name,
        title=meta.get("title", ""),
        date=date,
        content=content,
        site_url=ctx.config.http_url,
        author=meta.get("author") or None,
        tags=split_tags(meta.get("tags", "")),
        extra={key: value for key, value in meta.items() if key not in KNOWN_KEYS},
    )


def normalize_list_spacing(text: str) -> str:
    """Insert a blank line before top-level lists that directly follow a paragraph."""
    lines = text.splitlines()
    out: list[str] = []
    in_fence = False
    fence_marker = ""
    for line in lines:
        fence_match = FENCE_RE.match(line)
        if fence_match:
            marker = fence_match.group(2)
            if not in_fence:
                in_fence = True
                fence_marker = marker
            elif marker == fence_marker:
                in_fence = False
                fence_marker = ""
            out.append(line)
            continue
        if in_fence:
            out.append(line)
            continue
        list_match = LIST_MARKER_RE.match(line)
        if list_match and not list_match.group("indent"):
            if out and out[-1].strip() and not LIST_MARKER_RE.match(out[-1]):
                out.append("")
        out.append(line)
    return "\n".join(out)
