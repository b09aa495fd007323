"""Content converters: full source document in, HTML fragment out."""

from __future__ import annotations

import enum
import shutil
import subprocess

import markdown

from .content import parse_front_matter, normalize_list_spacing
from .errors import ConversionError
from .models import Converter

MARKDOWN_EXTENSIONS = ["fenced_code", "tables", "codehilite", "toc"]


class ConverterKind(enum.Enum):
    MARKDOWN = "markdown"
    PANDOC = "pandoc"

    @classmethod
    def parse(cls, name: str) -> "ConverterKind":
        """Look up a converter by name; unknown names get the default."""
        try:
            return cls((name or "").strip().lower())
        except ValueError:
            return cls.MARKDOWN


def markdown_converter() -> Converter:
    def convert(document: str) -> str:
        _, body = parse_front_matter(document)
        md = markdown.Markdown(
            extensions=MARKDOWN_EXTENSIONS,
            extension_configs={"codehilite": {"guess_lang": False}},
        )
        return md.convert(normalize_list_spacing(body))

    return convert


def pandoc_converter(executable: str = "pandoc") -> Converter:
    def convert(document: str) -> str:
        if shutil.which(executable) is None:
            raise ConversionError(f"{executable} is not installed")
        result = subprocess.run(
            [executable, "--from", "markdown", "--to", "html"],
            input=document,
            capture_output=True,
            text=True,
            encoding="utf-8",
        )
        if result.returncode != 0:
            raise ConversionError(f"{executable} exited with {result.returncode}: {result.stderr.strip()}")
        return result.stdout

    return convert


CONVERTERS = {
    ConverterKind.MARKDOWN: markdown_converter,
    ConverterKind.PANDOC: pandoc_converter,
}


def get_converter(name: str) -> Converter:
    return CONVERTERS[ConverterKind.parse(name)]()
