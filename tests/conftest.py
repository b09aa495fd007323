"""Shared fixtures for chronoblog tests."""

from pathlib import Path

import pytest

from chronoblog.content import parse_front_matter
from chronoblog.models import BuildContext, SiteConfig


def stub_converter(document: str) -> str:
    """Wrap the body in a paragraph so tests do not depend on Markdown output."""
    _, body = parse_front_matter(document)
    return f"<p>{body.strip()}</p>"


def write_post(directory: Path, name: str, title: str, tags=(), body: str = "Body text.", **fields) -> Path:
    lines = ["---", f'title: "{title}"']
    for key, value in fields.items():
        lines.append(f"{key}: {value}")
    if tags:
        lines.append("tags:")
        lines.extend(f"- {tag}" for tag in tags)
    lines.append("---")
    lines.append("")
    lines.append(body)
    path = directory / name
    path.write_text("\n".join(lines) + "\n", encoding="utf-8")
    return path


@pytest.fixture
def site_config():
    return SiteConfig(
        title="Blog",
        description="Short description",
        long_description="A longer description of the blog",
        http_url="https://blog.example.com",
    )


@pytest.fixture
def make_ctx(tmp_path, site_config):
    def factory(**overrides):
        options = dict(
            config=site_config,
            source_dir=tmp_path / "posts",
            output_dir=tmp_path / "build",
            assets_dir=tmp_path / "assets",
            converter=stub_converter,
            quiet=True,
        )
        options.update(overrides)
        return BuildContext(**options)

    return factory


@pytest.fixture
def posts_dir(tmp_path):
    """Three posts, one stray file and one nested file that must be ignored."""
    directory = tmp_path / "posts"
    directory.mkdir()
    write_post(directory, "2020-03-21-foo.md", "Foo", tags=["a", "b"], date="2020-03-21 10:00:00 +0100")
    write_post(directory, "2021-01-02-bar.md", "Bar", tags=["b", "c"], date="2021-01-02 08:30:00 +0000")
    write_post(
        directory,
        "2019-12-31-baz.md",
        "Baz",
        date="2019-12-31 23:59:59 +0000",
        author="Jane",
        description="About baz",
    )
    (directory / "README.md").write_text("not a post\n", encoding="utf-8")
    nested = directory / "2018"
    nested.mkdir()
    write_post(nested, "2018-01-01-nested.md", "Nested")
    return directory


@pytest.fixture
def post_writer():
    return write_post
