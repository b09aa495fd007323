"""Tests for tag collection and filtering."""

import pytest

from chronoblog.models import Page
from chronoblog.tags import assign_tag_slugs, build_tag_index, collect_tags, filter_by_tag, page_has_tag


def make_page(name, tags, index):
    return Page(
        source_path=name,
        title=name,
        date="",
        content="",
        site_url="https://example.com",
        tags=tuple(tags.split()),
        index=index,
    )


@pytest.fixture
def pages():
    return [
        make_page("2020-01-02-x.md", "a b", 0),
        make_page("2020-01-01-y.md", "b c", 1),
    ]


class TestTags:
    def test_collect_tags(self, pages):
        assert collect_tags(pages) == ["a", "b", "c"]

    def test_collect_tags_empty(self):
        assert collect_tags([]) == []

    def test_filter_keeps_order(self, pages):
        assert filter_by_tag(pages, "b") == pages
        assert filter_by_tag(pages, "c") == [pages[1]]
        assert filter_by_tag(pages, "d") == []

    def test_membership_is_whole_token(self):
        page = make_page("2020-01-01-z.md", "python3", 0)
        assert not page_has_tag(page, "python")
        assert page_has_tag(page, "python3")

    def test_tag_index(self, pages):
        assert build_tag_index(pages) == {"a": [0], "b": [0, 1], "c": [1]}


class TestAssignTagSlugs:
    def test_clashing_tags_get_distinct_slugs(self):
        assert assign_tag_slugs(["c++", "c", "Go", "go"]) == {
            "Go": "go",
            "c": "c",
            "c++": "c-2",
            "go": "go-2",
        }

    def test_plain_tags_keep_their_slug(self):
        assert assign_tag_slugs(["python", "bash"]) == {"bash": "bash", "python": "python"}
