"""
Tests for the editor document helpers, post validation and HTML sanitizing.
"""
import pytest

from factories import doc
from src.shared.utils.content import (
    calculate_reading_time,
    count_words,
    extract_headings,
    extract_images,
    extract_text,
    has_text,
    render_html,
    slugify,
)
from src.shared.utils.sanitize import sanitize_html
from src.shared.utils.validation import validate_post


ARTICLE = {
    "type": "doc",
    "content": [
        {"type": "heading", "attrs": {"level": 2}, "content": [{"type": "text", "text": "Budget"}]},
        {
            "type": "paragraph",
            "content": [
                {"type": "text", "text": "Hello "},
                {"type": "text", "text": "world", "marks": [{"type": "bold"}]},
            ],
        },
        {"type": "image", "attrs": {"src": "/a.jpg", "alt": "Parliament"}},
        {"type": "image", "attrs": {"src": "/b.jpg"}},
    ],
}


class TestExtractText:
    def test_blocks_separated_inline_runs_joined(self):
        assert extract_text(ARTICLE) == "Budget\n\nHello world"

    def test_none_and_html_string(self):
        assert extract_text(None) == ""
        assert extract_text("<p>Tom &amp; Jerry</p>").strip() == "Tom & Jerry"

    def test_count_words(self):
        assert count_words(ARTICLE) == 3


class TestReadingTime:
    def test_empty_is_one_minute(self):
        assert calculate_reading_time(None) == 1
        assert calculate_reading_time({}) == 1

    def test_rounds_up_at_225_wpm(self):
        assert calculate_reading_time(doc(" ".join(["word"] * 450))) == 2
        assert calculate_reading_time(doc(" ".join(["word"] * 451))) == 3


class TestHasText:
    @pytest.mark.parametrize("node", [None, "", "   ", {"type": "doc", "content": [{"type": "paragraph"}]}])
    def test_blank(self, node):
        assert has_text(node) is False

    def test_text_node(self):
        assert has_text(doc("x")) is True


def test_extract_headings_and_images():
    assert extract_headings(ARTICLE) == ["h2:Budget"]
    assert extract_images(ARTICLE) == [
        {"src": "/a.jpg", "alt": "Parliament"},
        {"src": "/b.jpg", "alt": ""},
    ]


def test_render_html_escapes_text_and_applies_marks():
    node = {
        "type": "paragraph",
        "content": [
            {"type": "text", "text": "a < b "},
            {"type": "text", "text": "link", "marks": [{"type": "link", "attrs": {"href": "https://x.com"}}]},
        ],
    }
    assert render_html(node) == '<p>a &lt; b <a href="https://x.com">link</a></p>'
    assert "<h2>Budget</h2>" in render_html(ARTICLE)
    assert "<strong>world</strong>" in render_html(ARTICLE)


@pytest.mark.parametrize(
    "value,expected",
    [
        ("Hello, World!  2025", "hello-world-2025"),
        ("  --Trim--  ", "trim"),
        ("---", ""),
    ],
)
def test_slugify(value, expected):
    assert slugify(value) == expected


def test_slugify_truncates_without_trailing_hyphen():
    assert slugify("aaaaa bbb", max_length=6) == "aaaaa"


class TestValidatePost:
    def test_valid_post(self):
        result = validate_post({
            "title": "A perfectly fine title",
            "slug": "a-perfectly-fine-title",
            "category": "Tech",
            "content": doc("Body"),
        })
        assert result.valid
        assert result.errors == []

    def test_reports_every_failing_field(self):
        result = validate_post({
            "title": "Short",
            "slug": "Bad Slug",
            "excerpt": "x" * 301,
            "category": "",
            "content": {"type": "doc", "content": []},
        })

        assert not result.valid
        assert [e.field for e in result.errors] == ["title", "slug", "excerpt", "category", "content"]
        assert result.to_details()["errors"][0] == {
            "field": "title",
            "message": "Title must be at least 10 characters",
        }
        messages = {e.field: e.message for e in result.errors}
        assert messages["slug"] == "Slug can only contain lowercase letters, numbers, and hyphens"
        assert messages["content"] == "Content cannot be empty"

    def test_missing_fields(self):
        messages = {e.field: e.message for e in validate_post({}).errors}
        assert messages == {
            "title": "Title is required",
            "slug": "Slug is required",
            "category": "Category is required",
            "content": "Content is required",
        }


class TestSanitizeHtml:
    def test_strips_scripts_and_event_handlers(self):
        cleaned = sanitize_html('<p onclick="steal()">Hi<script>alert(1)</script></p>')
        assert "<script" not in cleaned
        assert "onclick" not in cleaned
        assert cleaned.startswith("<p>Hi")

    def test_drops_javascript_urls(self):
        cleaned = sanitize_html('<a href="javascript:alert(1)">x</a>')
        assert "javascript" not in cleaned

    def test_keeps_allowed_markup(self):
        html = '<p><strong>Bold</strong> <a href="https://inshortbd.com">link</a></p>'
        assert sanitize_html(html) == html


class TestHeadingLevel:
    @pytest.mark.parametrize(
        "level, expected",
        [(9, 6), (0, 1), ("3", 3), ('2><script>alert(1)</script', 2), (None, 2)],
    )
    def test_level_clamped_to_a_safe_tag(self, level, expected):
        node = {"type": "heading", "attrs": {"level": level}, "content": [{"type": "text", "text": "T"}]}

        assert render_html(node) == f"<h{expected}>T</h{expected}>"
        assert extract_headings(node) == [f"h{expected}:T"]

    def test_bare_string_node_is_escaped(self):
        assert render_html("<b>") == "&lt;b&gt;"
