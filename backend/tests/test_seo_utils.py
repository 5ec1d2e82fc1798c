"""
Tests for the SEO analysis utilities.
"""
import pytest

from src.shared.utils.seo.analyzer import (
    analyze_content_length,
    analyze_headings,
    analyze_image_alts,
    analyze_link_presence,
    analyze_meta_description,
    analyze_title,
    calculate_seo_score,
    heading_level,
)
from src.shared.utils.seo.images import analyze_images, validate_alt_text
from src.shared.utils.seo.keywords import analyze_keyword, calculate_keyword_density
from src.shared.utils.seo.links import analyze_links
from src.shared.utils.seo.meta import analyze_meta_tags, optimize_title_length
from src.shared.utils.seo.readability import (
    calculate_readability,
    count_syllables,
    readability_level,
)


class TestFactors:
    def test_title(self):
        assert analyze_title("").score == 0
        assert analyze_title("Short title").score == 7
        # 30-60 chars but no capital letters
        assert analyze_title("a lowercase headline that is reasonably long ok").score == 9

    def test_bangla_title_skips_capitalization(self):
        factor = analyze_title("বাজেট ঘোষণা")
        assert factor.score == 7
        assert "Consider capitalizing important words" not in factor.issues

    def test_meta_description(self):
        assert analyze_meta_description("").score == 0
        assert analyze_meta_description("x" * 149 + ".").score == 10
        assert analyze_meta_description("x" * 100).score == 6

    def test_headings(self):
        assert analyze_headings([], "").score == 5
        assert analyze_headings(["h2:Intro", "h3:Detail"], "Title").score == 10
        skipped = analyze_headings(["h2:Intro", "h4:Deep"], "Title")
        assert skipped.score == 8
        assert skipped.issues == ["Heading hierarchy skipped levels"]
        assert analyze_headings(["h1:Again"], "Title").score == 8

    def test_headings_without_level_prefix(self):
        assert heading_level("h3:Detail") == 3
        assert heading_level("intro") == 0
        assert heading_level("h9:Nope") == 0
        assert analyze_headings(["intro", "h2:Body"], "Title").score == 10

    @pytest.mark.parametrize("words,score", [(0, 5), (299, 5), (400, 8), (600, 10), (3001, 9)])
    def test_content_length(self, words, score):
        assert analyze_content_length(words).score == score

    def test_image_alts(self):
        assert analyze_image_alts([]).score == 5
        factor = analyze_image_alts([{"src": "a", "alt": ""}, {"src": "b", "alt": "x"}])
        assert factor.score == 8
        assert factor.issues == ["1 image(s) missing alt text"]

    def test_links(self):
        assert analyze_link_presence("no links").score == 7
        assert analyze_link_presence('<a href="https://bbc.com">x</a>').score == 8
        assert analyze_link_presence('<a href="/news/budget">x</a>').score == 10


class TestOverallScore:
    def test_empty_post(self):
        analysis = calculate_seo_score("", "")

        assert analysis.score == 40
        assert set(analysis.factors) == {
            "title", "meta_description", "headings", "content_length",
            "keywords", "images", "links", "readability",
        }
        assert analysis.recommendations == [
            "Title is required",
            "Meta description is missing",
            "Content is too short (aim for at least 300 words)",
            "No keywords found in title",
            "No images found - consider adding relevant images",
            "No headings found in content",
            "Content appears to be empty",
        ]

    def test_score_is_bounded(self):
        body = "<h2>Budget</h2><p>" + "The budget passed today. " * 120 + '<a href="/x">more</a></p>'
        analysis = calculate_seo_score(
            "Parliament passes the national budget after long debate",
            body,
            meta_description="x" * 150 + ".",
            headings=["h2:Budget"],
            images=[{"src": "/a.jpg", "alt": "Parliament"}],
        )
        assert 0 <= analysis.score <= 100
        assert analysis.factors["images"].score == 10


class TestReadability:
    def test_syllables(self):
        assert count_syllables("cat") == 1
        assert count_syllables("table") == 2
        assert count_syllables("বাংলাদেশ") == 2
        assert count_syllables("আজ") == 1

    def test_empty(self):
        result = calculate_readability("")
        assert result.score == 0
        assert result.level == "Very Difficult"
        assert result.recommendations == ["Content appears to be empty"]

    def test_simple_text_is_clamped(self):
        result = calculate_readability("<p>The cat sat. The dog ran.</p>")
        assert result.score == 100
        assert result.level == "Very Easy"
        assert result.avg_sentence_length == 3.0
        assert result.avg_words_per_sentence == 3
        assert "Consider using more varied vocabulary" in result.recommendations

    @pytest.mark.parametrize(
        "score,level",
        [(95, "Very Easy"), (85, "Easy"), (75, "Fairly Easy"), (65, "Standard"),
         (55, "Fairly Difficult"), (35, "Difficult"), (10, "Very Difficult")],
    )
    def test_levels(self, score, level):
        assert readability_level(score) == level


class TestKeywords:
    def test_density_counts_whole_non_overlapping_words(self):
        assert calculate_keyword_density("bank", "bank bank the bank") == pytest.approx(75.0)
        assert calculate_keyword_density("policy rate", "the policy rate held policy rate x") == pytest.approx(2 / 7 * 100)
        assert calculate_keyword_density("", "anything") == 0.0

    def test_analyze_keyword(self):
        result = analyze_keyword("inflation", "Inflation eases", "inflation fell in march", "")
        assert result.count == 2
        assert result.position == 0
        assert "Include keyword in excerpt/meta description" in result.recommendations
        assert "Include keyword in title" not in result.recommendations


class TestMetaImagesLinks:
    def test_meta_tags(self):
        meta = analyze_meta_tags("lowercase start", "")
        assert meta.title.optimal is False
        assert "Consider starting title with capital letter" in meta.title.issues
        assert meta.meta_description.issues == ["Meta description is missing"]

    def test_optimize_title_length_cuts_on_word(self):
        result = optimize_title_length("word " * 20)
        assert result.endswith("word...")
        assert len(result) <= 63

    def test_images(self):
        analysis = analyze_images('<img src="a.jpg" alt="Parliament"><img src="b.jpg">')
        assert analysis.total_images == 2
        assert analysis.images_with_alt == 1
        assert analysis.missing_alt_images == [{"src": "b.jpg", "index": 1}]
        assert analysis.score == 5

    def test_validate_alt_text(self):
        assert validate_alt_text(None) == (False, ["Alt text is required"])
        assert validate_alt_text("Image of a cat") == (
            False, ["Avoid starting with 'image of' or 'picture of'"]
        )
        assert validate_alt_text("Crowd outside parliament") == (True, [])

    def test_links(self):
        analysis = analyze_links('<a href="/x">Read</a> <a href="https://bbc.com"></a>')
        assert analysis.internal_links == 1
        assert analysis.external_links == 1
        assert analysis.links_without_text == 1
        assert analysis.score == 7

    def test_base_url_counts_as_internal(self):
        analysis = analyze_links(
            '<a href="https://inshortbd.com/a">A</a> <a href="https://inshortbd.com/b">B</a>',
            base_url="https://inshortbd.com",
        )
        assert analysis.internal_links == 2
        assert analysis.score == 10
