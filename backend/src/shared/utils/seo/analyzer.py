"""
SEO Analyzer
============

Scores a post out of 100 across eight weighted factors. Each factor is
scored out of 10 and carries its own issues list.

    Factor             Weight
    ─────────────────  ──────
    title              15
    meta_description   10
    headings           10
    content_length     15
    keywords           15
    images             10
    links              10
    readability        15

    overall = round( Σ(score / 10 * weight) / Σweight * 100 )

Headings are passed as "h{level}:{text}" strings. The post title renders
as the page H1, so content should start at H2.
"""

from dataclasses import dataclass, field
import re
from typing import Mapping, Optional, Sequence

from src.shared.utils.numbers import round_half_up
from src.shared.utils.seo.readability import (
    WORD_SPLIT_RE,
    count_words,
    flesch_score,
    is_bangla,
    plain_text,
)


MAX_FACTOR_SCORE = 10

FACTOR_WEIGHTS = {
    "title": 15,
    "meta_description": 10,
    "headings": 10,
    "content_length": 15,
    "keywords": 15,
    "images": 10,
    "links": 10,
    "readability": 15,
}

# Order recommendations are surfaced in. Links issues stay on the factor only.
RECOMMENDATION_ORDER = (
    "title",
    "meta_description",
    "content_length",
    "keywords",
    "images",
    "headings",
    "readability",
)

_HREF_RE = re.compile(r"""href=["']([^"']+)["']""")
_ABSOLUTE_URL_RE = re.compile(r"^https?://")
_HEADING_LEVEL_RE = re.compile(r"^h([1-6]):", re.IGNORECASE)


@dataclass
class FactorScore:
    score: int
    issues: list[str] = field(default_factory=list)
    max_score: int = MAX_FACTOR_SCORE


@dataclass
class SEOAnalysis:
    score: int
    factors: dict[str, FactorScore]
    recommendations: list[str]


# ═══════════════════════════════════════════════════════════════════════════════
# FACTORS
# ═══════════════════════════════════════════════════════════════════════════════


def _factor(score: int, issues: list[str]) -> FactorScore:
    return FactorScore(score=max(0, score), issues=issues)


def analyze_title(title: str) -> FactorScore:
    if not title:
        return FactorScore(0, ["Title is required"])

    score, issues = 10, []
    if len(title) < 30:
        issues.append("Title is too short (aim for 50-60 characters)")
        score -= 3
    elif len(title) > 60:
        issues.append("Title may be truncated in search results (aim for 50-60 characters)")
        score -= 2

    # Bangla script has no case
    if not is_bangla(title) and not re.search(r"[A-Z]", title):
        issues.append("Consider capitalizing important words")
        score -= 1

    return _factor(score, issues)


def analyze_meta_description(meta_description: str) -> FactorScore:
    if not meta_description:
        return FactorScore(0, ["Meta description is missing"])

    score, issues = 10, []
    if len(meta_description) < 120:
        issues.append("Meta description is too short (aim for 150-160 characters)")
        score -= 3
    elif len(meta_description) > 160:
        issues.append(
            "Meta description may be truncated in search results (aim for 150-160 characters)"
        )
        score -= 2

    if not re.search(r"[.!?]$", meta_description):
        issues.append("Consider ending with punctuation for better readability")
        score -= 1

    return _factor(score, issues)


def heading_level(heading: str) -> int:
    """Level of an "hN:Text" entry; 0 when the prefix is missing or malformed."""
    match = _HEADING_LEVEL_RE.match(heading)
    return int(match.group(1)) if match else 0


def analyze_headings(headings: Sequence[str], title: str = "") -> FactorScore:
    has_title_h1 = bool(title.strip())

    if not headings and not has_title_h1:
        return FactorScore(5, ["No headings found in content"])

    score, issues = 10, []
    content_h1s = [h for h in headings if h.startswith("h1:")]

    if not has_title_h1 and not content_h1s:
        issues.append("Missing H1 heading")
        score -= 3
    elif has_title_h1 and content_h1s:
        issues.append("Content contains H1. Since Title is used as H1, use H2-H6 in content.")
        score -= 2
    elif not has_title_h1 and len(content_h1s) > 1:
        issues.append("Multiple H1 headings found (use only one H1)")
        score -= 2

    previous = 1 if has_title_h1 else 0
    for heading in headings:
        level = heading_level(heading)
        if previous and level - previous > 1:
            issues.append("Heading hierarchy skipped levels")
            score -= 2
            break
        previous = level

    if len(headings) < 2 and not has_title_h1:
        issues.append("Consider adding more headings to structure your content")
        score -= 1

    return _factor(score, issues)


def analyze_content_length(word_count: int) -> FactorScore:
    score, issues = 10, []

    if word_count < 300:
        issues.append("Content is too short (aim for at least 300 words)")
        score -= 5
    elif word_count < 500:
        issues.append("Consider expanding content to at least 500 words for better SEO")
        score -= 2

    if word_count > 3000:
        issues.append("Content is very long - consider breaking into multiple articles")
        score -= 1

    return _factor(score, issues)


def analyze_title_keywords(title: str, content: str, excerpt: str) -> FactorScore:
    """Share of significant title words that also appear in the body or excerpt."""
    min_length = 1 if is_bangla(title) else 3
    title_words = [w for w in WORD_SPLIT_RE.split(title.lower()) if len(w) > min_length]

    if not title_words:
        return FactorScore(5, ["No keywords found in title"])

    content_lower = content.lower()
    excerpt_lower = excerpt.lower()
    found = sum(1 for w in title_words if w in content_lower or w in excerpt_lower)

    score, issues = 10, []
    if found / len(title_words) < 0.5:
        issues.append("Title keywords should appear in content and excerpt")
        score -= 3

    return _factor(score, issues)


def analyze_image_alts(images: Sequence[Mapping[str, Optional[str]]]) -> FactorScore:
    if not images:
        return FactorScore(5, ["No images found - consider adding relevant images"])

    missing = [img for img in images if not (img.get("alt") or "").strip()]

    score, issues = 10, []
    if missing:
        issues.append(f"{len(missing)} image(s) missing alt text")
        score -= 2 * len(missing)

    return _factor(score, issues)


def analyze_link_presence(content: str) -> FactorScore:
    hrefs = _HREF_RE.findall(content)
    internal = [h for h in hrefs if not _ABSOLUTE_URL_RE.match(h)]

    score, issues = 10, []
    if not hrefs:
        issues.append("No links found - consider adding internal or external links")
        score -= 3
    elif not internal:
        issues.append("No internal links found - consider linking to related articles")
        score -= 2

    return _factor(score, issues)


def analyze_readability_factor(content: str) -> FactorScore:
    text = plain_text(content)
    raw = flesch_score(text) if text else None
    if raw is None:
        return FactorScore(5, ["Content appears to be empty"])

    score, issues = 10, []
    if raw < 30:
        issues.append("Content is very difficult to read - simplify sentence structure")
        score -= 3
    elif raw < 50:
        issues.append("Content is somewhat difficult - consider shorter sentences")
        score -= 2
    elif raw > 80:
        issues.append("Content may be too simple - consider more varied vocabulary")
        score -= 1

    return _factor(score, issues)


# ═══════════════════════════════════════════════════════════════════════════════
# OVERALL
# ═══════════════════════════════════════════════════════════════════════════════


def calculate_seo_score(
    title: str,
    content: str,
    slug: str = "",
    meta_description: Optional[str] = None,
    excerpt: Optional[str] = None,
    headings: Optional[Sequence[str]] = None,
    images: Optional[Sequence[Mapping[str, Optional[str]]]] = None,
    word_count: Optional[int] = None,
) -> SEOAnalysis:
    """
    Run every factor and combine them into a 0-100 score.

    Args:
        title: Post title (acts as the page H1)
        content: Body as HTML or plain text
        slug: URL slug (accepted for parity with the editor payload)
        meta_description: Meta description, falls back to nothing
        excerpt: Excerpt used for keyword matching
        headings: "h{level}:{text}" strings from the body
        images: [{"src": ..., "alt": ...}] from the body
        word_count: Precomputed word count, counted from content otherwise
    """
    title = title or ""
    content = content if isinstance(content, str) else ""
    words = word_count or count_words(content)

    factors = {
        "title": analyze_title(title),
        "meta_description": analyze_meta_description(meta_description or ""),
        "headings": analyze_headings(headings or [], title),
        "content_length": analyze_content_length(words),
        "keywords": analyze_title_keywords(title, content, excerpt or ""),
        "images": analyze_image_alts(images or []),
        "links": analyze_link_presence(content),
        "readability": analyze_readability_factor(content),
    }

    weighted = sum(
        factor.score / factor.max_score * FACTOR_WEIGHTS[name]
        for name, factor in factors.items()
    )
    overall = int(round_half_up(weighted / sum(FACTOR_WEIGHTS.values()) * 100))

    recommendations: list[str] = []
    for name in RECOMMENDATION_ORDER:
        factor = factors[name]
        if factor.score < factor.max_score:
            recommendations.extend(factor.issues)

    return SEOAnalysis(score=overall, factors=factors, recommendations=recommendations)
