"""
Keyword Analysis

Density is counted on whole words: the keyword phrase must match a run of
consecutive words, and matches do not overlap.

    density = matches / total_words * 100      (percent)
"""

from dataclasses import dataclass, field
import re

from src.shared.utils.numbers import round_half_up
from src.shared.utils.seo.readability import TAG_RE


_KEYWORD_SPLIT_RE = re.compile(r"[\s\u200B\u0964]+")

STOP_WORDS = frozenset({
    "the", "a", "an", "and", "or", "but", "in", "on", "at", "to", "for",
    "of", "with", "by", "from", "as", "is", "was", "are", "were", "been",
    "be", "have", "has", "had", "this", "that", "these", "those",
})


@dataclass
class KeywordAnalysis:
    density: float
    count: int
    position: int
    recommendations: list[str] = field(default_factory=list)


def _tokens(value: str) -> list[str]:
    return [w for w in _KEYWORD_SPLIT_RE.split(value.strip()) if w]


def calculate_keyword_density(keyword: str, content: str) -> float:
    if not keyword or not content:
        return 0.0

    words = _tokens(TAG_RE.sub(" ", content.lower()))
    phrase = _tokens(keyword.lower())
    if not words or not phrase:
        return 0.0

    matches = 0
    i = 0
    size = len(phrase)
    while i <= len(words) - size:
        if words[i:i + size] == phrase:
            matches += 1
            i += size
        else:
            i += 1

    return matches / len(words) * 100


def get_keyword_suggestions(title: str, content: str) -> list[str]:
    """Up to five long title words already used at a healthy density."""
    suggestions = []
    for word in (title or "").lower().split():
        if len(word) <= 4 or word in STOP_WORDS:
            continue
        density = calculate_keyword_density(word, content or "")
        if 0.5 < density < 3:
            suggestions.append(word)
    return suggestions[:5]


def analyze_keyword(keyword: str, title: str, content: str, excerpt: str) -> KeywordAnalysis:
    keyword = (keyword or "").lower()
    title = (title or "").lower()
    content = (content or "").lower()
    excerpt = (excerpt or "").lower()

    density = calculate_keyword_density(keyword, content)

    if keyword:
        pattern = re.compile(re.escape(keyword))
        title_count = len(pattern.findall(title))
        content_count = len(pattern.findall(content))
        excerpt_count = len(pattern.findall(excerpt))
    else:
        title_count = content_count = excerpt_count = 0

    position = content.find(keyword) if keyword else -1

    recommendations = []
    if title_count == 0:
        recommendations.append("Include keyword in title")
    if excerpt_count == 0:
        recommendations.append("Include keyword in excerpt/meta description")
    if density < 0.5:
        recommendations.append("Keyword density is too low (aim for 0.5-2%)")
    elif density > 3:
        recommendations.append("Keyword density is too high - avoid keyword stuffing")
    if position > 100:
        recommendations.append("Use keyword earlier in content (first 100 characters)")

    return KeywordAnalysis(
        density=round_half_up(density, 2),
        count=title_count + content_count + excerpt_count,
        position=position,
        recommendations=recommendations,
    )
