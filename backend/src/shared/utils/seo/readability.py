"""
Readability Scoring
===================

Flesch Reading Ease, tuned for mixed Bangla/English newsroom copy:

    score = 206.835 - 1.015 * (words / sentences) - 84.6 * (syllables / words)

Sentences end on . ! ? । or |. Words split on whitespace and zero-width
spaces. Bangla words have no vowel-group rule, so they count as one
syllable, or two once they reach four characters.

    Score     Level
    ─────     ─────────────────
    90+       Very Easy
    80-89     Easy
    70-79     Fairly Easy
    60-69     Standard
    50-59     Fairly Difficult
    30-49     Difficult
    <30       Very Difficult
"""

from dataclasses import dataclass, field
import re
from typing import Optional

from src.shared.utils.numbers import round_half_up


BANGLA_RE = re.compile(r"[\u0980-\u09FF]")
TAG_RE = re.compile(r"<[^>]*>")
SENTENCE_SPLIT_RE = re.compile(r"[.!?\u0964|]+")
WORD_SPLIT_RE = re.compile(r"[\s\u200B]+")

_SILENT_SUFFIX_RE = re.compile(r"(?:[^laeiouy]es|ed|[^laeiouy]e)$")
_LEADING_Y_RE = re.compile(r"^y")
_VOWEL_GROUP_RE = re.compile(r"[aeiouy]{1,2}")


def is_bangla(text: str) -> bool:
    return bool(BANGLA_RE.search(text))


def plain_text(content: str) -> str:
    """Tags replaced by spaces, whitespace collapsed."""
    return re.sub(r"\s+", " ", TAG_RE.sub(" ", content)).strip()


def split_sentences(text: str) -> list[str]:
    return [s for s in SENTENCE_SPLIT_RE.split(text) if s.strip()]


def split_words(text: str) -> list[str]:
    return [w for w in WORD_SPLIT_RE.split(text) if w.strip()]


def count_words(content: str) -> int:
    """Word count of an HTML or plain string."""
    text = plain_text(content or "")
    return len(split_words(text)) if text else 0


def count_syllables(word: str) -> int:
    word = word.lower().strip()

    if is_bangla(word):
        return 2 if len(word) >= 4 else 1

    if len(word) <= 3:
        return 1

    word = _SILENT_SUFFIX_RE.sub("", word)
    word = _LEADING_Y_RE.sub("", word)
    groups = _VOWEL_GROUP_RE.findall(word)
    return max(1, len(groups)) if groups else 1


def flesch_score(text: str) -> Optional[float]:
    """Raw (unclamped) Flesch score, or None when there is nothing to score."""
    sentences = split_sentences(text)
    words = split_words(text)
    if not sentences or not words:
        return None
    syllables = sum(count_syllables(w) for w in words)
    avg_sentence_length = len(words) / len(sentences)
    avg_syllables = syllables / len(words)
    return 206.835 - 1.015 * avg_sentence_length - 84.6 * avg_syllables


@dataclass
class ReadabilityScore:
    score: int
    level: str
    avg_sentence_length: float
    avg_words_per_sentence: int
    recommendations: list[str] = field(default_factory=list)


def readability_level(score: int) -> str:
    if score >= 90:
        return "Very Easy"
    if score >= 80:
        return "Easy"
    if score >= 70:
        return "Fairly Easy"
    if score >= 60:
        return "Standard"
    if score >= 50:
        return "Fairly Difficult"
    if score >= 30:
        return "Difficult"
    return "Very Difficult"


def _recommendations(score: int, avg_sentence_length: float) -> list[str]:
    recs: list[str] = []

    if score < 30:
        recs += [
            "Content is very difficult to read",
            "Simplify sentence structure",
            "Use shorter words where possible",
        ]
    elif score < 50:
        recs += [
            "Content is somewhat difficult",
            "Break up long sentences",
            "Use simpler vocabulary",
        ]
    elif score < 60:
        recs += [
            "Consider simplifying some sentences",
            "Aim for score above 60 for better readability",
        ]
    elif score >= 90:
        recs += [
            "Content may be too simple for professional audiences",
            "Consider using more varied vocabulary",
        ]

    if avg_sentence_length > 20:
        recs.append("Average sentence length is high - aim for 15-20 words")

    return recs


def calculate_readability(content: str) -> ReadabilityScore:
    """Score an HTML or plain-text body."""
    text = plain_text(content or "")
    if not text:
        return ReadabilityScore(0, "Very Difficult", 0, 0, ["Content appears to be empty"])

    sentences = split_sentences(text)
    words = split_words(text)
    if not sentences or not words:
        return ReadabilityScore(0, "Very Difficult", 0, 0, ["No sentences found"])

    avg_sentence_length = len(words) / len(sentences)
    raw = flesch_score(text)
    score = int(max(0, min(100, round_half_up(raw))))

    return ReadabilityScore(
        score=score,
        level=readability_level(score),
        avg_sentence_length=round_half_up(avg_sentence_length, 1),
        avg_words_per_sentence=int(round_half_up(avg_sentence_length)),
        recommendations=_recommendations(score, avg_sentence_length),
    )
