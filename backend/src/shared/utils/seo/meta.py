"""
Meta Tag Analysis

Length and wording checks for the <title> and meta description, plus
truncation helpers that cut at a word or sentence boundary.
"""

from dataclasses import dataclass, field
import re
from typing import Optional

from src.shared.utils.seo.readability import is_bangla


TITLE_MAX_LENGTH = 60
META_DESCRIPTION_MAX_LENGTH = 160

_CTA_RE = re.compile(
    r"(learn|read|discover|explore|find|get|see|view|জানুন|পড়ুন|দেখুন|ক্লিক করুন|বিস্তারিত)",
    re.IGNORECASE,
)


@dataclass
class MetaFieldAnalysis:
    length: int
    optimal: bool
    issues: list[str] = field(default_factory=list)
    suggestion: Optional[str] = None


@dataclass
class MetaAnalysis:
    title: MetaFieldAnalysis
    meta_description: MetaFieldAnalysis


def _analyze_title(title: str) -> MetaFieldAnalysis:
    if not title:
        return MetaFieldAnalysis(0, False, ["Title is required"])

    issues: list[str] = []
    optimal = True
    if len(title) < 30:
        issues.append("Title is too short (aim for 50-60 characters)")
        optimal = False
    elif len(title) > TITLE_MAX_LENGTH:
        issues.append("Title may be truncated in search results (optimal: 50-60 characters)")
        optimal = False

    if not is_bangla(title) and not title[0].isupper():
        issues.append("Consider starting title with capital letter")

    suggestion = optimize_title_length(title) if len(title) > TITLE_MAX_LENGTH else None
    return MetaFieldAnalysis(len(title), optimal, issues, suggestion)


def _analyze_description(description: str) -> MetaFieldAnalysis:
    if not description:
        return MetaFieldAnalysis(0, False, ["Meta description is missing"])

    issues: list[str] = []
    optimal = True
    if len(description) < 120:
        issues.append("Meta description is too short (aim for 150-160 characters)")
        optimal = False
    elif len(description) > META_DESCRIPTION_MAX_LENGTH:
        issues.append(
            "Meta description may be truncated in search results (optimal: 150-160 characters)"
        )
        optimal = False

    if not _CTA_RE.search(description):
        issues.append("Consider adding a call-to-action word")

    suggestion = (
        optimize_meta_description_length(description)
        if len(description) > META_DESCRIPTION_MAX_LENGTH
        else None
    )
    return MetaFieldAnalysis(len(description), optimal, issues, suggestion)


def analyze_meta_tags(title: str, meta_description: str) -> MetaAnalysis:
    return MetaAnalysis(
        title=_analyze_title(title or ""),
        meta_description=_analyze_description(meta_description or ""),
    )


def optimize_title_length(title: str, max_length: int = TITLE_MAX_LENGTH) -> str:
    """Cut at the last space past 70% of max_length, else hard-cut; append '...'."""
    if len(title) <= max_length:
        return title

    truncated = title[:max_length]
    last_space = truncated.rfind(" ")
    if last_space > max_length * 0.7:
        return truncated[:last_space] + "..."
    return truncated + "..."


def optimize_meta_description_length(
    description: str, max_length: int = META_DESCRIPTION_MAX_LENGTH
) -> str:
    """Prefer ending on a full sentence, then on a word."""
    if len(description) <= max_length:
        return description

    truncated = description[:max_length]
    last_punctuation = max(truncated.rfind("."), truncated.rfind("!"), truncated.rfind("?"))
    if last_punctuation > max_length * 0.7:
        return truncated[: last_punctuation + 1]

    last_space = truncated.rfind(" ")
    if last_space > max_length * 0.7:
        return truncated[:last_space] + "..."
    return truncated + "..."
