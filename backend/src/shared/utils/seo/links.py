"""
Link Analysis

Internal/external split, empty anchor text and link density for an HTML
body. A link is internal when it is relative (no http/https scheme) or
starts with the site's base URL.
"""

from dataclasses import dataclass, field
import re
from typing import Optional

from src.shared.utils.seo.readability import TAG_RE


_LINK_RE = re.compile(
    r"""<a[^>]+href=["']([^"']+)["'][^>]*>(.*?)</a>""",
    re.IGNORECASE | re.DOTALL,
)
_ABSOLUTE_URL_RE = re.compile(r"^https?://")


@dataclass
class LinkRef:
    href: str
    text: str
    is_internal: bool


@dataclass
class LinkAnalysis:
    total_links: int
    internal_links: int
    external_links: int
    links_without_text: int
    score: int
    recommendations: list[str] = field(default_factory=list)


def extract_links(content: str) -> list[LinkRef]:
    links = []
    for href, inner in _LINK_RE.findall(content or ""):
        text = TAG_RE.sub("", inner).strip()
        links.append(LinkRef(href=href, text=text, is_internal=not _ABSOLUTE_URL_RE.match(href)))
    return links


def analyze_links(content: str, base_url: Optional[str] = None) -> LinkAnalysis:
    links = extract_links(content)

    if not links:
        return LinkAnalysis(
            total_links=0,
            internal_links=0,
            external_links=0,
            links_without_text=0,
            score=5,
            recommendations=[
                "No links found - consider adding internal and external links",
                "Internal links help with SEO and user navigation",
                "External links to authoritative sources add credibility",
            ],
        )

    internal = sum(
        1 for link in links
        if link.is_internal or (base_url and link.href.startswith(base_url))
    )
    external = len(links) - internal
    without_text = sum(1 for link in links if not link.text)

    score = 10
    recommendations = []

    if internal == 0:
        score -= 3
        recommendations.append("No internal links found - link to related articles")
        recommendations.append("Internal linking improves SEO and keeps readers engaged")
    elif internal < 2:
        score -= 1
        recommendations.append("Consider adding more internal links to related content")

    if external == 0:
        recommendations.append("Consider adding external links to authoritative sources")

    if without_text:
        score -= 2
        recommendations.append(f"{without_text} link(s) missing descriptive text")
        recommendations.append('Use descriptive link text instead of "click here" or empty links')

    word_count = len(TAG_RE.sub(" ", content).split())
    density = len(links) / word_count * 100 if word_count else 0
    if density < 1:
        recommendations.append("Link density is low - aim for 1-2 links per 100 words")
    elif density > 5:
        recommendations.append("Link density is high - avoid over-optimization")

    return LinkAnalysis(
        total_links=len(links),
        internal_links=internal,
        external_links=external,
        links_without_text=without_text,
        score=max(0, score),
        recommendations=recommendations,
    )
