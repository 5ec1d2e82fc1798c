"""
UTM Link Builder

Validation and URL construction for campaign links shared by the social
and newsletter desks.
"""

from dataclasses import dataclass
from typing import Optional
from urllib.parse import parse_qsl, urlencode, urlsplit, urlunsplit


UTM_MAX_LENGTH = 100

UTM_KEYS = ("utm_source", "utm_medium", "utm_campaign", "utm_term", "utm_content")

UTM_TEMPLATES = {
    "twitter": {"source": "twitter", "medium": "social"},
    "facebook": {"source": "facebook", "medium": "social"},
    "linkedin": {"source": "linkedin", "medium": "social"},
    "email": {"source": "newsletter", "medium": "email"},
    "google-ads": {"source": "google", "medium": "cpc"},
    "organic-search": {"source": "google", "medium": "organic"},
}


@dataclass
class UTMParams:
    source: str
    medium: str
    campaign: str
    term: Optional[str] = None
    content: Optional[str] = None


def validate_utm(params: UTMParams) -> list[str]:
    """Returns the list of problems; empty means valid."""
    errors = []

    for label, value in (
        ("Source", params.source),
        ("Medium", params.medium),
        ("Campaign", params.campaign),
    ):
        if not value or not value.strip():
            errors.append(f"{label} is required")

    for label, value in (
        ("Source", params.source),
        ("Medium", params.medium),
        ("Campaign", params.campaign),
        ("Term", params.term),
        ("Content", params.content),
    ):
        if value and len(value) > UTM_MAX_LENGTH:
            errors.append(f"{label} must be {UTM_MAX_LENGTH} characters or less")

    return errors


def build_utm_url(base_url: str, params: UTMParams) -> str:
    """Replace any existing utm_* parameters on base_url with params."""
    parts = urlsplit(base_url)
    query = [(k, v) for k, v in parse_qsl(parts.query, keep_blank_values=True) if k not in UTM_KEYS]

    query += [
        ("utm_source", params.source.strip()),
        ("utm_medium", params.medium.strip()),
        ("utm_campaign", params.campaign.strip()),
    ]
    if params.term and params.term.strip():
        query.append(("utm_term", params.term.strip()))
    if params.content and params.content.strip():
        query.append(("utm_content", params.content.strip()))

    return urlunsplit(parts._replace(query=urlencode(query)))


def parse_utm(url: str) -> dict[str, str]:
    """utm_* values present on url, keyed without the prefix."""
    query = dict(parse_qsl(urlsplit(url).query))
    return {key[4:]: query[key] for key in UTM_KEYS if query.get(key)}
