"""
Traffic Source Categorization

UTM parameters win over the referrer. Without UTM data the referrer host
decides:

    (none) / own host            → direct
    facebook.com, x.com, ...     → social
    google.com, bing.com, ...    → search
    mail. / gmail / outlook      → email
    anything else                → referral
"""

import re
from typing import Optional
from urllib.parse import urlparse

from src.shared.models.enums import TrafficSource


_SOCIAL_UTM_SOURCE_RE = re.compile(
    r"^(facebook|twitter|linkedin|instagram|tiktok|youtube|reddit)$", re.IGNORECASE
)
_EMAIL_UTM_SOURCE_RE = re.compile(r"^(mailchimp|sendgrid|email|newsletter)$", re.IGNORECASE)

SOCIAL_DOMAINS = (
    "facebook.com",
    "twitter.com",
    "x.com",
    "linkedin.com",
    "instagram.com",
    "tiktok.com",
    "youtube.com",
    "reddit.com",
    "pinterest.com",
    "snapchat.com",
    "whatsapp.com",
    "telegram.org",
)

SEARCH_ENGINES = (
    "google.com",
    "bing.com",
    "yahoo.com",
    "duckduckgo.com",
    "baidu.com",
    "yandex.com",
)

_EMAIL_MARKERS = ("mail.", "email", "outlook", "gmail")


def referrer_host(referrer: Optional[str]) -> Optional[str]:
    """Hostname of a referrer URL; the raw value when it does not parse as one."""
    if not referrer:
        return None
    host = urlparse(referrer).hostname
    return host or referrer


def categorize_traffic_source(
    referrer: Optional[str],
    utm_source: Optional[str] = None,
    utm_medium: Optional[str] = None,
    site_host: Optional[str] = None,
) -> TrafficSource:
    if utm_source:
        if utm_medium == "social" or _SOCIAL_UTM_SOURCE_RE.match(utm_source):
            return TrafficSource.SOCIAL
        if utm_medium == "email" or _EMAIL_UTM_SOURCE_RE.match(utm_source):
            return TrafficSource.EMAIL
        if utm_medium in ("cpc", "paid"):
            return TrafficSource.SEARCH
        return TrafficSource.OTHER

    host = referrer_host(referrer)
    if not host or (site_host and host == site_host):
        return TrafficSource.DIRECT

    ref = host.lower()
    if any(domain in ref for domain in SOCIAL_DOMAINS):
        return TrafficSource.SOCIAL
    if any(engine in ref for engine in SEARCH_ENGINES):
        return TrafficSource.SEARCH
    if any(marker in ref for marker in _EMAIL_MARKERS):
        return TrafficSource.EMAIL
    return TrafficSource.REFERRAL
