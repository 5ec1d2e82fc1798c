"""
HTML Sanitization

Allow-list cleaning of user-submitted HTML (public comments) with bleach.
Disallowed tags are stripped, keeping their text; disallowed attributes
and unsafe URL schemes (javascript:, vbscript:) are dropped.
"""

import bleach
from bleach.css_sanitizer import CSSSanitizer


ALLOWED_TAGS = frozenset({
    "p", "br", "strong", "em", "u",
    "h1", "h2", "h3", "h4", "h5", "h6",
    "ul", "ol", "li", "blockquote",
    "a", "img", "code", "pre", "hr", "div", "span",
})

ALLOWED_ATTRIBUTES = [
    "href", "target", "rel", "src", "alt", "title",
    "class", "width", "height", "style", "id",
]

ALLOWED_PROTOCOLS = frozenset({
    "http", "https", "mailto", "tel", "callto", "sms", "cid", "xmpp", "data",
})

_css_sanitizer = CSSSanitizer()


def sanitize_html(value: str) -> str:
    """Return value with only allow-listed tags, attributes and URL schemes."""
    return bleach.clean(
        value,
        tags=ALLOWED_TAGS,
        attributes=ALLOWED_ATTRIBUTES,
        protocols=ALLOWED_PROTOCOLS,
        css_sanitizer=_css_sanitizer,
        strip=True,
        strip_comments=True,
    )
