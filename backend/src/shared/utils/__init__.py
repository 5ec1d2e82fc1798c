"""
Utilities Package

Common utility functions and helpers.

Contents:
=========
- security: Password hashing, JWT management, secret comparison
- constants: Application constants
- content: Editor document helpers (text, word count, headings, HTML)
- validation: Post field validation
- sanitize: Allow-list HTML cleaning for public comments
- comment_tree: Flat rows → threaded replies
- trending / related: Article ranking
- numbers: Half-up rounding and percentages
- feeds: Sitemap, RSS and robots.txt rendering
- email_templates: Jinja2-rendered outgoing email
- seo: SEO scoring (subpackage)
- analytics: Traffic source, User-Agent, UTM and report helpers (subpackage)

Usage:
======
    from src.shared.utils.security import SecurityUtils
    from src.shared.utils.constants import DEFAULT_PAGE_SIZE
"""

from src.shared.utils.security import SecurityUtils
from src.shared.utils.constants import (
    DEFAULT_PAGE_SIZE,
    MAX_PAGE_SIZE,
    LOCK_DURATION_MINUTES,
    WORDS_PER_MINUTE,
)

__all__ = [
    "SecurityUtils",
    "DEFAULT_PAGE_SIZE",
    "MAX_PAGE_SIZE",
    "LOCK_DURATION_MINUTES",
    "WORDS_PER_MINUTE",
]
