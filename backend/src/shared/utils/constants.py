"""
Application Constants

Editorial and operational constants that are not environment specific.
"""

# ═══════════════════════════════════════════════════════════════════════════════
# PAGINATION
# ═══════════════════════════════════════════════════════════════════════════════

DEFAULT_PAGE_SIZE = 20
MAX_PAGE_SIZE = 100

# ═══════════════════════════════════════════════════════════════════════════════
# TAXONOMY
# ═══════════════════════════════════════════════════════════════════════════════

CATEGORIES = (
    "Politics",
    "Tech",
    "Culture",
    "Business",
    "World",
    "Finance",
    "Sports",
    "Entertainment",
)

# ═══════════════════════════════════════════════════════════════════════════════
# CONTENT
# ═══════════════════════════════════════════════════════════════════════════════

WORDS_PER_MINUTE = 225
MAX_COMMENT_LENGTH = 5000
MAX_REVISIONS_RETURNED = 20
SEARCH_INDEX_LIMIT = 1000

# ═══════════════════════════════════════════════════════════════════════════════
# WORKFLOW & LOCKS
# ═══════════════════════════════════════════════════════════════════════════════

LOCK_DURATION_MINUTES = 5
PRESENCE_TTL_SECONDS = 60
REMINDER_WINDOW_DAYS = 7

# ═══════════════════════════════════════════════════════════════════════════════
# TRENDING & RELATED
# ═══════════════════════════════════════════════════════════════════════════════

TRENDING_WINDOW_DAYS = 7
TRENDING_DEFAULT_LIMIT = 5
NEXT_ARTICLES_DEFAULT_LIMIT = 4

# ═══════════════════════════════════════════════════════════════════════════════
# NEWSLETTER
# ═══════════════════════════════════════════════════════════════════════════════

NEWSLETTER_BATCH_SIZE = 50
NEWSLETTER_BATCH_DELAY_SECONDS = 1.0

# Signups per client IP per window
SUBSCRIBE_RATE_LIMIT = 5
SUBSCRIBE_RATE_WINDOW_SECONDS = 3600

# ═══════════════════════════════════════════════════════════════════════════════
# ANALYTICS
# ═══════════════════════════════════════════════════════════════════════════════

ANALYTICS_DEFAULT_WINDOW_DAYS = 30
