"""
Adapters Package

External service integrations.

Contents:
=========
- redis_adapter: Page cache, presence hashes, rate limits
- email_adapter: Resend email API (never raises)
- storage_adapter: S3-compatible media storage
- indexing_adapter: IndexNow submission and WebSub pings
- unsplash_adapter: Stock photo search
- link_preview_adapter: Open Graph metadata fetcher

Note: Database access is handled by shared/db/session.py using async SQLAlchemy.

Usage:
======
    from src.shared.adapters.email_adapter import get_email_adapter
    from src.shared.adapters.redis_adapter import get_redis_adapter
"""
