"""
API Handlers

Route handlers for the Inshort API.

Handlers follow the pattern:
- Parse HTTP requests
- Call service methods
- Format HTTP responses

All business logic is delegated to the service layer.
"""

from src.api.handlers import (
    analytics_handler,
    assignments_handler,
    auth_handler,
    collections_handler,
    comments_handler,
    cron_handler,
    feeds_handler,
    health_handler,
    integrations_handler,
    locks_handler,
    media_handler,
    newsletter_handler,
    posts_handler,
    seo_handler,
    social_handler,
    workflow_handler,
)

__all__ = [
    "analytics_handler",
    "assignments_handler",
    "auth_handler",
    "collections_handler",
    "comments_handler",
    "cron_handler",
    "feeds_handler",
    "health_handler",
    "integrations_handler",
    "locks_handler",
    "media_handler",
    "newsletter_handler",
    "posts_handler",
    "seo_handler",
    "social_handler",
    "workflow_handler",
]
