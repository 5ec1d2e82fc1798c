"""
Route Registration

Centralizes all route registration for the FastAPI application.

Route Hierarchy:
================
    /health, /ready, /live, /api/health  → Health checks
    /auth                                → Registration, login, team
    /api/posts                           → Posts
    /api/posts/{post_id}/workflow        → Status transitions, review thread, reviewers
    /api/posts/{post_id}/lock            → Soft editing lock and presence
    /api/posts/{post_id}/comments        → Public comments
    /api/comments                        → Comment moderation
    /api/assignments                     → Writer assignments
    /api/collections                     → Collections
    /api/media                           → Media library
    /api/newsletter                      → Newsletter
    /api/analytics                       → Beacons and reports
    /api/social/tasks                    → Social promotion tasks
    /api/seo                             → Editor SEO analysis
    /api/cron                            → Scheduler-triggered jobs
    /api/unsplash, /api/link-preview     → Third-party proxies
    /sitemap.xml, /feed.xml, ...         → Crawler documents

Usage:
======
    from src.api.routes import register_routes

    app = FastAPI()
    register_routes(app)
"""

from fastapi import FastAPI

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


def register_routes(app: FastAPI) -> None:
    """
    Register all API routes.

    Args:
        app: FastAPI application instance
    """
    # Health check endpoints (no prefix, root level)
    app.include_router(health_handler.router, tags=["Health"])

    app.include_router(auth_handler.router, prefix="/auth", tags=["Authentication"])

    # Nested post routers go before /api/posts/{post_id}
    app.include_router(
        workflow_handler.router,
        prefix="/api/posts/{post_id}/workflow",
        tags=["Workflow"],
    )
    app.include_router(
        locks_handler.router,
        prefix="/api/posts/{post_id}/lock",
        tags=["Editing Lock"],
    )
    app.include_router(comments_handler.router, prefix="/api", tags=["Comments"])
    app.include_router(posts_handler.router, prefix="/api/posts", tags=["Posts"])

    app.include_router(assignments_handler.router, prefix="/api/assignments", tags=["Assignments"])
    app.include_router(collections_handler.router, prefix="/api/collections", tags=["Collections"])
    app.include_router(media_handler.router, prefix="/api/media", tags=["Media"])
    app.include_router(newsletter_handler.router, prefix="/api/newsletter", tags=["Newsletter"])
    app.include_router(analytics_handler.router, prefix="/api/analytics", tags=["Analytics"])
    app.include_router(social_handler.router, prefix="/api/social/tasks", tags=["Social"])
    app.include_router(seo_handler.router, prefix="/api/seo", tags=["SEO"])
    app.include_router(cron_handler.router, prefix="/api/cron", tags=["Cron"])
    app.include_router(integrations_handler.router, prefix="/api", tags=["Integrations"])

    # Root-level documents, including the /{key}.txt catch-all, go last
    app.include_router(feeds_handler.router, tags=["Feeds"])
