"""
Tests for feed, sitemap, robots and email rendering.
"""
from datetime import timedelta
from types import SimpleNamespace
import uuid

from factories import NOW, make_post
from src.shared.models import PostStatus
from src.shared.utils import email_templates
from src.shared.utils.feeds import (
    cdata,
    http_date,
    is_not_modified,
    render_news_sitemap,
    render_robots,
    render_rss,
    render_sitemap,
    sitemap_entries,
)


SITE = "https://inshortbd.com"


def published(**overrides):
    values = {"status": PostStatus.PUBLISHED, "published_at": NOW}
    values.update(overrides)
    return make_post(**values)


class TestSitemap:
    def test_entries_cover_every_public_url(self):
        author_id = uuid.uuid4()
        post = published(slug="budget", tags=["ai", "x y"], author_id=author_id)
        collection = SimpleNamespace(slug="elections", created_at=NOW)

        entries = sitemap_entries([post], [collection], NOW, site_url=SITE)
        locs = [e.loc for e in entries]

        assert locs[0] == SITE
        assert f"{SITE}/category/finance" in locs
        assert f"{SITE}/news/budget" in locs
        assert f"{SITE}/tag/x%20y" in locs
        assert f"{SITE}/author/{author_id}" in locs
        assert f"{SITE}/collections/elections" in locs
        assert locs[-2:] == [f"{SITE}/archive", f"{SITE}/archive/2025/3"]
        assert len(entries) == 7 + 8 + 1 + 2 + 1 + 1 + 1 + 1

    def test_render(self):
        xml = render_sitemap(sitemap_entries([published(slug="budget")], [], NOW, site_url=SITE))
        assert xml.startswith('<?xml version="1.0" encoding="UTF-8"?>')
        assert f"<loc>{SITE}/news/budget</loc>" in xml
        assert "<priority>0.9</priority>" in xml
        assert "<lastmod>2025-03-01T12:00:00+00:00</lastmod>" in xml

    def test_news_sitemap(self):
        xml = render_news_sitemap([published(slug="budget", tags=["ai", "chips"])], site_url=SITE)
        assert f"<loc>{SITE}/news/budget</loc>" in xml
        assert "<news:keywords>ai, chips</news:keywords>" in xml


class TestRss:
    def test_items_are_escaped_and_content_wrapped(self):
        post = published(
            slug="q-and-a",
            title="Q&A: the budget",
            featured_image_url="/media/cover.jpg",
        )

        xml = render_rss([post], NOW, site_url=SITE)

        assert "<title>Q&amp;A: the budget</title>" in xml
        assert f"<guid isPermaLink=\"true\">{SITE}/news/q-and-a</guid>" in xml
        assert "<content:encoded><![CDATA[<p>The central bank" in xml
        assert f'<media:content url="{SITE}/media/cover.jpg" medium="image" />' in xml
        assert "<pubDate>Sat, 01 Mar 2025 12:00:00 GMT</pubDate>" in xml

    def test_cdata_splits_terminator(self):
        assert cdata("a]]>b") == "<![CDATA[a]]]]><![CDATA[>b]]>"


class TestConditionalGet:
    def test_not_modified_when_header_is_current(self):
        latest = NOW + timedelta(microseconds=500)
        assert is_not_modified(http_date(NOW), latest)

    def test_modified_when_header_is_older(self):
        assert not is_not_modified(http_date(NOW - timedelta(hours=1)), NOW)

    def test_missing_or_garbage_header(self):
        assert not is_not_modified(None, NOW)
        assert not is_not_modified("yesterday-ish", NOW)
        assert not is_not_modified(http_date(NOW), None)


def test_robots():
    robots = render_robots(SITE)
    assert robots.startswith("User-Agent: *\nAllow: /\nDisallow: /admin/")
    assert "User-Agent: CCBot\nDisallow: /" in robots
    assert robots.endswith(f"Sitemap: {SITE}/sitemap-news.xml\n")


class TestEmails:
    def test_welcome(self):
        email = email_templates.welcome_email("tok123", "Rahim")
        assert email.subject.endswith("Newsletter")
        assert "Hi Rahim," in email.html
        assert "/newsletter/unsubscribe?token=tok123" in email.html

    def test_reviewer_comment_is_escaped(self):
        email = email_templates.approved_email("Budget", uuid.uuid4(), comment="<b>nice</b>")
        assert email.subject == "Article Approved: Budget"
        assert "<b>nice</b>" not in email.html
        assert "&lt;b&gt;nice&lt;/b&gt;" in email.html

    def test_review_requested_defaults_title(self):
        email = email_templates.review_requested_email(None, "p1", for_reviewer=True)
        assert email.subject == "Review Requested: Untitled Article"
        assert "/admin/editor?id=p1" in email.html

    def test_deadline_digest(self):
        assignments = [
            SimpleNamespace(deadline=NOW + timedelta(hours=12), post=SimpleNamespace(title="Budget")),
            SimpleNamespace(deadline=NOW + timedelta(days=3), post=None),
        ]

        email = email_templates.deadline_reminder_email(assignments, NOW)

        assert "Assignment Deadline Approaching - 2 articles" in email.subject
        assert "<strong>Budget</strong> - Due in 1 day<" in email.html
        assert "<strong>Unknown Article</strong> - Due in 3 days" in email.html

    def test_deadline_digest_not_urgent(self):
        assignments = [SimpleNamespace(deadline=NOW + timedelta(days=5), post=SimpleNamespace(title="A"))]
        email = email_templates.deadline_reminder_email(assignments, NOW)
        assert "Upcoming Assignment Deadlines - 1 article" in email.subject
