"""
Feed & Sitemap Rendering
========================

Pure renderers for the public machine-readable documents:

    render_sitemap        /sitemap.xml       (sitemaps.org 0.9)
    render_news_sitemap   /sitemap-news.xml  (Google News extension)
    render_rss            /feed.xml          (RSS 2.0 + content/media/dc/atom)
    render_robots         /robots.txt

Templates are Jinja2 with XML autoescaping, the same way the email
templates are built. Callers pass already-loaded posts; nothing here
touches the database.
"""

from dataclasses import dataclass
from datetime import datetime, timezone
from email.utils import format_datetime, parsedate_to_datetime
from typing import Any, Iterable, List, Optional, Sequence
from urllib.parse import quote

from jinja2 import DictLoader, Environment
from markupsafe import Markup

from src.config.settings import settings
from src.shared.utils.constants import CATEGORIES
from src.shared.utils.content import render_html


RSS_ITEM_LIMIT = 20
NEWS_WINDOW_HOURS = 48
NEWS_ITEM_LIMIT = 1000

CACHE_CONTROL = "s-maxage=3600, stale-while-revalidate"

STATIC_ROUTES = (
    ("", 1.0, "daily"),
    ("/finance", 0.9, "daily"),
    ("/about", 0.6, "monthly"),
    ("/contact", 0.5, "monthly"),
    ("/publication-policy", 0.4, "yearly"),
    ("/terms-of-service", 0.4, "yearly"),
    ("/newsletter", 0.6, "monthly"),
)

ALLOWED_BOTS = (
    "Googlebot",
    "Googlebot-News",
    "Bingbot",
    "GPTBot",
    "Google-Extended",
    "ClaudeBot",
    "PerplexityBot",
)
BLOCKED_BOTS = ("CCBot", "Bytespider")
DISALLOWED_PATHS = ("/admin/", "/api/", "/login")


@dataclass(frozen=True)
class SitemapEntry:
    loc: str
    lastmod: datetime
    changefreq: str
    priority: float


def cdata(value: Optional[str]) -> Markup:
    """Wrap raw markup in CDATA, splitting any embedded terminator."""
    text = (value or "").replace("]]>", "]]]]><![CDATA[>")
    return Markup(f"<![CDATA[{text}]]>")


def iso(value: datetime) -> str:
    if value.tzinfo is None:
        value = value.replace(tzinfo=timezone.utc)
    return value.isoformat()


def http_date(value: datetime) -> str:
    """RFC 1123 date as used by RSS pubDate and HTTP headers."""
    if value.tzinfo is None:
        value = value.replace(tzinfo=timezone.utc)
    return format_datetime(value.astimezone(timezone.utc), usegmt=True)


def parse_http_date(value: Optional[str]) -> Optional[datetime]:
    if not value:
        return None
    try:
        parsed = parsedate_to_datetime(value)
    except (TypeError, ValueError):
        return None
    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=timezone.utc)
    return parsed


def is_not_modified(if_modified_since: Optional[str], last_published: Optional[datetime]) -> bool:
    """True when the client's copy is at least as new as the latest post."""
    since = parse_http_date(if_modified_since)
    if since is None or last_published is None:
        return False
    if last_published.tzinfo is None:
        last_published = last_published.replace(tzinfo=timezone.utc)
    # HTTP dates carry whole seconds only
    return last_published.replace(microsecond=0) <= since


_TEMPLATES = {
    "sitemap.xml": """<?xml version="1.0" encoding="UTF-8"?>
<urlset xmlns="http://www.sitemaps.org/schemas/sitemap/0.9">
{% for entry in entries %}
  <url>
    <loc>{{ entry.loc }}</loc>
    <lastmod>{{ entry.lastmod|iso }}</lastmod>
    <changefreq>{{ entry.changefreq }}</changefreq>
    <priority>{{ "%.1f"|format(entry.priority) }}</priority>
  </url>
{% endfor %}
</urlset>
""",
    "sitemap-news.xml": """<?xml version="1.0" encoding="UTF-8"?>
<urlset xmlns="http://www.sitemaps.org/schemas/sitemap/0.9"
        xmlns:news="http://www.google.com/schemas/sitemap-news/0.9">
{% for post in posts %}
  <url>
    <loc>{{ site_url }}/news/{{ post.slug }}</loc>
    <news:news>
      <news:publication>
        <news:name>{{ publication }}</news:name>
        <news:language>{{ language }}</news:language>
      </news:publication>
      <news:publication_date>{{ post.published_at|iso }}</news:publication_date>
      <news:title>{{ post.title }}</news:title>
{% if post.tags %}
      <news:keywords>{{ post.tags|join(", ") }}</news:keywords>
{% endif %}
    </news:news>
  </url>
{% endfor %}
</urlset>
""",
    "feed.xml": """<?xml version="1.0" encoding="UTF-8"?>
<rss version="2.0" xmlns:content="http://purl.org/rss/1.0/modules/content/" xmlns:media="http://search.yahoo.com/mrss/" xmlns:dc="http://purl.org/dc/elements/1.1/" xmlns:atom="http://www.w3.org/2005/Atom">
  <channel>
    <title>{{ site_name }}</title>
    <link>{{ site_url }}</link>
    <atom:link href="{{ site_url }}/feed.xml" rel="self" type="application/rss+xml" />
    <atom:link href="{{ hub_url }}" rel="hub" />
    <description>{{ description }}</description>
    <language>{{ language }}</language>
    <lastBuildDate>{{ now|http_date }}</lastBuildDate>
{% for item in items %}
    <item>
      <title>{{ item.title }}</title>
      <link>{{ item.url }}</link>
      <guid isPermaLink="true">{{ item.url }}</guid>
      <pubDate>{{ item.published_at|http_date }}</pubDate>
      <description>{{ item.excerpt }}</description>
      <content:encoded>{{ item.content_html|cdata }}</content:encoded>
      <category>{{ item.category }}</category>
      <dc:creator>{{ site_name }} Editorial Board</dc:creator>
{% if item.image_url %}
      <media:content url="{{ item.image_url }}" medium="image" />
{% endif %}
    </item>
{% endfor %}
  </channel>
</rss>
""",
}

_env = Environment(
    loader=DictLoader(_TEMPLATES),
    autoescape=True,
    trim_blocks=True,
    lstrip_blocks=True,
)
_env.filters["iso"] = iso
_env.filters["http_date"] = http_date
_env.filters["cdata"] = cdata


# ═══════════════════════════════════════════════════════════════════════════════
# SITEMAP
# ═══════════════════════════════════════════════════════════════════════════════


def sitemap_entries(
    posts: Sequence[Any],
    collections: Sequence[Any],
    now: datetime,
    site_url: Optional[str] = None,
) -> List[SitemapEntry]:
    """
    Every public URL in sitemap order: static routes, categories, posts,
    tags, authors, collections, then the archive.

    posts are published posts, newest first.
    """
    base = site_url or settings.SITE_URL
    entries = [SitemapEntry(f"{base}{route}", now, freq, priority) for route, priority, freq in STATIC_ROUTES]

    entries += [
        SitemapEntry(f"{base}/category/{quote(c.lower())}", now, "daily", 0.8)
        for c in CATEGORIES
    ]

    tags: dict = {}
    authors: dict = {}
    months: dict = {}
    for post in posts:
        entries.append(SitemapEntry(
            f"{base}/news/{post.slug}",
            post.published_at or post.created_at or now,
            "daily",
            0.9,
        ))
        for tag in post.tags or []:
            tags.setdefault(tag, None)
        if post.author_id:
            authors.setdefault(post.author_id, None)
        if post.published_at:
            months.setdefault(f"{post.published_at.year}/{post.published_at.month}", None)

    entries += [SitemapEntry(f"{base}/tag/{quote(tag, safe='')}", now, "weekly", 0.3) for tag in tags]
    entries += [SitemapEntry(f"{base}/author/{author_id}", now, "monthly", 0.5) for author_id in authors]
    entries += [
        SitemapEntry(f"{base}/collections/{c.slug}", c.created_at or now, "weekly", 0.6)
        for c in collections
    ]

    entries.append(SitemapEntry(f"{base}/archive", now, "weekly", 0.3))
    entries += [SitemapEntry(f"{base}/archive/{month}", now, "monthly", 0.3) for month in months]
    return entries


def render_sitemap(entries: Iterable[SitemapEntry]) -> str:
    return _env.get_template("sitemap.xml").render(entries=list(entries))


def render_news_sitemap(posts: Sequence[Any], site_url: Optional[str] = None) -> str:
    return _env.get_template("sitemap-news.xml").render(
        posts=posts,
        site_url=site_url or settings.SITE_URL,
        publication=settings.SITE_NAME,
        language=settings.SITE_LANGUAGE,
    )


# ═══════════════════════════════════════════════════════════════════════════════
# RSS
# ═══════════════════════════════════════════════════════════════════════════════


def absolute_url(url: Optional[str], site_url: str) -> Optional[str]:
    if not url:
        return None
    return url if url.startswith("http") else f"{site_url}{url}"


def render_rss(posts: Sequence[Any], now: datetime, site_url: Optional[str] = None) -> str:
    base = site_url or settings.SITE_URL
    items = [
        {
            "title": post.title,
            "url": f"{base}/news/{post.slug}",
            "published_at": post.published_at or now,
            "excerpt": post.excerpt or "",
            "content_html": render_html(post.content) or post.excerpt or "",
            "category": post.category,
            "image_url": absolute_url(post.featured_image_url, base),
        }
        for post in posts
    ]
    return _env.get_template("feed.xml").render(
        items=items,
        now=now,
        site_url=base,
        site_name=settings.SITE_NAME,
        description=settings.SITE_DESCRIPTION,
        language=settings.SITE_LANGUAGE,
        hub_url=settings.WEBSUB_HUB_URL,
    )


# ═══════════════════════════════════════════════════════════════════════════════
# ROBOTS
# ═══════════════════════════════════════════════════════════════════════════════


def render_robots(site_url: Optional[str] = None) -> str:
    base = site_url or settings.SITE_URL
    lines = ["User-Agent: *", "Allow: /"]
    lines += [f"Disallow: {path}" for path in DISALLOWED_PATHS]
    for bot in ALLOWED_BOTS:
        lines += ["", f"User-Agent: {bot}", "Allow: /"]
    for bot in BLOCKED_BOTS:
        lines += ["", f"User-Agent: {bot}", "Disallow: /"]
    lines += [
        "",
        f"Host: {base}",
        "",
        f"Sitemap: {base}/sitemap.xml",
        f"Sitemap: {base}/sitemap-news.xml",
    ]
    return "\n".join(lines) + "\n"
