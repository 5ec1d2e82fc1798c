"""
Email Templates
===============

Jinja2 templates for every outgoing email, held in memory with a
DictLoader. Autoescaping is on, so titles and reviewer comments are safe
to interpolate.

Each builder returns a RenderedEmail(subject, html):

    welcome_email            newsletter signup
    new_article_email        newsletter blast for a freshly published post
    review_requested_email   to the author, and to each assigned reviewer
    approved_email           to the author
    revisions_needed_email   to the author (rejection)
    reviewer_assigned_email  to the new reviewer
    deadline_reminder_email  digest of upcoming assignment deadlines
"""

from dataclasses import dataclass
from datetime import datetime
import math
from typing import Any, Optional, Sequence

from jinja2 import DictLoader, Environment, select_autoescape

from src.config.settings import settings


UNTITLED = "Untitled Article"


@dataclass(frozen=True)
class RenderedEmail:
    subject: str
    html: str


_LAYOUT = """<!DOCTYPE html>
<html>
<head>
  <meta charset="utf-8">
  <meta name="viewport" content="width=device-width, initial-scale=1.0">
  <title>{{ site_name }}</title>
</head>
<body style="margin: 0; padding: 0; font-family: -apple-system, BlinkMacSystemFont, 'Segoe UI', Roboto, Arial, sans-serif; background-color: #09090b; color: #fafafa;">
  <table role="presentation" style="width: 100%; border-collapse: collapse;">
    <tr>
      <td align="center" style="padding: 40px 20px;">
        <table role="presentation" style="max-width: 600px; width: 100%; background-color: #18181b; border: 1px solid #27272a;">
          <tr>
            <td style="padding: 32px 40px 16px; text-align: center; border-bottom: 1px solid #27272a;">
              <h1 style="margin: 0; font-size: 28px;">{{ site_name }}</h1>
            </td>
          </tr>
          <tr>
            <td style="padding: 32px 40px; font-size: 16px; line-height: 1.6;">
              {% block body %}{% endblock %}
            </td>
          </tr>
          {% if unsubscribe_url %}
          <tr>
            <td style="padding: 24px 40px; border-top: 1px solid #27272a; text-align: center; font-size: 12px; color: #71717a;">
              <a href="{{ unsubscribe_url }}" style="color: #71717a;">Unsubscribe</a>
            </td>
          </tr>
          {% endif %}
        </table>
      </td>
    </tr>
  </table>
</body>
</html>
"""

_BUTTON = """{% macro button(url, label) -%}
<p style="margin: 28px 0; text-align: center;">
  <a href="{{ url }}" style="display: inline-block; padding: 12px 28px; background-color: #3b82f6; color: #ffffff; text-decoration: none; border-radius: 6px; font-weight: 600;">{{ label }}</a>
</p>
{%- endmacro %}"""

_TEMPLATES = {
    "layout.html": _LAYOUT,
    "macros.html": _BUTTON,
    "welcome.html": """{% extends "layout.html" %}{% from "macros.html" import button %}
{% block body %}
<p>{% if name %}Hi {{ name }},{% else %}Hi there,{% endif %}</p>
<p>Welcome to {{ site_name }}! You're now subscribed to receive the latest news and analysis delivered straight to your inbox.</p>
{{ button(site_url, "Visit " ~ site_name) }}
<p style="font-size: 14px; color: #a1a1aa;">If you ever want to unsubscribe, you can do so <a href="{{ unsubscribe_url }}" style="color: #3b82f6;">here</a>.</p>
{% endblock %}""",
    "new_article.html": """{% extends "layout.html" %}{% from "macros.html" import button %}
{% block body %}
<img src="{{ image_url }}" alt="{{ post.title }}" style="width: 100%; height: auto; margin-bottom: 24px;">
<p style="font-size: 12px; text-transform: uppercase; color: #a1a1aa;">{{ post.category }}</p>
<h2 style="margin: 0 0 16px;">{{ post.title }}</h2>
{% if post.excerpt %}<p style="color: #d4d4d8;">{{ post.excerpt }}</p>{% endif %}
{% if author_name %}<p style="font-size: 14px; color: #a1a1aa;">By {{ author_name }}</p>{% endif %}
{{ button(article_url, "Read Full Article") }}
{% endblock %}""",
    "notice.html": """{% extends "layout.html" %}{% from "macros.html" import button %}
{% block body %}
<h2>{{ heading }}</h2>
<p>{{ message }}</p>
{% if comment_label and comment %}<p><strong>{{ comment_label }}:</strong></p><p>{{ comment }}</p>{% endif %}
{{ button(action_url, action_label) }}
{% endblock %}""",
    "deadline_reminder.html": """{% extends "layout.html" %}{% from "macros.html" import button %}
{% block body %}
<h2>{{ subject }}</h2>
<p>You have {{ items|length }} assignment{{ "" if items|length == 1 else "s" }} with upcoming deadline{{ "" if items|length == 1 else "s" }}:</p>
<ul>
{% for item in items %}  <li><strong>{{ item.title }}</strong> - Due in {{ item.days }} {{ "day" if item.days == 1 else "days" }}</li>
{% endfor %}</ul>
{{ button(assignments_url, "View Assignments") }}
{% endblock %}""",
}

_env = Environment(
    loader=DictLoader(_TEMPLATES),
    autoescape=select_autoescape(default=True),
    trim_blocks=True,
    lstrip_blocks=True,
)


def render(template: str, **context: Any) -> str:
    context.setdefault("site_name", settings.SITE_NAME)
    context.setdefault("site_url", settings.SITE_URL)
    context.setdefault("unsubscribe_url", None)
    return _env.get_template(template).render(**context)


# ═══════════════════════════════════════════════════════════════════════════════
# URLS
# ═══════════════════════════════════════════════════════════════════════════════


def unsubscribe_url(token: str) -> str:
    return f"{settings.SITE_URL}/newsletter/unsubscribe?token={token}"


def editor_url(post_id: Any) -> str:
    return f"{settings.SITE_URL}/admin/editor?id={post_id}"


def article_url(slug: str) -> str:
    return f"{settings.SITE_URL}/news/{slug}"


# ═══════════════════════════════════════════════════════════════════════════════
# NEWSLETTER
# ═══════════════════════════════════════════════════════════════════════════════


def welcome_email(token: str, name: Optional[str] = None) -> RenderedEmail:
    return RenderedEmail(
        subject=f"Welcome to {settings.SITE_NAME} Newsletter",
        html=render("welcome.html", name=name, unsubscribe_url=unsubscribe_url(token)),
    )


def new_article_email(post: Any, token: str) -> RenderedEmail:
    return RenderedEmail(
        subject=f"New Article: {post.title}",
        html=render(
            "new_article.html",
            post=post,
            author_name=getattr(post, "author_name", None),
            article_url=article_url(post.slug),
            image_url=post.featured_image_url or f"{settings.SITE_URL}/og-image.png",
            unsubscribe_url=unsubscribe_url(token),
        ),
    )


# ═══════════════════════════════════════════════════════════════════════════════
# WORKFLOW
# ═══════════════════════════════════════════════════════════════════════════════


def _notice(subject: str, heading: str, message: str, post_id: Any, action_label: str,
            comment: Optional[str] = None, comment_label: Optional[str] = None) -> RenderedEmail:
    return RenderedEmail(
        subject=subject,
        html=render(
            "notice.html",
            heading=heading,
            message=message,
            comment=comment,
            comment_label=comment_label,
            action_url=editor_url(post_id),
            action_label=action_label,
        ),
    )


def review_requested_email(title: Optional[str], post_id: Any, *, for_reviewer: bool = False) -> RenderedEmail:
    title = title or UNTITLED
    if for_reviewer:
        return _notice(
            f"Review Requested: {title}", "Review Requested",
            f'You have been assigned to review "{title}".', post_id, "Review Article",
        )
    return _notice(
        f"Review Requested: {title}", "Review Requested",
        f'Your article "{title}" has been submitted for review.', post_id, "View Article",
    )


def approved_email(title: str, post_id: Any, comment: Optional[str] = None) -> RenderedEmail:
    return _notice(
        f"Article Approved: {title}", "Article Approved",
        f'Your article "{title}" has been approved and is ready to publish.',
        post_id, "View Article", comment=comment, comment_label="Comment",
    )


def revisions_needed_email(title: str, post_id: Any, comment: str) -> RenderedEmail:
    return _notice(
        f"Article Needs Revisions: {title}", "Article Needs Revisions",
        f'Your article "{title}" has been returned for revisions.',
        post_id, "Edit Article", comment=comment, comment_label="Feedback",
    )


def reviewer_assigned_email(title: Optional[str], post_id: Any, role: str) -> RenderedEmail:
    title = title or UNTITLED
    return _notice(
        f"Assigned to Review: {title}", "Review Assignment",
        f'You have been assigned as a {role} for "{title}".', post_id, "Review Article",
    )


# ═══════════════════════════════════════════════════════════════════════════════
# ASSIGNMENTS
# ═══════════════════════════════════════════════════════════════════════════════


def days_until(deadline: datetime, now: datetime) -> int:
    return math.ceil((deadline - now).total_seconds() / 86400)


def deadline_reminder_email(assignments: Sequence[Any], now: datetime) -> RenderedEmail:
    """
    One digest for an assignee. `assignments` carry .deadline and .post
    and are ordered soonest first; urgency follows the first one.
    """
    count = len(assignments)
    noun = "article" if count == 1 else "articles"
    if days_until(assignments[0].deadline, now) <= 1:
        subject = f"⚠️ Assignment Deadline Approaching - {count} {noun}"
    else:
        subject = f"📅 Upcoming Assignment Deadlines - {count} {noun}"

    items = [
        {
            "title": (a.post.title if a.post else None) or "Unknown Article",
            "days": days_until(a.deadline, now),
        }
        for a in assignments
    ]
    return RenderedEmail(
        subject=subject,
        html=render(
            "deadline_reminder.html",
            subject=subject,
            items=items,
            assignments_url=f"{settings.SITE_URL}/admin/assignments",
        ),
    )
