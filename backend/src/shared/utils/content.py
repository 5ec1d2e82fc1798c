"""
Content Document Utilities

Helpers over the editor's JSON document tree. Only the generic node
shape is relied on:

    {"type": "doc", "content": [
        {"type": "heading", "attrs": {"level": 2}, "content": [{"type": "text", "text": "..."}]},
        {"type": "paragraph", "content": [{"type": "text", "text": "...", "marks": [...]}]},
        {"type": "image", "attrs": {"src": "...", "alt": "..."}},
    ]}

Unknown node types are walked through transparently. A plain string is
accepted anywhere a document is (legacy HTML bodies).
"""

from collections.abc import Mapping
import html
import math
import re
from typing import Any

from src.shared.utils.constants import WORDS_PER_MINUTE


_INLINE_TYPES = frozenset({"text", "hardBreak", "mention", "emoji"})
_TAG_RE = re.compile(r"<[^>]*>")
_SLUG_STRIP_RE = re.compile(r"[^a-z0-9]+")


def strip_html(value: str) -> str:
    """Drop tags and unescape entities."""
    return html.unescape(_TAG_RE.sub(" ", value))


def _children(node: Mapping) -> list:
    content = node.get("content")
    return content if isinstance(content, list) else []


# ═══════════════════════════════════════════════════════════════════════════════
# TEXT
# ═══════════════════════════════════════════════════════════════════════════════


def has_text(node: Any) -> bool:
    """True if any text node (or string) in the tree has non-blank text."""
    if not node:
        return False
    if isinstance(node, str):
        return bool(node.strip())
    if isinstance(node, list):
        return any(has_text(child) for child in node)
    if not isinstance(node, Mapping):
        return False
    if node.get("type") == "text":
        text = node.get("text")
        return isinstance(text, str) and bool(text.strip())
    return any(has_text(child) for child in _children(node))


def extract_text(node: Any) -> str:
    """
    Plain text of a document. Block nodes are separated by blank lines,
    inline runs are concatenated.
    """
    if node is None:
        return ""
    if isinstance(node, str):
        return strip_html(node)
    if isinstance(node, list):
        return "\n\n".join(part for part in (extract_text(n) for n in node) if part)
    if not isinstance(node, Mapping):
        return ""

    node_type = node.get("type")
    if node_type == "text":
        text = node.get("text")
        return text if isinstance(text, str) else ""
    if node_type == "hardBreak":
        return "\n"

    children = _children(node)
    inline = all(isinstance(c, Mapping) and c.get("type") in _INLINE_TYPES for c in children)
    if inline:
        return "".join(extract_text(c) for c in children)
    return "\n\n".join(part for part in (extract_text(c) for c in children) if part)


def count_words(node: Any) -> int:
    return len(extract_text(node).split())


def calculate_reading_time(node: Any) -> int:
    """Minutes to read at 225 wpm, rounded up, never below 1."""
    if not node:
        return 1
    return max(1, math.ceil(count_words(node) / WORDS_PER_MINUTE))


# ═══════════════════════════════════════════════════════════════════════════════
# STRUCTURE
# ═══════════════════════════════════════════════════════════════════════════════


def _walk(node: Any):
    if isinstance(node, list):
        for child in node:
            yield from _walk(child)
    elif isinstance(node, Mapping):
        yield node
        for child in _children(node):
            yield from _walk(child)


def _heading_level(attrs: Any) -> int:
    """attrs.level as an int clamped to 1-6; 2 when missing or not a number."""
    if not isinstance(attrs, Mapping):
        return 2
    try:
        level = int(attrs.get("level", 2))
    except (TypeError, ValueError, OverflowError):
        return 2
    return min(max(level, 1), 6)


def extract_headings(node: Any) -> list[str]:
    """Headings in document order as "h{level}:{text}"."""
    headings = []
    for item in _walk(node):
        if item.get("type") == "heading":
            level = _heading_level(item.get("attrs"))
            headings.append(f"h{level}:{extract_text(item)}")
    return headings


def extract_images(node: Any) -> list[dict[str, str]]:
    images = []
    for item in _walk(node):
        if item.get("type") == "image":
            attrs = item.get("attrs") or {}
            images.append({"src": attrs.get("src") or "", "alt": attrs.get("alt") or ""})
    return images


# ═══════════════════════════════════════════════════════════════════════════════
# RENDERING
# ═══════════════════════════════════════════════════════════════════════════════

_BLOCK_TAGS = {
    "paragraph": "p",
    "blockquote": "blockquote",
    "bulletList": "ul",
    "orderedList": "ol",
    "listItem": "li",
}

_MARK_TAGS = {
    "bold": "strong",
    "italic": "em",
    "underline": "u",
    "code": "code",
    "strike": "s",
}


def _render_text(node: Mapping) -> str:
    out = html.escape(node.get("text") or "")
    for mark in node.get("marks") or []:
        mark_type = mark.get("type")
        if mark_type == "link":
            href = html.escape((mark.get("attrs") or {}).get("href") or "", quote=True)
            out = f'<a href="{href}">{out}</a>'
        elif mark_type in _MARK_TAGS:
            tag = _MARK_TAGS[mark_type]
            out = f"<{tag}>{out}</{tag}>"
    return out


def render_html(node: Any) -> str:
    """
    Minimal HTML rendering for feeds and SEO analysis. Unknown node
    types render their children only.
    """
    if node is None:
        return ""
    if isinstance(node, str):
        return html.escape(node)
    if isinstance(node, list):
        return "".join(render_html(n) for n in node)
    if not isinstance(node, Mapping):
        return ""

    node_type = node.get("type")
    attrs = node.get("attrs") or {}
    inner = "".join(render_html(c) for c in _children(node))

    if node_type == "text":
        return _render_text(node)
    if node_type == "hardBreak":
        return "<br>"
    if node_type == "horizontalRule":
        return "<hr>"
    if node_type == "heading":
        level = _heading_level(attrs)
        return f"<h{level}>{inner}</h{level}>"
    if node_type == "codeBlock":
        return f"<pre><code>{inner}</code></pre>"
    if node_type == "image":
        src = html.escape(attrs.get("src") or "", quote=True)
        alt = html.escape(attrs.get("alt") or "", quote=True)
        return f'<img src="{src}" alt="{alt}">'
    if node_type in _BLOCK_TAGS:
        tag = _BLOCK_TAGS[node_type]
        return f"<{tag}>{inner}</{tag}>"
    return inner


# ═══════════════════════════════════════════════════════════════════════════════
# SLUGS
# ═══════════════════════════════════════════════════════════════════════════════


def slugify(value: str, max_length: int = 100) -> str:
    """ASCII slug: lowercase alphanumerics joined by single hyphens."""
    slug = _SLUG_STRIP_RE.sub("-", value.lower()).strip("-")
    return slug[:max_length].rstrip("-")
