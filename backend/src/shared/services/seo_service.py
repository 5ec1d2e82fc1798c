"""
SEO Service

Runs the pure SEO scorers against a stored post. Ad-hoc analysis of
unsaved editor content goes straight to src.shared.utils.seo.
"""

from typing import Any, Dict
from uuid import UUID

from sqlalchemy.ext.asyncio import AsyncSession

from src.config.settings import settings
from src.shared.core.exceptions import PostNotFoundError
from src.shared.repositories.post_repository import PostRepository
from src.shared.utils.content import count_words, extract_headings, extract_images, render_html
from src.shared.utils.seo import (
    analyze_images,
    analyze_links,
    analyze_meta_tags,
    calculate_readability,
    calculate_seo_score,
)


class SEOService:
    def __init__(self, session: AsyncSession) -> None:
        self.session = session
        self.post_repo = PostRepository(session)

    async def analyze_post(self, post_id: UUID) -> Dict[str, Any]:
        post = await self.post_repo.get(post_id)
        if not post:
            raise PostNotFoundError(str(post_id))

        html = render_html(post.content)
        meta_description = post.meta_description or post.excerpt

        return {
            "seo": calculate_seo_score(
                title=post.title,
                content=html,
                slug=post.slug,
                meta_description=meta_description,
                excerpt=post.excerpt,
                headings=extract_headings(post.content),
                images=extract_images(post.content),
                word_count=count_words(post.content),
            ),
            "readability": calculate_readability(html),
            "meta": analyze_meta_tags(post.title, meta_description),
            "images": analyze_images(html),
            "links": analyze_links(html, settings.SITE_URL),
        }
