"""
SEO Handler

Live analysis for the editor sidebar. Everything here is computed from the
request body; nothing is read from or written to the database.
"""

from fastapi import APIRouter

from src.api.dependencies import CurrentProfile
from src.config.settings import settings
from src.shared.schemas.analytics import KeywordRequest, ReadabilityRequest, SEOAnalyzeRequest
from src.shared.utils.seo import (
    KeywordAnalysis,
    ReadabilityScore,
    analyze_images,
    analyze_links,
    analyze_meta_tags,
    analyze_keyword,
    calculate_readability,
    calculate_seo_score,
)


router = APIRouter()


@router.post("/analyze")
async def analyze(request: SEOAnalyzeRequest, profile: CurrentProfile) -> dict:
    """Overall score with per-factor breakdown, meta, image and link reports."""
    analysis = calculate_seo_score(
        title=request.title,
        content=request.content,
        slug=request.slug,
        meta_description=request.meta_description,
        excerpt=request.excerpt,
        headings=request.headings,
        images=[image.model_dump() for image in request.images],
        word_count=request.word_count,
    )
    return {
        "seo": analysis,
        "meta": analyze_meta_tags(request.title, request.meta_description or ""),
        "images": analyze_images(request.content),
        "links": analyze_links(request.content, settings.SITE_URL),
    }


@router.post("/readability", response_model=ReadabilityScore)
async def readability(request: ReadabilityRequest, profile: CurrentProfile):
    return calculate_readability(request.content)


@router.post("/keyword", response_model=KeywordAnalysis)
async def keyword(request: KeywordRequest, profile: CurrentProfile):
    return analyze_keyword(request.keyword, request.title, request.content, request.excerpt)
