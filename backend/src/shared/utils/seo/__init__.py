"""
SEO Utilities

Pure scoring helpers used by the editor's SEO panel and the
/api/seo endpoints. Nothing here touches the database.

Usage:
======
    from src.shared.utils.seo import calculate_seo_score, calculate_readability

    analysis = calculate_seo_score(title=post.title, content=html, excerpt=post.excerpt)
    analysis.score            # 0-100
    analysis.recommendations  # ordered, most important first
"""

from src.shared.utils.seo.analyzer import (
    FACTOR_WEIGHTS,
    FactorScore,
    SEOAnalysis,
    calculate_seo_score,
)
from src.shared.utils.seo.images import (
    ImageSEOAnalysis,
    analyze_images,
    extract_images,
    validate_alt_text,
)
from src.shared.utils.seo.keywords import (
    KeywordAnalysis,
    analyze_keyword,
    calculate_keyword_density,
    get_keyword_suggestions,
)
from src.shared.utils.seo.links import LinkAnalysis, analyze_links, extract_links
from src.shared.utils.seo.meta import (
    MetaAnalysis,
    analyze_meta_tags,
    optimize_meta_description_length,
    optimize_title_length,
)
from src.shared.utils.seo.readability import (
    ReadabilityScore,
    calculate_readability,
    count_words,
)

__all__ = [
    "FACTOR_WEIGHTS",
    "FactorScore",
    "SEOAnalysis",
    "calculate_seo_score",
    "ImageSEOAnalysis",
    "analyze_images",
    "extract_images",
    "validate_alt_text",
    "KeywordAnalysis",
    "analyze_keyword",
    "calculate_keyword_density",
    "get_keyword_suggestions",
    "LinkAnalysis",
    "analyze_links",
    "extract_links",
    "MetaAnalysis",
    "analyze_meta_tags",
    "optimize_meta_description_length",
    "optimize_title_length",
    "ReadabilityScore",
    "calculate_readability",
    "count_words",
]
