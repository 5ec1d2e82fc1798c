"""
Image SEO

Alt-text coverage for <img> tags in an HTML body.
"""

from dataclasses import dataclass, field
import re
from typing import Optional

from src.shared.utils.numbers import round_half_up


_IMG_RE = re.compile(r"<img[^>]+>", re.IGNORECASE)
_ALT_RE = re.compile(r"""alt=["']([^"']*)["']""", re.IGNORECASE)
_SRC_RE = re.compile(r"""src=["']([^"']*)["']""", re.IGNORECASE)

ALT_MIN_LENGTH = 3
ALT_MAX_LENGTH = 125


@dataclass
class ImageRef:
    src: Optional[str] = None
    alt: Optional[str] = None


@dataclass
class ImageSEOAnalysis:
    total_images: int
    images_with_alt: int
    images_without_alt: int
    missing_alt_images: list[dict]
    score: int
    recommendations: list[str] = field(default_factory=list)


def extract_images(content: str) -> list[ImageRef]:
    images = []
    for tag in _IMG_RE.findall(content or ""):
        alt = _ALT_RE.search(tag)
        src = _SRC_RE.search(tag)
        images.append(ImageRef(
            src=src.group(1) if src else None,
            alt=alt.group(1) if alt else None,
        ))
    return images


def analyze_images(content: str) -> ImageSEOAnalysis:
    images = extract_images(content)

    if not images:
        return ImageSEOAnalysis(
            total_images=0,
            images_with_alt=0,
            images_without_alt=0,
            missing_alt_images=[],
            score=5,
            recommendations=["Consider adding relevant images to improve engagement"],
        )

    missing = [
        {"src": img.src, "index": i}
        for i, img in enumerate(images)
        if not (img.alt or "").strip()
    ]
    with_alt = len(images) - len(missing)

    score = 10.0
    recommendations = []

    if missing:
        score -= len(missing) / len(images) * 10
        recommendations.append(f"{len(missing)} image(s) missing alt text")
        recommendations.append("Add descriptive alt text for better accessibility and SEO")

    empty = sum(1 for img in images if img.alt == "")
    if empty:
        recommendations.append(f"{empty} image(s) have empty alt text")
        recommendations.append("Remove alt attribute or add descriptive text")

    for number, img in enumerate(images, start=1):
        if img.alt and len(img.alt) < ALT_MIN_LENGTH:
            recommendations.append(
                f"Image {number} has very short alt text - be more descriptive"
            )
        if img.alt and len(img.alt) > ALT_MAX_LENGTH:
            recommendations.append(f"Image {number} has very long alt text - keep it concise")

    return ImageSEOAnalysis(
        total_images=len(images),
        images_with_alt=with_alt,
        images_without_alt=len(missing),
        missing_alt_images=missing,
        score=max(0, int(round_half_up(score))),
        recommendations=recommendations,
    )


def validate_alt_text(alt_text: Optional[str]) -> tuple[bool, list[str]]:
    """Returns (valid, issues)."""
    if not alt_text or not alt_text.strip():
        return False, ["Alt text is required"]

    issues = []
    if len(alt_text) < ALT_MIN_LENGTH:
        issues.append("Alt text is too short - be more descriptive")
    if len(alt_text) > ALT_MAX_LENGTH:
        issues.append("Alt text is too long - keep it concise")

    lowered = alt_text.lower()
    if lowered.startswith("image of") or lowered.startswith("picture of"):
        issues.append("Avoid starting with 'image of' or 'picture of'")

    return not issues, issues
