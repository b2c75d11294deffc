#!/usr/bin/env python3
"""
Match Score - weighted compatibility between a child and a teacher/course.

score = rating_component + interest_component + style_component

- rating_component: avg_score normalized to 0-100, times w_rating / 100
- interest_component: |child_tags & target_tags| / max(1, |child_tags|),
  scaled to 0-100, times w_interest / 100
- style_component: w_style when learning style equals teaching style, else 0

The sum is rounded half-up and clamped to [0, 100]. Weights must sum to
exactly 100; anything else is rejected rather than normalized.
"""

import logging
from decimal import Decimal, ROUND_HALF_UP
from typing import Optional

from core.parameters.models import WeightSet
from core.scorer.models import ChildProfile, TargetProfile, MatchScore
from core.scorer.tags import tokenize_tags, styles_match

logger = logging.getLogger(__name__)

HUNDRED = Decimal(100)
DEFAULT_RATING_SCALE = 100.0
DEFAULT_MISSING_RATING = 50.0


def normalize_rating(
    avg_score,
    rating_scale: float = DEFAULT_RATING_SCALE,
    missing_rating: float = DEFAULT_MISSING_RATING
) -> Decimal:
    """Map avg_score from [0, rating_scale] onto [0, 100], clamped."""
    if avg_score is None:
        return _clamp(Decimal(str(missing_rating)))

    scale = Decimal(str(rating_scale))
    if scale <= 0:
        raise ValueError(f"rating_scale must be positive, got {rating_scale}")

    normalized = Decimal(str(avg_score)) * HUNDRED / scale
    return _clamp(normalized)


def interest_overlap(child_interest: Optional[str], target_tags: Optional[str]):
    """Return (matched tag count, denominator, matched tags).

    The denominator is the child's tag count, at least 1.
    """
    child = tokenize_tags(child_interest)
    target = tokenize_tags(target_tags)
    matched = child & target
    return len(matched), max(1, len(child)), sorted(matched)


def round_half_up(value: Decimal) -> int:
    return int(value.quantize(Decimal(1), rounding=ROUND_HALF_UP))


def compute_match_score(
    child: ChildProfile,
    target: TargetProfile,
    weights: WeightSet,
    rating_scale: float = DEFAULT_RATING_SCALE,
    missing_rating: float = DEFAULT_MISSING_RATING
) -> MatchScore:
    """
    Compute the weighted match score.

    Args:
        child: Child profile
        target: Teacher (or course) profile
        weights: Weight triple; must sum to 100
        rating_scale: Scale avg_score is stored on
        missing_rating: Normalized rating used when avg_score is absent

    Returns:
        MatchScore with integer score in [0, 100] and component breakdown

    Raises:
        InvalidWeightsError: If weights are negative or do not sum to 100
    """
    weights.validate()

    rating = normalize_rating(target.avg_score, rating_scale, missing_rating)
    rating_points = rating * Decimal(weights.teacher_rating) / HUNDRED

    matched_count, denominator, matched_tags = interest_overlap(child.interest, target.tags)
    ratio = Decimal(matched_count) / Decimal(denominator)
    interest_points = Decimal(matched_count) * Decimal(weights.interest_match) / Decimal(denominator)

    style_match = styles_match(child.learning_style, target.teaching_style)
    style_points = Decimal(weights.learning_style) if style_match else Decimal(0)

    total = rating_points + interest_points + style_points
    score = max(0, min(100, round_half_up(total)))

    return MatchScore(
        target_id=target.target_id,
        score=score,
        rating_points=float(rating_points),
        interest_points=float(interest_points),
        style_points=float(style_points),
        normalized_rating=float(rating),
        interest_overlap=float(ratio),
        style_match=style_match,
        weight_version=weights.version,
        matched_tags=matched_tags,
    )


def _clamp(value: Decimal) -> Decimal:
    return max(Decimal(0), min(HUNDRED, value))
