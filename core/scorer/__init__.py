#!/usr/bin/env python3
"""
Scoring Module - Match Scorer.

Public API:
- compute_match_score: weighted child/teacher compatibility score
- course_age_match: age-range percentage for course browsing
- ChildProfile, TargetProfile, MatchScore: scorer inputs and result

Modules:

- models.py: Profiles and MatchScore
- tags.py: Interest/specialty tag parsing and style comparison
- match_score.py: Weighted score (rating + interest overlap + style)
- age_match.py: Course age-range percentage
"""

from core.scorer.models import ChildProfile, TargetProfile, MatchScore
from core.scorer.match_score import compute_match_score, normalize_rating
from core.scorer.age_match import course_age_match, parse_age_range

__all__ = [
    'ChildProfile',
    'TargetProfile',
    'MatchScore',
    'compute_match_score',
    'normalize_rating',
    'course_age_match',
    'parse_age_range',
]
