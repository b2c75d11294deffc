#!/usr/bin/env python3
"""
Scoring Models - Profiles fed into the scorer and its results.

Profiles are plain dataclasses detached from the ORM so scoring stays a
pure function and can run after the database session is closed.
"""

from dataclasses import dataclass, field
from decimal import Decimal
from typing import Any, Dict, Optional


@dataclass(frozen=True)
class ChildProfile:
    child_id: str
    family_id: Optional[str] = None
    age: Optional[int] = None
    interest: Optional[str] = None
    learning_style: Optional[str] = None

    @classmethod
    def from_orm(cls, youth) -> 'ChildProfile':
        return cls(
            child_id=youth.youth_id,
            family_id=youth.family_id,
            age=youth.age,
            interest=youth.interest,
            learning_style=youth.learning_style,
        )


@dataclass(frozen=True)
class TargetProfile:
    """What a child is matched against."""
    target_id: str
    tags: Optional[str] = None
    teaching_style: Optional[str] = None
    avg_score: Optional[Decimal] = None

    @classmethod
    def from_teacher(cls, teacher) -> 'TargetProfile':
        return cls(
            target_id=teacher.teacher_id,
            tags=teacher.specialty,
            teaching_style=teacher.teaching_style,
            avg_score=teacher.avg_score,
        )


@dataclass
class MatchScore:
    """Weighted match score with its component breakdown."""
    target_id: str
    score: int
    rating_points: float = 0.0
    interest_points: float = 0.0
    style_points: float = 0.0
    normalized_rating: float = 0.0
    interest_overlap: float = 0.0
    style_match: bool = False
    weight_version: int = 0
    matched_tags: list = field(default_factory=list)

    def basis(self) -> Dict[str, Any]:
        """Component breakdown persisted with a MatchRecord."""
        return {
            'rating_points': self.rating_points,
            'interest_points': self.interest_points,
            'style_points': self.style_points,
            'normalized_rating': self.normalized_rating,
            'interest_overlap': self.interest_overlap,
            'style_match': self.style_match,
            'matched_tags': list(self.matched_tags),
        }
