#!/usr/bin/env python3
"""
Request models for API endpoints.
"""

from pydantic import BaseModel, Field
from typing import Any, Optional


class EnrollmentRequest(BaseModel):
    """Request to enroll a child in a course."""
    child_id: str = Field(..., min_length=1, description="Child (youth) id")
    course_id: str = Field(..., min_length=1, description="Course id")
    family_id: Optional[str] = Field(None, description="When set, the child must belong to this family")
    timeout_seconds: Optional[float] = Field(
        None,
        gt=0,
        le=60,
        description="Abandon the request if it cannot commit within this many seconds"
    )


class DropRequest(BaseModel):
    """Request to drop an enrollment."""
    child_id: str = Field(..., min_length=1)
    course_id: str = Field(..., min_length=1)
    family_id: Optional[str] = None
    timeout_seconds: Optional[float] = Field(None, gt=0, le=60)


class MatchingWeightsUpdate(BaseModel):
    """Request to replace the matching weight triple. Must sum to 100."""
    teacher_rating: int = Field(..., description="Weight of the teacher's average evaluation")
    interest_match: int = Field(..., description="Weight of the interest overlap")
    learning_style: int = Field(..., description="Weight of the learning/teaching style match")


class ParameterUpdate(BaseModel):
    """Request to create or update a system parameter."""
    value: Any = Field(..., description="New value; stored as a string")
    type: Optional[str] = Field(
        None,
        description="weight, price, limit or config; inferred from the name when omitted"
    )
    scope: str = Field(default="system")


class RatingChange(BaseModel):
    """Notification that a teacher's average evaluation changed."""
    previous: Optional[float] = Field(None, description="Average before the new evaluation")
    current: Optional[float] = Field(None, description="Average after the new evaluation")
