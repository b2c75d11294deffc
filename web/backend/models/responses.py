#!/usr/bin/env python3
"""
Response models for API endpoints.
"""

from pydantic import BaseModel, ConfigDict, Field
from typing import List, Optional, Dict, Any


class EnrollmentResponse(BaseModel):
    """A child's enrollment in a course."""
    model_config = ConfigDict(
        json_schema_extra={
            "example": {
                "child_id": "Y001",
                "course_id": "C001",
                "status": "enrolled",
                "selection_date": "2026-03-02T16:00:00+00:00",
                "dropped_at": None
            }
        }
    )

    child_id: str
    course_id: str
    status: str
    selection_date: Optional[str] = None
    dropped_at: Optional[str] = None


class EnrollmentListResponse(BaseModel):
    success: bool = True
    count: int
    enrollments: List[EnrollmentResponse]


class OccupancyResponse(BaseModel):
    course_id: str
    name: Optional[str] = None
    capacity: int = Field(ge=1)
    current_enrollment: int = Field(ge=0)
    seats_left: int = Field(ge=0)


class RankedTeacherItem(BaseModel):
    teacher_id: str
    name: Optional[str] = None
    specialty: Optional[str] = None
    teaching_style: Optional[str] = None
    avg_score: Optional[float] = None
    score: int = Field(ge=0, le=100)
    components: Dict[str, Any] = Field(default_factory=dict)


class RankedTeachersResponse(BaseModel):
    """Teachers ranked for a child, best match first."""
    success: bool = True
    child_id: str
    weight_version: int
    count: int
    teachers: List[RankedTeacherItem]


class RankedCourseItem(BaseModel):
    course_id: str
    name: Optional[str] = None
    type: Optional[str] = None
    age_range: Optional[str] = None
    teacher_id: Optional[str] = None
    neighborhood_id: Optional[str] = None
    schedule: Optional[str] = None
    match_percentage: int = Field(ge=0, le=100)
    capacity: int
    current_enrollment: int
    seats_left: int


class RankedCoursesResponse(BaseModel):
    success: bool = True
    child_id: str
    count: int
    courses: List[RankedCourseItem]


class MatchRecordItem(BaseModel):
    match_id: str
    youth_id: str
    youth_name: Optional[str] = None
    target_type: str
    target_id: str
    score: int
    weight_version: int
    algorithm_version: str
    status: str
    basis: Dict[str, Any] = Field(default_factory=dict)
    invalidated_reason: Optional[str] = None
    match_time: Optional[str] = None
    superseded_at: Optional[str] = None


class MatchRecordsResponse(BaseModel):
    success: bool = True
    count: int
    records: List[MatchRecordItem]


class InvalidationResponse(BaseModel):
    """Result of an invalidation hook."""
    success: bool = True
    invalidated: int = Field(ge=0)
    message: str


class ParameterResponse(BaseModel):
    name: str
    type: str
    value: str
    scope: str
    version: int
    effective_time: Optional[str] = None


class ParameterListResponse(BaseModel):
    success: bool = True
    count: int
    parameters: List[ParameterResponse]


class MatchingWeightsResponse(BaseModel):
    """Current matching weight triple."""
    model_config = ConfigDict(
        json_schema_extra={
            "example": {
                "teacher_rating": 60,
                "interest_match": 30,
                "learning_style": 10,
                "version": 3,
                "invalidated": 0
            }
        }
    )

    teacher_rating: int
    interest_match: int
    learning_style: int
    version: int
    invalidated: int = 0
