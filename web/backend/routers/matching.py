#!/usr/bin/env python3
"""
Matching endpoints - ranked teachers and courses, match history.
"""

from typing import List, Optional
from fastapi import APIRouter, Depends, Query

from core.app_context import AppContext
from core.ranking import MatchRecordView
from ..dependencies import get_app_context
from ..models.requests import RatingChange
from ..models.responses import (
    RankedTeacherItem,
    RankedTeachersResponse,
    RankedCourseItem,
    RankedCoursesResponse,
    MatchRecordItem,
    MatchRecordsResponse,
    InvalidationResponse,
)
from ..utils import safe_datetime_iso

router = APIRouter(prefix="/api", tags=["matching"])


def _to_record_items(views: List[MatchRecordView]) -> List[MatchRecordItem]:
    return [
        MatchRecordItem(
            match_id=v.match_id,
            youth_id=v.youth_id,
            youth_name=v.youth_name,
            target_type=v.target_type,
            target_id=v.target_id,
            score=v.score,
            weight_version=v.weight_version,
            algorithm_version=v.algorithm_version,
            status=v.status,
            basis=v.basis,
            invalidated_reason=v.invalidated_reason,
            match_time=safe_datetime_iso(v.match_time),
            superseded_at=safe_datetime_iso(v.superseded_at)
        )
        for v in views
    ]


@router.get("/children/{child_id}/ranked-teachers", response_model=RankedTeachersResponse)
def get_ranked_teachers(child_id: str, ctx: AppContext = Depends(get_app_context)):
    """
    Rank all teachers for a child.

    Scores are recomputed with the current weights on every call.
    """
    ranked = ctx.ranking_service.ranked_teachers(child_id)
    weight_version = ranked[0].weight_version if ranked else ctx.parameter_store.weights().version

    return RankedTeachersResponse(
        child_id=child_id,
        weight_version=weight_version,
        count=len(ranked),
        teachers=[
            RankedTeacherItem(
                teacher_id=t.teacher_id,
                name=t.name,
                specialty=t.specialty,
                teaching_style=t.teaching_style,
                avg_score=t.avg_score,
                score=t.score,
                components=t.components
            )
            for t in ranked
        ]
    )


@router.get("/children/{child_id}/ranked-courses", response_model=RankedCoursesResponse)
def get_ranked_courses(
    child_id: str,
    course_type: Optional[str] = Query(None, description="Only courses of this type"),
    neighborhood_id: Optional[str] = Query(None, description="Only courses in this community"),
    open_only: bool = Query(False, description="Hide courses with no seats left"),
    ctx: AppContext = Depends(get_app_context)
):
    """Rank courses for a child by age match."""
    ranked = ctx.ranking_service.ranked_courses(
        child_id,
        course_type=course_type,
        neighborhood_id=neighborhood_id,
        open_only=open_only
    )

    return RankedCoursesResponse(
        child_id=child_id,
        count=len(ranked),
        courses=[
            RankedCourseItem(
                course_id=c.course_id,
                name=c.name,
                type=c.type,
                age_range=c.age_range,
                teacher_id=c.teacher_id,
                neighborhood_id=c.neighborhood_id,
                schedule=c.schedule,
                match_percentage=c.match_percentage,
                capacity=c.capacity,
                current_enrollment=c.current_enrollment,
                seats_left=c.seats_left
            )
            for c in ranked
        ]
    )


@router.get("/children/{child_id}/match-records", response_model=MatchRecordsResponse)
def get_match_records(
    child_id: str,
    include_history: bool = Query(False, description="Include superseded records"),
    ctx: AppContext = Depends(get_app_context)
):
    """Persisted teacher matches for a child."""
    views = ctx.ranking_service.match_history(child_id, include_history=include_history)
    return MatchRecordsResponse(count=len(views), records=_to_record_items(views))


@router.get("/teachers/{teacher_id}/student-matches", response_model=MatchRecordsResponse)
def get_student_matches(teacher_id: str, ctx: AppContext = Depends(get_app_context)):
    """Children currently matched to a teacher, best score first."""
    views = ctx.ranking_service.student_matches(teacher_id)
    return MatchRecordsResponse(count=len(views), records=_to_record_items(views))


@router.post("/teachers/{teacher_id}/rating-changed", response_model=InvalidationResponse)
def teacher_rating_changed(
    teacher_id: str,
    change: RatingChange,
    ctx: AppContext = Depends(get_app_context)
):
    """
    Hook for the evaluation aggregation job.

    Marks the teacher's matches stale when the average moved by at least
    the configured threshold.
    """
    count = ctx.recompute_trigger.on_teacher_rating_changed(teacher_id, change.previous, change.current)
    return InvalidationResponse(
        invalidated=count,
        message=f"{count} matches for teacher {teacher_id} marked stale"
    )
