#!/usr/bin/env python3
"""
Enrollment endpoints - admission control for course seats.
"""

import logging
from fastapi import APIRouter, Depends, Request
from fastapi.responses import JSONResponse

from slowapi import Limiter
from slowapi.util import get_remote_address
from slowapi.errors import RateLimitExceeded

from core.admission import EnrollmentRecord
from core.app_context import AppContext
from ..config import get_config
from ..dependencies import get_app_context
from ..models.requests import EnrollmentRequest, DropRequest
from ..models.responses import EnrollmentResponse, EnrollmentListResponse, OccupancyResponse
from ..utils import safe_datetime_iso

logger = logging.getLogger(__name__)

limiter = Limiter(key_func=get_remote_address, enabled=get_config().web.rate_limit_enabled)

router = APIRouter(prefix="/api", tags=["enrollments"])


def add_rate_limit_handlers(app):
    """Add rate limit exception handlers to the FastAPI app."""
    app.state.limiter = limiter
    app.add_exception_handler(RateLimitExceeded, _rate_limit_exceeded_handler)


async def _rate_limit_exceeded_handler(request: Request, exc: RateLimitExceeded):
    return JSONResponse(
        status_code=429,
        content={
            "success": False,
            "error": str(exc),
            "type": "RateLimitExceeded",
            "code": "rate_limited"
        }
    )


def _enrollment_limit() -> str:
    return get_config().web.enrollment_rate_limit


def _to_response(record: EnrollmentRecord) -> EnrollmentResponse:
    return EnrollmentResponse(
        child_id=record.child_id,
        course_id=record.course_id,
        status=record.status,
        selection_date=safe_datetime_iso(record.selection_date),
        dropped_at=safe_datetime_iso(record.dropped_at)
    )


@router.post("/enrollments", response_model=EnrollmentResponse, status_code=201)
@limiter.limit(_enrollment_limit)
def enroll(request: Request, body: EnrollmentRequest, ctx: AppContext = Depends(get_app_context)):
    """
    Enroll a child in a course.

    Fails with 409 capacity_exceeded when the course is full and 409
    already_enrolled when the child already holds a seat.
    """
    record = ctx.admission_controller.enroll(
        body.child_id,
        body.course_id,
        family_id=body.family_id,
        timeout=body.timeout_seconds
    )
    return _to_response(record)


@router.post("/enrollments/drop", response_model=EnrollmentResponse)
@limiter.limit(_enrollment_limit)
def drop(request: Request, body: DropRequest, ctx: AppContext = Depends(get_app_context)):
    """
    Drop a child's enrollment and free the seat.

    A repeated drop fails with 409 not_enrolled.
    """
    record = ctx.admission_controller.drop(
        body.child_id,
        body.course_id,
        family_id=body.family_id,
        timeout=body.timeout_seconds
    )
    return _to_response(record)


@router.get("/children/{child_id}/enrollments", response_model=EnrollmentListResponse)
def list_enrollments(child_id: str, ctx: AppContext = Depends(get_app_context)):
    """List a child's enrollments, active and dropped."""
    records = ctx.admission_controller.enrollments_for_child(child_id)
    return EnrollmentListResponse(
        count=len(records),
        enrollments=[_to_response(r) for r in records]
    )


@router.get("/courses/{course_id}/occupancy", response_model=OccupancyResponse)
def get_occupancy(course_id: str, ctx: AppContext = Depends(get_app_context)):
    """Capacity, current enrollment and seats left for a course."""
    seats = ctx.admission_controller.occupancy(course_id)
    return OccupancyResponse(
        course_id=seats.course_id,
        name=seats.name,
        capacity=seats.capacity,
        current_enrollment=seats.current_enrollment,
        seats_left=seats.seats_left
    )
