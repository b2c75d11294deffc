#!/usr/bin/env python3
"""
Error handlers for the web application.

Domain errors keep their stable code in the response body so clients can
tell "course full" apart from "already enrolled".
"""

import logging
from typing import Dict

from fastapi import Request, HTTPException
from fastapi.responses import JSONResponse

from core.exceptions import (
    CareError,
    NotFoundError,
    CapacityExceededError,
    AlreadyEnrolledError,
    NotEnrolledError,
    InvalidWeightsError,
    ParameterValueError,
    BusyError,
    AdmissionTimeoutError,
)

logger = logging.getLogger(__name__)

STATUS_BY_ERROR: Dict[type, int] = {
    NotFoundError: 404,
    CapacityExceededError: 409,
    AlreadyEnrolledError: 409,
    NotEnrolledError: 409,
    InvalidWeightsError: 400,
    ParameterValueError: 400,
    BusyError: 503,
    AdmissionTimeoutError: 504,
}


def status_for(exc: CareError) -> int:
    for error_type, status_code in STATUS_BY_ERROR.items():
        if isinstance(exc, error_type):
            return status_code
    return 500


async def care_exception_handler(
    request: Request,
    exc: CareError
) -> JSONResponse:
    """
    Handle domain errors.

    Args:
        request: The FastAPI request.
        exc: The domain error.

    Returns:
        JSONResponse with error details and the error code.
    """
    status_code = status_for(exc)
    if status_code >= 500:
        logger.error(f"Service error in {request.url.path}: {exc}")
    else:
        logger.info(f"Rejected {request.method} {request.url.path}: {exc.code}: {exc}")

    return JSONResponse(
        status_code=status_code,
        content={
            "success": False,
            "error": str(exc),
            "type": exc.__class__.__name__,
            "code": exc.code
        }
    )


async def http_exception_handler(
    request: Request,
    exc: HTTPException
) -> JSONResponse:
    """
    Handle FastAPI HTTP exceptions with consistent format.
    """
    return JSONResponse(
        status_code=exc.status_code,
        content={
            "success": False,
            "error": exc.detail,
            "type": "HTTPException",
            "code": "http_error"
        }
    )


async def general_exception_handler(
    request: Request,
    exc: Exception
) -> JSONResponse:
    """
    Handle unexpected exceptions.
    """
    logger.exception(f"Unexpected error in {request.url.path}")

    return JSONResponse(
        status_code=500,
        content={
            "success": False,
            "error": "Internal server error",
            "type": "InternalError",
            "code": "internal_error"
        }
    )
