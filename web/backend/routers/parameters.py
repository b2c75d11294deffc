#!/usr/bin/env python3
"""
Parameter endpoints - system parameters and matching weights.
"""

from typing import Optional
from fastapi import APIRouter, Depends, Query

from core.app_context import AppContext
from core.parameters import ParameterValue
from ..dependencies import get_app_context
from ..models.requests import MatchingWeightsUpdate, ParameterUpdate
from ..models.responses import ParameterResponse, ParameterListResponse, MatchingWeightsResponse
from ..services.parameter_service import ParameterService
from ..utils import safe_datetime_iso

router = APIRouter(prefix="/api", tags=["parameters"])


def get_parameter_service(ctx: AppContext = Depends(get_app_context)) -> ParameterService:
    return ParameterService(ctx.parameter_store, ctx.recompute_trigger)


def _to_response(value: ParameterValue) -> ParameterResponse:
    return ParameterResponse(
        name=value.name,
        type=value.type,
        value=value.value,
        scope=value.scope,
        version=value.version,
        effective_time=safe_datetime_iso(value.effective_time)
    )


@router.get("/parameters", response_model=ParameterListResponse)
def list_parameters(
    scope: Optional[str] = Query(None, description="Only parameters in this scope"),
    ctx: AppContext = Depends(get_app_context)
):
    """List all system parameters."""
    values = ctx.parameter_store.list_all(scope)
    return ParameterListResponse(count=len(values), parameters=[_to_response(v) for v in values])


@router.post("/parameters/reset-defaults", response_model=ParameterListResponse)
def reset_defaults(service: ParameterService = Depends(get_parameter_service)):
    """Restore prices, limits and matching weights to their defaults."""
    values = service.reset_defaults()
    return ParameterListResponse(count=len(values), parameters=[_to_response(v) for v in values])


@router.get("/parameters/{name}", response_model=ParameterResponse)
def get_parameter(name: str, ctx: AppContext = Depends(get_app_context)):
    """Get one parameter by name."""
    return _to_response(ctx.parameter_store.get(name))


@router.put("/parameters/{name}", response_model=ParameterResponse)
def update_parameter(
    name: str,
    update: ParameterUpdate,
    service: ParameterService = Depends(get_parameter_service)
):
    """
    Create or update a parameter.

    The value must parse as the parameter's type. Matching weights are
    rejected here; use PUT /api/config/matching-weights.
    """
    value = service.update_parameter(name, update.value, param_type=update.type, scope=update.scope)
    return _to_response(value)


@router.get("/config/matching-weights", response_model=MatchingWeightsResponse)
def get_matching_weights(service: ParameterService = Depends(get_parameter_service)):
    """Current matching weights and their version."""
    weights = service.current_weights()
    return MatchingWeightsResponse(
        teacher_rating=weights.teacher_rating,
        interest_match=weights.interest_match,
        learning_style=weights.learning_style,
        version=weights.version
    )


@router.put("/config/matching-weights", response_model=MatchingWeightsResponse)
def update_matching_weights(
    update: MatchingWeightsUpdate,
    service: ParameterService = Depends(get_parameter_service)
):
    """
    Replace the matching weights.

    - teacher_rating + interest_match + learning_style must equal 100
    - existing matches computed with older weights are marked stale
    """
    weights, invalidated = service.update_weights(
        update.teacher_rating,
        update.interest_match,
        update.learning_style
    )
    return MatchingWeightsResponse(
        teacher_rating=weights.teacher_rating,
        interest_match=weights.interest_match,
        learning_style=weights.learning_style,
        version=weights.version,
        invalidated=invalidated
    )
