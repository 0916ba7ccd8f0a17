"""Comparison session endpoints."""
from fastapi import APIRouter, Depends, HTTPException

from jobrank.api.dependencies import get_service
from jobrank.api.models import ChoiceRequest, ChoiceResponse, ComparisonView, ResultsView
from jobrank.api.services.session_service import SessionService
from jobrank.core.errors import (
    InvalidTransitionError,
    NoActiveComparisonError,
    NoEligibleGroupsError,
)

router = APIRouter(prefix="/api/session", tags=["session"])

_CONFLICTS = (InvalidTransitionError, NoActiveComparisonError, NoEligibleGroupsError)


@router.get("", response_model=ComparisonView)
async def get_session(service: SessionService = Depends(get_service)):
    """Current view, the pair on screen and progress stats."""
    return service.current()


@router.post("/choice", response_model=ChoiceResponse)
async def submit_choice(request: ChoiceRequest, service: SessionService = Depends(get_service)):
    """Record which option was preferred and move to the next pair."""
    try:
        return service.choose(request.choice)
    except _CONFLICTS as e:
        raise HTTPException(status_code=409, detail=str(e))


@router.post("/skip", response_model=ComparisonView)
async def skip(service: SessionService = Depends(get_service)):
    """Show a different pair without recording anything."""
    try:
        return service.skip()
    except _CONFLICTS as e:
        raise HTTPException(status_code=409, detail=str(e))


@router.post("/results", response_model=ResultsView)
async def show_results(service: SessionService = Depends(get_service)):
    """Switch to the results view."""
    try:
        return service.show_results()
    except InvalidTransitionError as e:
        raise HTTPException(status_code=409, detail=str(e))


@router.post("/comparison", response_model=ComparisonView)
async def back_to_comparison(service: SessionService = Depends(get_service)):
    """Return from the results view to the comparison."""
    try:
        return service.back_to_comparison()
    except _CONFLICTS as e:
        raise HTTPException(status_code=409, detail=str(e))


@router.delete("", response_model=ComparisonView)
async def reset(service: SessionService = Depends(get_service)):
    """Delete all saved progress and start over."""
    try:
        return service.reset()
    except NoEligibleGroupsError as e:
        raise HTTPException(status_code=409, detail=str(e))
