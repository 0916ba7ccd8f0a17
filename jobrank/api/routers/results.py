"""Results and export endpoints."""
from fastapi import APIRouter, Depends
from fastapi.responses import StreamingResponse

from jobrank.api.dependencies import get_service
from jobrank.api.models import RankedJob
from jobrank.api.services.session_service import SessionService

router = APIRouter(prefix="/api/results", tags=["results"])


@router.get("", response_model=list[RankedJob])
async def get_results(service: SessionService = Depends(get_service)):
    """All jobs ranked by descending score."""
    return service.results()


@router.get("/export")
async def export_results(service: SessionService = Depends(get_service)):
    """Download the ranking as CSV."""
    content = service.export_csv()
    return StreamingResponse(
        iter([content]),
        media_type="text/csv",
        headers={"Content-Disposition": "attachment; filename=job-rankings.csv"},
    )
