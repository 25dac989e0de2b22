"""
Portfolio Backend: Status Probe
================================

GET /auth/status answers as long as the process is serving requests. It
checks nothing; /health is the probe that looks at the database.
"""

from fastapi import APIRouter

from portfolio_api.schemas.submission import StatusResponse

router = APIRouter(prefix="/auth", tags=["Health"])


@router.get("/status", response_model=StatusResponse, summary="Liveness probe")
async def get_status() -> StatusResponse:
    return StatusResponse()
