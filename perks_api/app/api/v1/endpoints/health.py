"""
Health endpoint for API v1.

Returns a static payload together with the service name and version so
load balancers and deploy scripts can tell the process is serving.
"""

from typing import Dict

from fastapi import APIRouter

from perks_api.app.core.config import settings

router = APIRouter()


@router.get("/", response_model=Dict[str, str])
async def health() -> Dict[str, str]:
    return {"status": "ok", "service": settings.project_name, "version": settings.api_version}
