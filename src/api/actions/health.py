from importlib.metadata import PackageNotFoundError, version

from fastapi import APIRouter
from pydantic import BaseModel

router = APIRouter()

class HealthResponse(BaseModel):
    status: str
    version: str

@router.get("/health", response_model=HealthResponse, tags=["System"])
async def health_check():
    """Check the health of the API."""
    try:
        app_version = version("readiness-engine")
    except PackageNotFoundError:
        app_version = "0.0.0-dev"
    return HealthResponse(status="ok", version=app_version)
