"""
Health check API endpoints.

Routes: GET /health, GET /health/registry

Dependencies: exam_helper.boundary
System role: Health check HTTP API
"""

from fastapi import APIRouter, Depends
from pydantic import BaseModel

from exam_helper.api.deps import get_registry
from exam_helper.boundary.vdb import DocumentRegistry


class HealthResponse(BaseModel):
    """Health check response model."""

    status: str
    message: str


class RegistryHealthResponse(HealthResponse):
    """Registry health response model."""

    document_count: int


router = APIRouter(prefix="/health", tags=["health"])


@router.get("", response_model=HealthResponse)
async def health_check() -> HealthResponse:
    """Basic health check."""
    return HealthResponse(status="healthy", message="Server Healthy")


@router.get("/registry", response_model=RegistryHealthResponse)
async def health_check_registry(
    registry: DocumentRegistry = Depends(get_registry),
) -> RegistryHealthResponse:
    """Document registry health check."""
    return RegistryHealthResponse(
        status="healthy",
        message="Document registry accessible",
        document_count=len(registry),
    )
