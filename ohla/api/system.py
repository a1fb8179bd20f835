"""System API — health check."""

from fastapi import APIRouter

from ohla.utils.constants import SERVICE_NAME

router = APIRouter(prefix="/api", tags=["system"])


@router.get("/health")
def health_check():
    return {"status": "ok", "service": SERVICE_NAME}
