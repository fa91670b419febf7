"""Health check endpoint."""

from datetime import datetime

from fastapi import APIRouter

from server.schemas.responses import HealthResponseDTO

router = APIRouter(tags=["Health"])


@router.get("/health", response_model=HealthResponseDTO)
async def health_check():
    return HealthResponseDTO(status="healthy", timestamp=datetime.utcnow().isoformat() + "Z")
