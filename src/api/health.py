"""Health check endpoint."""

from fastapi import APIRouter, Request

router = APIRouter()


@router.get("/health")
def health_check(request: Request) -> dict[str, str | int]:
    """Return application health and the number of active game sessions."""
    service = getattr(request.app.state, "game_service", None)
    if service is None:
        return {"status": "starting", "sessions": 0}
    return {"status": "ok", "sessions": service.active_count()}
