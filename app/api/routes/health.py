"""
Health API Routes
"""
from fastapi import APIRouter, Request, status
from fastapi.responses import JSONResponse

from app.database import database_health

router = APIRouter()


@router.get("/health")
async def health_check(request: Request) -> JSONResponse:
    """Application and storage health"""
    state = request.app.state
    if state.engine is None:
        storage = {"ok": True, "backend": "memory"}
    else:
        storage = {"backend": "sql", **database_health(state.engine)}
    ok = bool(storage.get("ok"))
    return JSONResponse(
        status_code=status.HTTP_200_OK if ok else status.HTTP_503_SERVICE_UNAVAILABLE,
        content={
            "status": "healthy" if ok else "degraded",
            "storage": storage,
        },
    )
