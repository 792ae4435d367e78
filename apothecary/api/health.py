"""Health check endpoint."""

from fastapi import APIRouter, Request

health_router = APIRouter(tags=["health"])


@health_router.get("/health")
async def health_check(request: Request) -> dict:
    container = getattr(request.app.state, "container", None)
    status = container.get_status() if container is not None else {"initialized": False}
    return {"status": "healthy" if status.get("initialized") else "starting", "container": status}
