"""Module status API.

Lists registered API modules, their priority, and lifecycle status.
"""

from fastapi import APIRouter, Request
from fastapi.responses import JSONResponse

router = APIRouter(prefix="/api/modules", tags=["modules"])


def _get_registry(request: Request):
    """Get module registry from app state, or None."""
    try:
        return request.app.state.module_registry
    except (AttributeError, KeyError):
        return None


@router.get("")
async def list_modules(request: Request):
    """List all registered modules with status."""
    registry = _get_registry(request)
    if registry is None:
        return []
    return registry.list_modules()


@router.get("/{name}")
async def get_module(name: str, request: Request):
    """Get details for a specific module."""
    registry = _get_registry(request)
    if registry is None:
        return JSONResponse(status_code=404, content={"detail": "No module registry"})

    info = registry.describe(name)
    if info is None:
        return JSONResponse(status_code=404, content={"detail": f"Module '{name}' not found"})
    return info
