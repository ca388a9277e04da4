"""Component metadata and search API endpoints.

Endpoints:
- GET /api/metadata/{component_id} - Component record, or {} if unknown
- GET /api/search?type=&pressureMin= - Ids of matching components
"""

from typing import Any

from fastapi import APIRouter, Query

from app.api.dependencies import CurrentUser, DbSession
from app.services.component_service import ComponentService

router = APIRouter(tags=["components"])


@router.get("/metadata/{component_id}")
async def get_metadata(
    component_id: str,
    db: DbSession,
    _user: CurrentUser,
) -> dict[str, Any]:
    """Look up a component by the node name clicked in the viewer."""
    component = await ComponentService.get(db, component_id)
    if component is None:
        return {}
    return component.to_dict()


@router.get("/search")
async def search_components(
    db: DbSession,
    _user: CurrentUser,
    component_type: str = Query(..., alias="type"),
    pressure_min: float = Query(..., alias="pressureMin"),
) -> list[str]:
    """Ids of components with ``type`` equal and pressure strictly greater than ``pressureMin``."""
    return await ComponentService.search(db, component_type, pressure_min)
