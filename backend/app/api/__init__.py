"""HTTP API for model-viewer."""

from fastapi import APIRouter

from app.api.annotations import router as annotations_router
from app.api.auth import router as auth_router
from app.api.components import router as components_router
from app.api.models import router as models_router

router = APIRouter(prefix="/api")
router.include_router(auth_router)
router.include_router(models_router)
router.include_router(components_router)
router.include_router(annotations_router)

__all__ = ["router"]
