"""Annotation API endpoints.

Endpoints:
- GET /api/annotations - List all annotations
- POST /api/annotations - Create an annotation
"""

from fastapi import APIRouter

from app.api.dependencies import CurrentUser, DbSession
from app.schemas.annotation import AnnotationCreate, AnnotationResponse
from app.services.annotation_service import AnnotationService

router = APIRouter(prefix="/annotations", tags=["annotations"])


@router.get("")
async def list_annotations(
    db: DbSession, _user: CurrentUser
) -> list[AnnotationResponse]:
    annotations = await AnnotationService.list_all(db)
    return [AnnotationResponse.model_validate(a) for a in annotations]


@router.post("")
async def create_annotation(
    body: AnnotationCreate, db: DbSession, _user: CurrentUser
) -> AnnotationResponse:
    """Store an annotation and return the created row."""
    annotation = await AnnotationService.create(
        db, x=body.x, y=body.y, z=body.z, note=body.note
    )
    return AnnotationResponse.model_validate(annotation)
