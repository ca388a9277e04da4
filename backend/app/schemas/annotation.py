"""Annotation schemas."""

from pydantic import BaseModel, Field


class AnnotationCreate(BaseModel):
    """Request schema for creating an annotation."""

    x: float
    y: float
    z: float
    note: str = Field(..., min_length=1)


class AnnotationResponse(BaseModel):
    """Response schema for a stored annotation."""

    id: int
    x: float
    y: float
    z: float
    note: str

    model_config = {"from_attributes": True}
