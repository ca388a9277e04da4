"""Model upload schemas."""

from pydantic import BaseModel


class UploadResponse(BaseModel):
    """Public URL of a converted model."""

    url: str
