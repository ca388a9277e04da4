"""Model upload API endpoints.

Endpoints:
- POST /api/upload - Upload an OBJ/STL file (multipart field ``model``)
  and receive the URL of the converted glTF
"""

from fastapi import APIRouter, File, UploadFile

from app.api.dependencies import CurrentUser, Models
from app.core.errors import InvalidRequestError
from app.schemas.model import UploadResponse

router = APIRouter(tags=["models"])


@router.post("/upload")
async def upload_model(
    _user: CurrentUser,
    models: Models,
    model: UploadFile | None = File(default=None),
) -> UploadResponse:
    """Convert an uploaded model to glTF.

    Returns 400 for unsupported formats, 501 for DWG and 500 when the
    converter fails.
    """
    if model is None or not model.filename:
        raise InvalidRequestError("No file uploaded")

    try:
        url = await models.ingest(model.filename, model.file)
    finally:
        await model.close()
    return UploadResponse(url=url)
