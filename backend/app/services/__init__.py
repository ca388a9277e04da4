"""Services layer for model-viewer.

Business logic behind the HTTP API:
- AuthService: credential check and bearer tokens
- FormatConverter: extension dispatch to mesh converters
- ModelService: upload, convert, store pipeline
- ComponentService / AnnotationService: metadata, search and annotations
"""

from app.services.annotation_service import AnnotationService
from app.services.auth_service import AuthService
from app.services.component_service import ComponentService
from app.services.converter import FormatConverter
from app.services.model_service import ModelService

__all__ = [
    "AnnotationService",
    "AuthService",
    "ComponentService",
    "FormatConverter",
    "ModelService",
]
