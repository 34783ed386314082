# Pydantic schemas package
from notebook.schemas.base import (
    ErrorDetail,
    ErrorResponse,
    MessageResponse,
    ResponseMetadata,
)

__all__ = [
    "ErrorDetail",
    "ErrorResponse",
    "MessageResponse",
    "ResponseMetadata",
]
