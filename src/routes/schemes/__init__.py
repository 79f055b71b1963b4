"""
Pydantic request and response schemas for API endpoints.
"""
from routes.schemes.schemes import (
    ErrorResponse,
    DeletedResponse,
    HealthResponse,
    SendMessageRequest,
    MessageResponse,
)

__all__ = [
    "ErrorResponse",
    "DeletedResponse",
    "HealthResponse",
    "SendMessageRequest",
    "MessageResponse",
]
