"""
Pydantic request and response schemas for API endpoints (single module).
"""
from pydantic import BaseModel, Field


# ----- Error (for JSONResponse) -----


class ErrorResponse(BaseModel):
    """Schema for error responses returned as JSONResponse."""

    detail: str


# ----- Common -----


class DeletedResponse(BaseModel):
    """Response for successful delete operations."""

    deleted: bool = True


class HealthResponse(BaseModel):
    status: str = "ok"
    agent: str


# ----- Chat / Messages -----


class SendMessageRequest(BaseModel):
    """Request body for posting a human message to the room."""

    sender_id: str = Field(..., min_length=1)
    content: str = Field(..., min_length=1)
    conversation_id: str | None = None


class MessageResponse(BaseModel):
    """Response for a single stored message."""

    message_id: int
    room_id: str
    conversation_id: str
    sender_id: str
    content: str
    is_bot: bool
    created_at: str | None
