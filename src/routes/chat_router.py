"""
Chat endpoints used by the browser UI: list a conversation, post a message, delete a message.
"""
from fastapi import APIRouter, Request, Query
from fastapi.responses import JSONResponse

from controllers import conversation
from routes.schemes import SendMessageRequest, MessageResponse, DeletedResponse, ErrorResponse

chat_router = APIRouter()


def get_db(request: Request):
    return request.app.db_client


def get_realtime(request: Request):
    return getattr(request.app, "realtime", None)


def get_room_id(request: Request) -> str:
    return request.app.agent_config.room_id


@chat_router.get("", summary="List messages in a conversation", response_model=list[MessageResponse])
async def list_messages(request: Request, conversation_id: str = Query(..., description="Conversation ID")):
    return await conversation.get_messages(get_db(request), get_room_id(request), conversation_id)


@chat_router.post("", summary="Post a human message; the agent replies asynchronously", response_model=MessageResponse)
async def send_message(request: Request, body: SendMessageRequest):
    return await conversation.post_user_message(
        get_db(request),
        get_realtime(request),
        get_room_id(request),
        sender_id=body.sender_id,
        content=body.content,
        conversation_id=body.conversation_id,
    )


@chat_router.delete("/{message_id}", summary="Delete message", response_model=DeletedResponse, responses={404: {"model": ErrorResponse}})
async def delete_message(request: Request, message_id: int):
    ok = await conversation.delete_message(get_db(request), get_room_id(request), message_id)
    if not ok:
        return JSONResponse(status_code=404, content=ErrorResponse(detail="Message not found").model_dump())
    return DeletedResponse()
