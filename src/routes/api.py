"""
API router: room messages.
Mounts under /api/v1 in main.py.
"""
from fastapi import APIRouter
from routes.chat_router import chat_router

api_router = APIRouter(tags=["Room Agent"])

api_router.include_router(chat_router, prefix="/messages", tags=["Chat"])
