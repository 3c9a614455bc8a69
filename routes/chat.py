"""
Route handlers for chat lifecycle operations.
Handles DELETE /chat.
"""
from typing import Optional
from fastapi import APIRouter, Query, Request, status
from fastapi.responses import JSONResponse
from auth import SessionCapability
from utils.constants import ErrorMessages
from utils.logger import app_logger
from utils.store import get_store

router = APIRouter()


def send_error(status_code: int, message: str) -> JSONResponse:
    return JSONResponse(status_code=status_code, content={"error": message})


@router.delete("/chat")
async def delete_chat(http_request: Request, chat_id: Optional[str] = Query(None, alias="id")):
    """
    Delete a stored chat owned by the caller. Reservations made in the chat are kept.
    """
    if not chat_id:
        return send_error(status.HTTP_400_BAD_REQUEST, ErrorMessages.CHAT_ID_REQUIRED)

    session = SessionCapability.from_request(http_request).resolve()
    if session is None:
        return send_error(status.HTTP_401_UNAUTHORIZED, ErrorMessages.UNAUTHORIZED)

    try:
        store = get_store()
        chat = store.get_chat_by_id(chat_id)

        if chat is None:
            return send_error(status.HTTP_404_NOT_FOUND, ErrorMessages.CHAT_NOT_FOUND)

        if chat.user_id != session.user_id:
            app_logger.warning(f"User {session.user_id} tried to delete chat {chat_id} owned by another user")
            return send_error(status.HTTP_403_FORBIDDEN, ErrorMessages.FORBIDDEN)

        store.delete_chat_by_id(chat_id)
        app_logger.info(f"Deleted chat {chat_id}")

        return {"message": "Chat deleted successfully"}

    except Exception as e:
        app_logger.error(f"Error deleting chat {chat_id}: {e}")
        return send_error(status.HTTP_500_INTERNAL_SERVER_ERROR, ErrorMessages.DELETE_FAILED)
