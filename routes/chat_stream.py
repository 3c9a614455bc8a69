"""
Route handlers for streaming chat operations.
Handles POST /chat: runs the booking conversation and streams SSE events.
"""
from typing import AsyncIterator
from fastapi import APIRouter, Request, status
from fastapi.responses import JSONResponse, StreamingResponse
import ollama
from auth import SessionCapability
from models.api_models import ChatRequest
from services.chat_service import ChatService
from services.stream_service import StreamService
from utils.http_client import HTTPClientManager
from utils.logger import app_logger

router = APIRouter()


def model_error_response(e: Exception) -> JSONResponse:
    """Map a failure raised before streaming began to a JSON error response."""
    message = e.error if isinstance(e, ollama.ResponseError) else str(e)
    status_code = getattr(e, "status_code", None)
    lowered = message.lower()

    if status_code in (401, 403) or any(term in lowered for term in ("permission denied", "api key", "quota", "unauthorized")):
        error_message = f"AI service error: {message}"
        status_code = status.HTTP_403_FORBIDDEN
    elif status_code == 404 or ("model" in lowered and "not found" in lowered):
        error_message = f"AI model error: {message}"
        status_code = status.HTTP_400_BAD_REQUEST
    else:
        error_message = f"Internal server error: {message}"
        status_code = status.HTTP_500_INTERNAL_SERVER_ERROR

    return JSONResponse(status_code=status_code, content={"error": error_message})


@router.post("/chat")
async def chat_stream(request: ChatRequest, http_request: Request):
    """
    Streaming chat endpoint: model output, tool calls and tool results as SSE.
    """
    client = HTTPClientManager.get_model_client()
    context = ChatService.build_context(request, client, SessionCapability.from_request(http_request))
    events = ChatService.orchestrate_chat_flow(context)

    try:
        first_event = await anext(events)
    except Exception as e:
        app_logger.error(f"Error starting chat {request.id} with model {context.model_name}: {e}")
        return model_error_response(e)

    async def event_generator() -> AsyncIterator[str]:
        yield first_event
        try:
            async for event in events:
                yield event
        except ollama.ResponseError as e:
            app_logger.error(f"Ollama error: {e.error}")
            yield StreamService.send_sse_event("error", {"type": "model_error", "message": e.error})
        except Exception as e:
            app_logger.error(f"Streaming chat error: {e}")
            yield StreamService.send_sse_event("error", {"message": str(e)})

    return StreamingResponse(
        event_generator(),
        media_type="text/event-stream",
        headers={
            "Cache-Control": "no-cache",
            "Connection": "keep-alive",
            "X-Accel-Buffering": "no"
        }
    )
