"""
Flight Booking Chat - FastAPI application for an AI-assisted flight booking assistant.
Streams model responses while the model searches flights, selects seats, reserves and issues boarding passes.
"""
from contextlib import asynccontextmanager
from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from auth import SessionMiddleware
from config import Config
from routes import chat, chat_stream
from utils.http_client import HTTPClientManager
from utils.logger import app_logger
from utils.store import get_store


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Open the booking store on startup; release pooled HTTP connections on shutdown."""
    get_store()
    app_logger.info(f"Serving chat model {Config.CHAT_MODEL} from {Config.OLLAMA_HOST}")
    yield
    await HTTPClientManager.close_all()

app = FastAPI(title=Config.APP_TITLE, lifespan=lifespan)

app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


def describe_validation_error(error: dict) -> str:
    """One readable sentence for a pydantic validation error."""
    location = [str(part) for part in error.get("loc", []) if part != "body"]
    field = ".".join(location) or "body"

    if error.get("type") == "string_too_long":
        return f"Field '{field}' exceeds maximum length of {error['ctx']['max_length']} characters"
    if error.get("type") == "missing":
        return f"Field '{field}' is required"
    return f"{field}: {error.get('msg', 'Validation error')}"


@app.exception_handler(RequestValidationError)
async def validation_exception_handler(request: Request, exc: RequestValidationError):
    """Report only the first validation error, phrased for the chat client."""
    errors = exc.errors()
    app_logger.warning(f"Rejected {request.method} {request.url.path}: {errors}")

    first_error = errors[0] if errors else {}
    return JSONResponse(
        status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
        content={
            "detail": [{
                "msg": describe_validation_error(first_error),
                "type": first_error.get("type", "value_error"),
                "loc": list(first_error.get("loc", [])),
            }]
        },
    )


app.add_middleware(SessionMiddleware)


@app.get("/")
async def root():
    """Root endpoint - health check."""
    return {"message": "Flight Booking Chat server is running"}

app.include_router(chat_stream.router, tags=["chat"])
app.include_router(chat.router, tags=["chat"])


if __name__ == "__main__":
    import uvicorn
    uvicorn.run(app, host="0.0.0.0", port=8000)
