"""FastAPI application entry point."""

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse, PlainTextResponse

from src.api import auth, tasks
from src.config import get_settings
from src.services.exceptions import AppError

logger = logging.getLogger(__name__)

settings = get_settings()


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Handle application startup and shutdown events."""
    logger.info(f"Starting Task Manager API ({settings.environment})")
    yield


app = FastAPI(
    title="Task Manager API",
    description="Per-user task management with JWT access and refresh tokens",
    version="0.1.0",
    lifespan=lifespan,
)


@app.middleware("http")
async def unhandled_error_middleware(request: Request, call_next):
    """Hide unexpected failures behind a generic 500.

    Registered before CORS so the error response still carries CORS headers.
    """
    try:
        return await call_next(request)
    except Exception:
        logger.exception(f"Unhandled error on {request.method} {request.url.path}")
        return JSONResponse(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            content={"detail": "Internal server error."},
        )


# Credentials are required for the refresh token cookie
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


def _format_validation_error(error: dict) -> str:
    """Render one pydantic error as a readable message."""
    cause = error.get("ctx", {}).get("error")
    if cause is not None:
        return str(cause)
    location = ".".join(str(part) for part in error["loc"] if part not in ("body", "query"))
    if location:
        return f"{location}: {error['msg']}"
    return error["msg"]


@app.exception_handler(AppError)
async def app_error_handler(request: Request, exc: AppError):
    """Render expected domain errors with their status code."""
    return JSONResponse(
        status_code=exc.status_code,
        content={"detail": exc.message},
        headers=exc.headers,
    )


@app.exception_handler(RequestValidationError)
async def validation_error_handler(request: Request, exc: RequestValidationError):
    """Report malformed input as 400 rather than 422."""
    messages = [_format_validation_error(error) for error in exc.errors()]
    return JSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST,
        content={"detail": "; ".join(messages) or "Invalid request."},
    )


# Register routers
app.include_router(auth.router)
app.include_router(tasks.router)


@app.get("/", response_class=PlainTextResponse)
async def root():
    """Service banner."""
    return "Task Management Backend API is running."


@app.get("/health")
async def health_check():
    """Health check endpoint."""
    return {"status": "healthy", "environment": settings.environment}


def run() -> None:
    """Run the API with uvicorn using the configured host and port."""
    import uvicorn

    logging.basicConfig(
        level=settings.log_level.upper(),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    uvicorn.run(app, host=settings.host, port=settings.port)


if __name__ == "__main__":
    run()
