"""
Responses Adapter Application Entry Point

FastAPI application exposing a Chat Completions endpoint on top of a Responses backend.
"""

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse

from responses_adapter.api import proxy_router
from responses_adapter.api.deps import get_responses_client
from responses_adapter.common.errors import AppError
from responses_adapter.config import get_settings
from responses_adapter.logging_config import setup_logging

logger = logging.getLogger(__name__)

# Initialize logging configuration
setup_logging()


@asynccontextmanager
async def lifespan(app: FastAPI):
    """
    Application Lifecycle Management

    Releases the shared backend connection pool on shutdown.
    """
    yield
    await get_responses_client().close()


settings = get_settings()

app = FastAPI(
    title=settings.APP_NAME,
    description="Chat Completions compatibility layer for Responses API providers",
    version="0.1.0",
    lifespan=lifespan,
)


@app.exception_handler(AppError)
async def app_error_handler(request: Request, exc: AppError):
    """Convert application errors to JSON responses"""
    return JSONResponse(content=exc.to_dict(), status_code=exc.status_code)


@app.get("/health")
async def health_check():
    """Health check endpoint"""
    return {"status": "ok"}


app.include_router(proxy_router)


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(
        "responses_adapter.main:app",
        host="0.0.0.0",
        port=8000,
        reload=settings.DEBUG,
    )
