"""FastAPI application factory for the travel inquiry API.

This module provides a local HTTP surface around the submission handler.
In production the same handler runs behind API Gateway through
``travel_inquiry.api.lambda_function``.
"""

import logging
from contextlib import asynccontextmanager
from typing import AsyncGenerator, Optional

from fastapi import FastAPI, HTTPException, Request, status
from fastapi.responses import JSONResponse

from travel_inquiry.api.contact import router as contact_router
from travel_inquiry.api.dependencies import build_handler
from travel_inquiry.api.handler import SubmissionHandler
from travel_inquiry.api.models import FAILURE_MESSAGE
from travel_inquiry.version import __version__

# Configure logging
logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
)
logger = logging.getLogger(__name__)


def create_app(handler: Optional[SubmissionHandler] = None) -> FastAPI:
    """Create and configure the FastAPI application.

    Args:
        handler: Submission handler to serve (built from settings when None)

    Returns:
        Configured FastAPI application instance
    """

    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
        logger.info("Starting travel inquiry API server")
        logger.info("Version: %s", __version__)
        yield
        logger.info("Shutting down travel inquiry API server")

    app = FastAPI(
        title="Travel Inquiry API",
        description="""
        Contact form submissions for travel inquiries.

        - **Submit**: validate, store and acknowledge an inquiry by email
        - **Lookup**: retrieve a stored inquiry by reference number or email
        """,
        version=__version__,
        lifespan=lifespan,
        docs_url="/docs",
        redoc_url="/redoc",
        openapi_url="/openapi.json",
    )
    app.state.handler = handler if handler is not None else build_handler()

    app.include_router(contact_router)

    @app.exception_handler(HTTPException)
    async def http_exception_handler(request: Request, exc: HTTPException) -> JSONResponse:
        return JSONResponse(
            status_code=exc.status_code,
            content={"success": False, "message": str(exc.detail)},
        )

    @app.exception_handler(Exception)
    async def generic_exception_handler(request: Request, exc: Exception) -> JSONResponse:
        logger.error("Unexpected error in travel inquiry API", exc_info=True)
        return JSONResponse(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            content={"success": False, "message": FAILURE_MESSAGE},
        )

    @app.get("/", summary="API Root", tags=["root"])
    async def root() -> JSONResponse:
        """Root endpoint providing API information."""
        return JSONResponse(
            content={
                "name": "Travel Inquiry API",
                "version": __version__,
                "docs": "/docs",
                "openapi": "/openapi.json",
            }
        )

    @app.get("/health", summary="Health Check", tags=["health"])
    async def health_check() -> JSONResponse:
        """Health check endpoint."""
        return JSONResponse(content={"status": "healthy", "version": __version__})

    return app


def main(host: str = "127.0.0.1", port: int = 8000, reload: bool = False) -> None:
    """Run the API server with uvicorn."""
    import uvicorn

    uvicorn.run(
        "travel_inquiry.api.app:create_app",
        factory=True,
        host=host,
        port=port,
        reload=reload,
        log_level="info",
    )


if __name__ == "__main__":
    main()
