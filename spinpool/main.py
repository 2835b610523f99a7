"""
Spinpool Main Application Entry Point
FastAPI service exposing the slot spin engine.
"""

from typing import Optional

import uvicorn
from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from spinpool.config import AppConfig, settings
from spinpool.core.engine import build_engine
from spinpool.core.exceptions import InternalFailure, SlotError
from spinpool.core.logger import init_logging, get_logger
from spinpool.routers import api

logger = get_logger("main")


# ==================== Exception Handlers ====================


async def slot_error_handler(request: Request, exc: SlotError):
    """Domain errors carry their own status code and public message."""
    if isinstance(exc, InternalFailure):
        logger.error(f"Internal failure on {request.url.path}: {exc}")
    return JSONResponse(status_code=exc.status_code, content={"error": exc.public_message})


async def validation_error_handler(request: Request, exc: RequestValidationError):
    """Malformed request bodies get the same 400 shape as out-of-range bets."""
    fields = {str(error["loc"][-1]) for error in exc.errors() if error.get("loc")}
    message = "Invalid bet amount" if "betAmount" in fields else "Invalid request"
    logger.info(f"Rejected request to {request.url.path}: {message}")
    return JSONResponse(status_code=400, content={"error": message})


async def global_exception_handler(request: Request, exc: Exception):
    """Handle unhandled exceptions gracefully."""
    logger.error(f"Unhandled exception: {exc}", exc_info=True)
    return JSONResponse(status_code=500, content={"error": "Internal server error"})


# ==================== Application Setup ====================


def configure_logging(config: AppConfig):
    init_logging(
        level=config.logging.level,
        log_to_file=config.logging.log_to_file,
        formatter=config.logging.formatter,
        log_file_path=config.paths.get_log_path(),
    )


def create_app(config: Optional[AppConfig] = None, engine=None) -> FastAPI:
    """Create and configure the FastAPI application."""
    config = config or settings

    # Also runs inside uvicorn's reload worker, which never calls run()
    configure_logging(config)

    app = FastAPI(
        title=config.server.name,
        docs_url="/docs" if config.server.debug else None,
        redoc_url=None,
    )

    # Each app owns its ledger; nothing is shared between instances
    app.state.config = config
    app.state.engine = engine or build_engine(config)

    app.add_exception_handler(SlotError, slot_error_handler)
    app.add_exception_handler(RequestValidationError, validation_error_handler)
    app.add_exception_handler(Exception, global_exception_handler)

    # CORS middleware (for development)
    if config.server.debug:
        app.add_middleware(
            CORSMiddleware,
            allow_origins=["*"],
            allow_credentials=True,
            allow_methods=["*"],
            allow_headers=["*"],
        )

    app.include_router(api.router, prefix="/api")

    @app.get("/health")
    async def health():
        return {"status": "ok"}

    return app


def run():
    configure_logging(settings)
    logger.info(f"Starting {settings.server.name} on {settings.server.host}:{settings.server.port}")
    logger.info(f"Debug mode: {settings.server.debug}")
    uvicorn.run(
        "spinpool.main:create_app",
        factory=True,
        host=settings.server.host,
        port=settings.server.port,
        reload=settings.server.debug,
    )


if __name__ == "__main__":
    run()
