"""FastAPI application factory."""

import logging
from contextlib import asynccontextmanager
from typing import Callable, Optional

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from swapbridge.config import get_settings
from swapbridge.errors import SwapBridgeError
from swapbridge.routing.base import RoutingEngine
from swapbridge.routing.factory import create_fallback_engine, create_routing_engine
from swapbridge.swap.engine import AttemptSink
from swapbridge.web.services.swap_service import SwapService
from swapbridge.web.services.token_service import TokenService

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan handler."""
    # Startup
    engine = app.state.routing_engine
    logger.info(f"Routing engine ready: {type(engine).__name__} (client_id={engine.client_id or '(unrestricted)'})")
    yield
    # Shutdown
    await engine.aclose()


async def swap_error_handler(request: Request, exc: SwapBridgeError) -> JSONResponse:
    """Render domain errors as ``{kind, error, suggestion, details}``."""
    if exc.status_code >= 500:
        logger.error(f"{exc.kind} on {request.url.path}: {exc.message}")
    else:
        logger.info(f"{exc.kind} on {request.url.path}: {exc.message}")
    return JSONResponse(status_code=exc.status_code, content=exc.to_dict())


def create_app(
    routing_engine: Optional[RoutingEngine] = None,
    fallback_factory: Optional[Callable[[], RoutingEngine]] = None,
    sink: Optional[AttemptSink] = None,
) -> FastAPI:
    """Create and configure the FastAPI application.

    Args:
        routing_engine: Primary engine handle (built from settings if omitted)
        fallback_factory: Builds unrestricted handles for forced retries
        sink: Receives one event per aggregator attempt (logs if omitted)
    """
    settings = get_settings()

    app = FastAPI(
        title="SwapBridge API",
        description="Cross-chain swap quoting and preparation API",
        version="0.1.0",
        lifespan=lifespan,
        debug=settings.debug,
    )

    engine = routing_engine or create_routing_engine()
    app.state.routing_engine = engine
    app.state.swap_service = SwapService(
        engine,
        fallback_factory=fallback_factory or create_fallback_engine,
        settings=settings,
        sink=sink,
    )
    app.state.token_service = TokenService(engine)

    # CORS middleware
    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"] if settings.debug else settings.allowed_origins,
        allow_credentials=True,
        allow_methods=["GET", "POST", "PUT", "DELETE", "OPTIONS"],
        allow_headers=["Content-Type", "Authorization"],
    )

    app.add_exception_handler(SwapBridgeError, swap_error_handler)

    # Register routes
    from swapbridge.api.routes import health
    from swapbridge.web.controllers import regional_tokens_router, swaps_router, tokens_router

    app.include_router(health.router, tags=["Health"])
    app.include_router(swaps_router, prefix="/api")
    app.include_router(tokens_router, prefix="/api")
    app.include_router(regional_tokens_router, prefix="/api")

    return app
