"""Factory for routing engine handles.

The primary handle carries the configured client identity. Forced-fallback
handles are built with an empty identity so that no client-scoped
aggregator restriction applies.
"""

import logging
from typing import Optional

import httpx

from swapbridge.config import get_settings
from swapbridge.routing.base import RoutingEngine
from swapbridge.routing.symbiosis import SymbiosisEngine

logger = logging.getLogger(__name__)

UNRESTRICTED_CLIENT_ID = ""


def create_routing_engine(
    client_id: Optional[str] = None,
    http_client: Optional[httpx.AsyncClient] = None,
) -> RoutingEngine:
    """Create a routing engine handle.

    Args:
        client_id: Client identity (uses SYMBIOSIS_CLIENT_ID if not provided,
            "" for unrestricted access)
        http_client: Optional shared HTTP client
    """
    settings = get_settings()
    if client_id is None:
        client_id = settings.symbiosis_client_id

    logger.debug(f"Creating routing engine handle (client_id={client_id or '(unrestricted)'})")
    return SymbiosisEngine(
        api_url=settings.symbiosis_api_url,
        client_id=client_id,
        timeout=settings.symbiosis_timeout,
        http_client=http_client,
    )


def create_fallback_engine() -> RoutingEngine:
    """Create a fresh, identity-neutral handle for forced-aggregator retries."""
    return create_routing_engine(client_id=UNRESTRICTED_CLIENT_ID)
