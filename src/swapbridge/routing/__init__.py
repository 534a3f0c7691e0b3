"""Routing engine integration.

Engines:
- Symbiosis: cross-chain swap routing over several aggregators
  (best_return, best_price, fastest, cheapest)
"""

from swapbridge.routing.base import (
    FeeInfo,
    RouteInfo,
    RoutingEngine,
    RoutingEngineError,
    SwapResult,
)
from swapbridge.routing.factory import create_fallback_engine, create_routing_engine
from swapbridge.routing.symbiosis import SymbiosisEngine

__all__ = [
    # Base classes
    "FeeInfo",
    "RouteInfo",
    "RoutingEngine",
    "RoutingEngineError",
    "SwapResult",
    # Engines
    "SymbiosisEngine",
    # Factory functions
    "create_routing_engine",
    "create_fallback_engine",
]
