"""Request and response contracts for the web layer.

These Pydantic models define the API interface for web clients.
"""

from swapbridge.web.contracts.swaps import (
    CustomTokenDefinition,
    RouteRequest,
    SwapRequest,
)
from swapbridge.web.contracts.assets import (
    NetworkTokens,
    RegionalTokenNetworksResponse,
    RegionalTokensResponse,
    SupportedChainsResponse,
    TokenDefinition,
    TokenInfo,
)

__all__ = [
    # Swap contracts
    "CustomTokenDefinition",
    "RouteRequest",
    "SwapRequest",
    # Token and chain contracts
    "NetworkTokens",
    "RegionalTokenNetworksResponse",
    "RegionalTokensResponse",
    "SupportedChainsResponse",
    "TokenDefinition",
    "TokenInfo",
]
