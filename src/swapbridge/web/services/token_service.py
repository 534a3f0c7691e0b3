"""Token and chain listing service."""

import logging
from typing import Optional

from swapbridge.chains import POLYGON, SUPPORTED_CHAINS, TON
from swapbridge.routing.base import RoutingEngine, RoutingEngineError
from swapbridge.swap.formatter import decode_engine_error
from swapbridge.tokens import registry
from swapbridge.tokens.models import Token
from swapbridge.web.contracts.assets import (
    NetworkTokens,
    RegionalTokenNetworksResponse,
    RegionalTokensResponse,
    SupportedChainsResponse,
    TokenDefinition,
    TokenInfo,
)

logger = logging.getLogger(__name__)


class TokenService:
    """Read-only views over the engine catalog and the static registry."""

    def __init__(self, engine: RoutingEngine):
        self.engine = engine

    async def get_tokens(self, chain_id: int) -> list[TokenInfo]:
        """List catalog tokens on one chain."""
        return [TokenInfo.from_token(t) for t in await self._tokens_for_chain(chain_id)]

    def get_supported_chains(self) -> SupportedChainsResponse:
        return SupportedChainsResponse(supported_chains=dict(SUPPORTED_CHAINS))

    async def get_supported_networks(self) -> dict[str, NetworkTokens]:
        """Catalog tokens for the featured networks (Polygon and TON)."""
        networks = {"polygon": POLYGON, "ton": TON}
        result = {}
        for name, chain_id in networks.items():
            tokens = await self._tokens_for_chain(chain_id)
            result[name] = NetworkTokens(
                chain_id=chain_id,
                tokens=[TokenInfo.from_token(t) for t in tokens],
            )
        return result

    def get_regional_tokens(self) -> RegionalTokensResponse:
        return RegionalTokensResponse(
            tokens={
                symbol: {chain_id: TokenDefinition.from_token(t) for chain_id, t in by_chain.items()}
                for symbol, by_chain in registry.all_regional().items()
            }
        )

    def get_regional_token(self, symbol: str, chain_id: int) -> Optional[TokenDefinition]:
        token = registry.lookup_regional(symbol, chain_id)
        return TokenDefinition.from_token(token) if token else None

    def get_regional_networks(self, symbol: str) -> Optional[RegionalTokenNetworksResponse]:
        """A regional token on every chain it is deployed on, or None if unknown."""
        if not registry.is_regional(symbol):
            return None
        chains = registry.chains_for(symbol)
        networks = {}
        for chain_id in chains:
            token = registry.lookup_regional(symbol, chain_id)
            if token is not None:
                networks[chain_id] = TokenDefinition.from_token(token)
        return RegionalTokenNetworksResponse(
            symbol=symbol.upper(),
            available_chains=chains,
            networks=networks,
        )

    async def _tokens_for_chain(self, chain_id: int) -> list[Token]:
        try:
            return await self.engine.tokens_for_chain(chain_id)
        except RoutingEngineError as e:
            logger.error(f"Failed to load token catalog for chain {chain_id}: {e}")
            raise decode_engine_error(e) from e
