"""Token resolution.

Turns whatever the caller sent (a symbol, an address, a custom token
definition or a native-asset flag) into one canonical ``Token``.

Precedence, first match wins:
1. explicit custom definition
2. native asset (flag, or identifier equal to the chain's native symbol)
3. exact address in the routing engine catalog
4. regional registry by symbol
5. routing engine catalog by symbol
"""

import logging
from typing import Optional

from swapbridge.errors import UnknownToken
from swapbridge.routing.base import RoutingEngine, RoutingEngineError
from swapbridge.swap.formatter import format_token_definition
from swapbridge.tokens import registry
from swapbridge.tokens.models import Token

logger = logging.getLogger(__name__)


def create_custom_token(
    address: str,
    symbol: str,
    decimals: int,
    chain_id: int,
    name: str = "",
) -> Token:
    """Build a token from a caller-supplied definition, bypassing all catalogs."""
    return Token(
        chain_id=chain_id,
        address=address,
        symbol=symbol,
        decimals=decimals,
        name=name or symbol,
        is_native=not address,
    )


class TokenResolver:
    """Resolves token identifiers against the registry and the engine catalog."""

    def __init__(self, engine: RoutingEngine):
        self.engine = engine

    async def resolve(
        self,
        chain_id: int,
        identifier: Optional[str],
        custom: Optional[Token] = None,
        use_native: bool = False,
        field_name: str = "customToken",
    ) -> Token:
        """
        Resolve a token.

        Args:
            chain_id: Chain the token lives on
            identifier: Symbol or address
            custom: Fully specified token; always wins when given
            use_native: Request the chain's native asset regardless of identifier
            field_name: Request field to mention in the correction hint

        Raises:
            UnknownToken: when no lookup step matched
        """
        if custom is not None:
            logger.debug(f"Using custom token {custom.symbol} on chain {custom.chain_id}")
            return custom

        native = self._resolve_native(chain_id, identifier, use_native)
        if native is not None:
            return native

        ident = (identifier or "").strip()
        if not ident:
            raise self._unknown(identifier, chain_id, field_name)

        by_address = await self._find_by_address(ident, chain_id)
        if by_address is not None:
            logger.debug(f"Resolved {ident} on chain {chain_id} by address")
            return by_address

        regional = registry.lookup_regional(ident, chain_id)
        if regional is not None:
            logger.debug(f"Resolved {ident} on chain {chain_id} from regional registry")
            return regional

        by_symbol = await self._find_by_symbol(ident, chain_id)
        if by_symbol is not None:
            logger.debug(f"Resolved {ident} on chain {chain_id} by catalog symbol")
            return by_symbol

        raise self._unknown(ident, chain_id, field_name)

    def _resolve_native(
        self, chain_id: int, identifier: Optional[str], use_native: bool
    ) -> Optional[Token]:
        if not use_native and not (identifier and registry.is_native_symbol(identifier.strip(), chain_id)):
            return None
        native = registry.lookup_native(chain_id)
        if native is None and use_native:
            logger.warning(f"Native asset requested on chain {chain_id} but none is registered")
        return native

    async def _find_by_address(self, address: str, chain_id: int) -> Optional[Token]:
        try:
            return await self.engine.find_token(address, chain_id)
        except RoutingEngineError as e:
            logger.error(f"Token catalog lookup failed for {address} on chain {chain_id}: {e}")
            return None

    async def _find_by_symbol(self, symbol: str, chain_id: int) -> Optional[Token]:
        lower = symbol.lower()
        try:
            tokens = await self.engine.list_tokens()
        except RoutingEngineError as e:
            logger.error(f"Token catalog lookup failed for {symbol} on chain {chain_id}: {e}")
            return None
        for token in tokens:
            if token.chain_id == chain_id and token.symbol and token.symbol.lower() == lower:
                return token
        return None

    @staticmethod
    def _unknown(identifier: Optional[str], chain_id: int, field_name: str) -> UnknownToken:
        example = format_token_definition(registry.token_example(chain_id))
        return UnknownToken(
            str(identifier or ""),
            chain_id,
            example=example,
            field_name=field_name,
            supported_tokens=registry.regional_summary(),
        )
