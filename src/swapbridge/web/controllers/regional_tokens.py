"""Brazilian stablecoin endpoints."""

from typing import Optional, Union

from fastapi import APIRouter, Depends, HTTPException, Query

from swapbridge.tokens import registry
from swapbridge.web.contracts.assets import (
    RegionalTokenNetworksResponse,
    RegionalTokensResponse,
    TokenDefinition,
)
from swapbridge.web.deps import get_token_service
from swapbridge.web.services.token_service import TokenService

router = APIRouter(prefix="/brazilian-tokens", tags=["brazilian-tokens"])


@router.get("", response_model=RegionalTokensResponse)
async def list_brazilian_tokens(
    service: TokenService = Depends(get_token_service),
) -> RegionalTokensResponse:
    """List all supported Brazilian stablecoins on every chain."""
    return service.get_regional_tokens()


@router.get(
    "/{symbol}",
    response_model=Union[TokenDefinition, RegionalTokenNetworksResponse],
)
async def get_brazilian_token(
    symbol: str,
    chain_id: Optional[int] = Query(None, alias="chainId"),
    service: TokenService = Depends(get_token_service),
):
    """Get one Brazilian stablecoin, on one chain or on all of them."""
    if not registry.is_regional(symbol):
        raise HTTPException(
            status_code=404,
            detail={
                "error": f"Token {symbol} is not a supported Brazilian token",
                "supportedTokens": registry.regional_symbols(),
            },
        )

    if chain_id is not None:
        token = service.get_regional_token(symbol, chain_id)
        if token is None:
            raise HTTPException(
                status_code=404,
                detail={
                    "error": f"Token {symbol} not available on chain {chain_id}",
                    "availableChains": registry.chains_for(symbol),
                },
            )
        return token

    return service.get_regional_networks(symbol)
