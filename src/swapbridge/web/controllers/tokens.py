"""Token catalog and chain endpoints."""

from fastapi import APIRouter, Depends

from swapbridge.web.contracts.assets import NetworkTokens, SupportedChainsResponse, TokenInfo
from swapbridge.web.deps import get_token_service
from swapbridge.web.services.token_service import TokenService

router = APIRouter(tags=["tokens"])


@router.get("/tokens/{chain_id}", response_model=list[TokenInfo])
async def get_tokens(
    chain_id: int,
    service: TokenService = Depends(get_token_service),
) -> list[TokenInfo]:
    """List all known tokens on a chain."""
    return await service.get_tokens(chain_id)


@router.get("/supported-chains", response_model=SupportedChainsResponse)
async def get_supported_chains(
    service: TokenService = Depends(get_token_service),
) -> SupportedChainsResponse:
    """List every chain the routing engine can swap between."""
    return service.get_supported_chains()


@router.get("/supported-networks", response_model=dict[str, NetworkTokens])
async def get_supported_networks(
    service: TokenService = Depends(get_token_service),
) -> dict[str, NetworkTokens]:
    """Tokens available on Polygon and TON."""
    return await service.get_supported_networks()
