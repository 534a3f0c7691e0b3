"""Swap API endpoints.

Quotes and routes are read-only. Swaps return an unsigned transaction
for the user's wallet to execute. Domain errors propagate to the app's
exception handler.
"""

from fastapi import APIRouter, Depends

from swapbridge.web.contracts.swaps import RouteRequest, SwapRequest
from swapbridge.web.deps import get_swap_service
from swapbridge.web.services.swap_service import SwapService

router = APIRouter(tags=["swaps"])


@router.post("/quote")
async def get_quote(
    request: SwapRequest,
    service: SwapService = Depends(get_swap_service),
) -> dict:
    """Quote a cross-chain swap with the requested aggregator."""
    return await service.quote(request)


@router.post("/swap")
async def prepare_swap(
    request: SwapRequest,
    service: SwapService = Depends(get_swap_service),
) -> dict:
    """Prepare a cross-chain swap for wallet execution.

    Retries across aggregators and slippage levels before failing.
    """
    return await service.swap(request)


@router.post("/route")
async def get_route(
    request: RouteRequest,
    service: SwapService = Depends(get_swap_service),
) -> dict:
    """Describe the route for a swap (amount defaults to 1 token)."""
    return await service.route(request)
