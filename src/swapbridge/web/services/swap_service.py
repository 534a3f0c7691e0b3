"""Swap service: quote, swap and route preparation.

Requests are validated and tokens resolved before the routing engine is
called. Quotes and routes make a single attempt with the requested
aggregator; swaps go through the full two-tier fallback policy. No
transaction is signed or broadcast here: the prepared transaction is
returned for the user's wallet to execute.
"""

import asyncio
import logging
from dataclasses import dataclass
from typing import Any, Awaitable, Callable, Optional

from swapbridge.config import Settings, get_settings
from swapbridge.errors import InvalidParameters
from swapbridge.routing.base import RoutingEngine
from swapbridge.swap.engine import AttemptSink, ExecutionEngine
from swapbridge.swap.formatter import estimated_gas, format_fees, format_routes, format_swap_result, format_token
from swapbridge.swap.params import (
    SwapParams,
    build_swap_params,
    create_token_amount,
    validate_select_mode,
    validate_slippage,
)
from swapbridge.tokens.models import Token, format_significant, parse_human_amount
from swapbridge.tokens.resolver import TokenResolver
from swapbridge.web.contracts.swaps import RouteRequest, SwapRequest

logger = logging.getLogger(__name__)

WALLET_INSTRUCTIONS = {
    "message": "Transaction prepared successfully! Execute it with your connected wallet.",
    "steps": [
        "1. Connect your wallet to the frontend",
        "2. Approve the token if needed (when approveTo is present)",
        "3. Send the swap transaction using the returned data",
        "4. Wait for blockchain confirmation",
    ],
}


@dataclass(frozen=True)
class PreparedSwap:
    """A validated request: resolved tokens plus engine parameters."""

    token_in: Token
    token_out: Token
    params: SwapParams


class SwapService:
    """Prepares cross-chain swaps against the routing engine."""

    def __init__(
        self,
        engine: RoutingEngine,
        fallback_factory: Optional[Callable[[], RoutingEngine]] = None,
        settings: Optional[Settings] = None,
        sink: Optional[AttemptSink] = None,
        sleep: Callable[[float], Awaitable[None]] = asyncio.sleep,
    ):
        self.engine = engine
        self.fallback_factory = fallback_factory
        self.settings = settings or get_settings()
        self.sink = sink
        self._sleep = sleep
        self.resolver = TokenResolver(engine)

    def _execution_engine(self) -> ExecutionEngine:
        return ExecutionEngine(
            primary=self.engine,
            fallback_factory=self.fallback_factory,
            rounds=self.settings.retry_rounds,
            round_delay=self.settings.retry_delay_seconds,
            slippage_step_bps=self.settings.slippage_step_bps,
            max_slippage_bps=self.settings.max_slippage_bps,
            sink=self.sink,
            sleep=self._sleep,
        )

    async def quote(self, request: SwapRequest) -> dict[str, Any]:
        """Quote a swap with the requested aggregator."""
        prepared = await self._prepare(request)
        outcome = await self._execution_engine().execute_once(prepared.params)
        return format_swap_result(outcome.result, outcome.mode)

    async def swap(self, request: SwapRequest) -> dict[str, Any]:
        """Prepare a swap transaction for wallet execution.

        Falls back across aggregators, slippage steps and an unrestricted
        engine handle before giving up.

        Raises:
            RoutingFailure: every aggregator failed in both tiers
            DeadlineExpired: the swap deadline passed while retrying
        """
        prepared = await self._prepare(request)
        outcome = await self._execution_engine().execute(prepared.params)

        if outcome.mode != prepared.params.select_mode:
            logger.info(
                f"Swap prepared with {outcome.mode.value} instead of {prepared.params.select_mode.value} "
                f"after {outcome.attempts_made} attempt(s)"
            )

        data = format_swap_result(outcome.result, outcome.mode)
        data.update({
            "executionMethod": "wallet",
            "reason": "Transaction prepared for execution with the user's wallet",
            "instructions": WALLET_INSTRUCTIONS,
            "apiSuccess": True,
        })
        return data

    async def route(self, request: RouteRequest) -> dict[str, Any]:
        """Describe the route the engine would take for a swap."""
        prepared = await self._prepare(request, require_explicit_addresses=True)
        outcome = await self._execution_engine().execute_once(prepared.params)
        result = outcome.result

        return {
            "route": {
                "from": {"chainId": request.from_chain_id, "token": format_token(prepared.token_in)},
                "to": {"chainId": request.to_chain_id, "token": format_token(prepared.token_out)},
                "selectMode": outcome.mode.value,
                "transactionType": result.transaction_type,
                "routes": format_routes(result),
                "fees": format_fees(result),
                "priceImpact": format_significant(result.price_impact),
                "estimatedGas": estimated_gas(result),
            }
        }

    async def _prepare(
        self, request: SwapRequest, require_explicit_addresses: bool = False
    ) -> PreparedSwap:
        """Validate the request and resolve both tokens.

        Slippage, addresses and the amount are checked before token
        resolution, which may fetch the engine catalog.
        """
        slippage = self.settings.default_slippage_bps if request.slippage is None else request.slippage
        validate_slippage(slippage, self.settings.max_slippage_bps)
        select_mode = validate_select_mode(request.select_mode or self.settings.default_select_mode)

        if require_explicit_addresses and (not request.from_address or not request.to_address):
            raise InvalidParameters(
                "Both 'from' and 'to' addresses are required",
                suggestion="Provide the sender in 'from' and the recipient in 'to'.",
                details={"from": request.from_address, "to": request.to_address},
            )

        from_address = request.resolved_from or ""
        to_address = request.resolved_to or ""
        if not from_address or not to_address:
            raise InvalidParameters(
                "Both from and to addresses (or userAddress) are required",
                suggestion="Provide 'from' and 'to', or a single 'userAddress' used for both.",
                details={"from": from_address or None, "to": to_address or None},
            )

        if request.amount is None or str(request.amount).strip() == "":
            raise InvalidParameters(
                "Missing required field: amount",
                suggestion="Send the input amount in human units, e.g. \"10.5\".",
            )
        human_amount = parse_human_amount(request.amount)

        token_in = await self.resolver.resolve(
            request.from_chain_id,
            request.token_in,
            custom=request.custom_token_in.to_token() if request.custom_token_in else None,
            use_native=request.use_native_token_in,
            field_name="customTokenIn",
        )
        token_out = await self.resolver.resolve(
            request.to_chain_id,
            request.token_out,
            custom=request.custom_token_out.to_token() if request.custom_token_out else None,
            use_native=request.use_native_token_out,
            field_name="customTokenOut",
        )

        amount_in = create_token_amount(token_in, human_amount)

        logger.debug(
            f"Prepared {amount_in} (chain {token_in.chain_id}) -> {token_out.symbol} "
            f"(chain {token_out.chain_id}), mode={select_mode.value}"
        )

        params = build_swap_params(
            token_amount_in=amount_in,
            token_out=token_out,
            from_address=from_address,
            to_address=to_address,
            slippage_bps=slippage,
            select_mode=select_mode,
            max_slippage_bps=self.settings.max_slippage_bps,
            deadline_minutes=self.settings.deadline_minutes,
        )
        return PreparedSwap(token_in=token_in, token_out=token_out, params=params)
