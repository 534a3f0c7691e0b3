"""Response shaping and routing-engine error decoding."""

import logging
from typing import Any, Optional

from swapbridge.chains import infer_chain_from_url
from swapbridge.errors import (
    GENERIC_SUGGESTION,
    InsufficientFunds,
    RoutingFailure,
    SwapBridgeError,
    UnknownError,
)
from swapbridge.routing.base import RoutingEngineError, SwapResult
from swapbridge.swap.params import VALID_SELECT_MODES, AggregatorMode
from swapbridge.tokens.models import Token, format_significant

logger = logging.getLogger(__name__)

# (substrings that must all appear, suggestion); first match wins
SUGGESTION_PATTERNS: list[tuple[tuple[str, ...], str]] = [
    (
        ("amount", "less than fee"),
        "Try increasing the swap amount. The amount after conversion is less than the required fee.",
    ),
    (
        ("slippage",),
        "Try a higher slippage tolerance (up to 300 basis points).",
    ),
    (
        ("liquidity",),
        "Try a smaller amount; there is not enough liquidity for this route right now.",
    ),
    (
        ("insufficient",),
        "Make sure the wallet holds enough of the input token and of the native token for gas.",
    ),
    (
        ("timeout",),
        "The routing service is slow to respond. Wait a moment and try again.",
    ),
]

ROUTING_FAILURE_CODES = {"UNPREDICTABLE_GAS_LIMIT"}
ROUTING_FAILURE_MARKERS = ("OpenOcean external call failed",)


def suggest_remedy(message: Optional[str]) -> str:
    """Pick a remediation hint by matching the error message.

    Best-effort: unmatched messages get the generic suggestion.
    """
    lowered = (message or "").lower()
    for needles, suggestion in SUGGESTION_PATTERNS:
        if all(needle in lowered for needle in needles):
            return suggestion
    return GENERIC_SUGGESTION


def decode_engine_error(error: BaseException) -> SwapBridgeError:
    """Classify a routing-engine failure into the error taxonomy.

    Already-classified errors pass through unchanged. Anything that matches
    no known shape becomes ``UnknownError``.
    """
    if isinstance(error, SwapBridgeError):
        return error

    if not isinstance(error, RoutingEngineError):
        logger.error(f"Unexpected error from routing engine: {type(error).__name__}: {error}")
        message = str(error) or type(error).__name__
        return UnknownError(message, suggestion=suggest_remedy(message))

    message = error.message
    specific_errors = [
        {"code": e.get("code") or "unknown", "message": e.get("message") or "Unknown error"}
        for e in error.errors
        if isinstance(e, dict)
    ]
    if specific_errors:
        message = specific_errors[0]["message"]

    if error.code == "INSUFFICIENT_FUNDS":
        return _insufficient_funds(error)

    reason = error.reason or ""
    if error.code in ROUTING_FAILURE_CODES or any(
        marker in reason or marker in error.message for marker in ROUTING_FAILURE_MARKERS
    ):
        return RoutingFailure(
            "Cross-chain swap could not be executed right now",
            details={
                "reason": reason or error.message,
                "errorCode": error.code,
                "possibleCauses": [
                    "Swap route temporarily unavailable on the aggregator",
                    "Insufficient liquidity for this pair",
                    "Temporary problems with the bridge protocols",
                ],
            },
        )

    details: dict[str, Any] = {"availableSelectModes": VALID_SELECT_MODES}
    if specific_errors:
        details["specificErrors"] = specific_errors
    if error.code:
        details["errorCode"] = error.code
    return UnknownError(message, suggestion=suggest_remedy(message), details=details)


def _insufficient_funds(error: RoutingEngineError) -> InsufficientFunds:
    wallet = error.transaction.get("from") or "Unknown"
    network_url = error.url or ""
    chain = infer_chain_from_url(network_url)
    network = chain.name if chain else "Unknown"

    return InsufficientFunds(
        "The wallet does not have enough funds to execute the transaction",
        suggestion=f"Add native tokens to your wallet on the {network} network to pay for gas.",
        details={
            "wallet": wallet,
            "network": network,
            "chainId": chain.chain_id if chain else None,
            "networkUrl": network_url,
            "balances": "Not available (wallet required)",
            "possibleCauses": [
                "Not enough native token to pay gas fees",
                "Not enough of the input token for the swap",
                "Token not approved for the swap contract",
            ],
            "suggestedActions": [
                f"Add native tokens to your wallet on the {network} network",
                "Check that you hold enough of the input token",
                "Wait for pending transactions to confirm",
            ],
            "originalError": {"code": error.code, "reason": error.reason},
        },
    )


def format_token(token: Token) -> dict[str, Any]:
    """Token shape used by listings and route responses."""
    return {
        "address": token.address,
        "symbol": token.symbol,
        "decimals": token.decimals,
        "isNative": token.is_native,
        "isSynthetic": token.is_synthetic,
        "tonAddress": token.ton_address,
    }


def format_token_definition(token: Token) -> dict[str, Any]:
    """Full token definition, usable as a custom token in requests."""
    data = {
        "address": token.address,
        "symbol": token.symbol,
        "decimals": token.decimals,
        "chainId": token.chain_id,
        "name": token.name,
    }
    if token.icon:
        data["icon"] = token.icon
    if token.is_native:
        data["isNative"] = True
    return data


def format_routes(result: SwapResult) -> list[dict[str, Any]]:
    return [
        {
            "provider": route.provider,
            "tokens": [
                {
                    "address": t.address,
                    "symbol": t.symbol,
                    "chainId": t.chain_id,
                    "decimals": t.decimals,
                }
                for t in route.tokens
            ],
        }
        for route in result.routes
    ]


def format_fees(result: SwapResult) -> list[dict[str, Any]]:
    return [{"provider": fee.provider, "value": fee.value.to_significant()} for fee in result.fees]


def format_swap_result(result: SwapResult, select_mode: AggregatorMode) -> dict[str, Any]:
    """Shape a swap result for the API.

    ``select_mode`` is the mode that produced the result.
    """
    data: dict[str, Any] = {
        "selectMode": select_mode.value,
        "transactionType": result.transaction_type,
        "tokenAmountOut": result.token_amount_out.to_significant(),
        "tokenAmountOutMin": result.token_amount_out_min.to_significant(),
        "priceImpact": format_significant(result.price_impact),
        "approveTo": result.approve_to,
        "routes": format_routes(result),
        "fees": format_fees(result),
        "transactionRequest": result.transaction_request,
    }
    if result.estimated_time is not None:
        data["estimatedTime"] = result.estimated_time
    return data


def estimated_gas(result: SwapResult) -> Optional[str]:
    tx = result.transaction_request or {}
    gas = tx.get("gas") or tx.get("gasLimit")
    return str(gas) if gas is not None else None
