"""Swap parameter validation and assembly."""

import time
from dataclasses import dataclass
from decimal import Decimal
from enum import Enum
from typing import Optional, Union

from swapbridge.errors import InvalidParameters
from swapbridge.tokens.models import Token, TokenAmount

MAX_SLIPPAGE_BPS = 300  # 3.00%
DEFAULT_SLIPPAGE_BPS = 300
DEADLINE_MINUTES = 20


class AggregatorMode(str, Enum):
    """Route selection strategies offered by the routing engine."""

    BEST_RETURN = "best_return"
    BEST_PRICE = "best_price"
    FASTEST = "fastest"
    CHEAPEST = "cheapest"


DEFAULT_SELECT_MODE = AggregatorMode.BEST_RETURN
VALID_SELECT_MODES = [mode.value for mode in AggregatorMode]


@dataclass(frozen=True)
class SwapParams:
    """Everything the routing engine needs to compute one swap."""

    token_amount_in: TokenAmount
    token_out: Token
    from_address: str
    to_address: str
    slippage_bps: int
    deadline: int  # unix seconds
    select_mode: AggregatorMode = DEFAULT_SELECT_MODE

    @property
    def slippage_percent(self) -> Decimal:
        return Decimal(self.slippage_bps) / 100


def validate_select_mode(value: Optional[Union[str, AggregatorMode]]) -> AggregatorMode:
    """Coerce a caller-supplied mode; unknown values fall back to best_return."""
    if isinstance(value, AggregatorMode):
        return value
    try:
        return AggregatorMode(str(value).strip().lower())
    except ValueError:
        return DEFAULT_SELECT_MODE


def validate_slippage(slippage_bps: int, max_slippage_bps: int = MAX_SLIPPAGE_BPS) -> int:
    """Reject slippage outside ``[0, max_slippage_bps]``. Never clamps."""
    if isinstance(slippage_bps, bool) or not isinstance(slippage_bps, int):
        raise InvalidParameters(
            f"Invalid slippage: {slippage_bps!r}",
            suggestion="Send slippage as an integer number of basis points (100 = 1%).",
        )
    if slippage_bps > max_slippage_bps or slippage_bps < 0:
        raise InvalidParameters(
            f"Maximum allowed slippage is {max_slippage_bps / 100:g}% ({max_slippage_bps} basis points)",
            suggestion=f"Use values between 10 (0.1%) and {max_slippage_bps} "
            f"({max_slippage_bps / 100:.1f}%) for slippage.",
            details={
                "receivedSlippage": slippage_bps,
                "maxSlippage": max_slippage_bps,
                "slippageInPercent": f"{slippage_bps / 100:g}%",
                "maxSlippageInPercent": f"{max_slippage_bps / 100:g}%",
            },
        )
    return slippage_bps


def create_token_amount(token: Token, amount: Union[str, int, float, Decimal]) -> TokenAmount:
    """Convert a human-readable amount into a raw token amount."""
    return TokenAmount.from_human(token, amount)


def build_swap_params(
    token_amount_in: TokenAmount,
    token_out: Token,
    from_address: str,
    to_address: str,
    slippage_bps: int = DEFAULT_SLIPPAGE_BPS,
    select_mode: Union[str, AggregatorMode] = DEFAULT_SELECT_MODE,
    now: Optional[float] = None,
    max_slippage_bps: int = MAX_SLIPPAGE_BPS,
    deadline_minutes: int = DEADLINE_MINUTES,
) -> SwapParams:
    """
    Validate inputs and build swap parameters.

    The deadline is fixed here, once. Retries reuse it unchanged.

    Raises:
        InvalidParameters: slippage out of bounds or a missing address
    """
    validate_slippage(slippage_bps, max_slippage_bps)

    if not from_address or not to_address:
        raise InvalidParameters(
            "Both from and to addresses (or userAddress) are required",
            suggestion="Provide 'from' and 'to', or a single 'userAddress' used for both.",
            details={"from": from_address or None, "to": to_address or None},
        )

    if now is None:
        now = time.time()

    return SwapParams(
        token_amount_in=token_amount_in,
        token_out=token_out,
        from_address=from_address,
        to_address=to_address,
        slippage_bps=slippage_bps,
        deadline=int(now) + deadline_minutes * 60,
        select_mode=validate_select_mode(select_mode),
    )
