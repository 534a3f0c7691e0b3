"""Swap parameter building, execution and response formatting."""

from swapbridge.swap.params import (
    AggregatorMode,
    SwapParams,
    build_swap_params,
    create_token_amount,
    validate_select_mode,
)
from swapbridge.swap.engine import (
    AttemptEvent,
    ExecutionEngine,
    ExecutionOutcome,
)
from swapbridge.swap.formatter import decode_engine_error, format_swap_result

__all__ = [
    # Parameters
    "AggregatorMode",
    "SwapParams",
    "build_swap_params",
    "create_token_amount",
    "validate_select_mode",
    # Execution
    "AttemptEvent",
    "ExecutionEngine",
    "ExecutionOutcome",
    # Formatting
    "decode_engine_error",
    "format_swap_result",
]
