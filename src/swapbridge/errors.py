"""Error taxonomy for swap resolution and execution.

Every failure that reaches an HTTP client is one of these kinds. Raw
routing-engine errors are decoded into them by
``swapbridge.swap.formatter.decode_engine_error``.
"""

from typing import Any, Optional

GENERIC_SUGGESTION = "Check token addresses, amounts, and network connectivity."


class SwapBridgeError(Exception):
    """Base class for user-visible swap errors."""

    kind = "UnknownError"
    status_code = 500

    def __init__(
        self,
        message: str,
        suggestion: Optional[str] = None,
        details: Optional[dict[str, Any]] = None,
    ):
        super().__init__(message)
        self.message = message
        self.suggestion = suggestion or GENERIC_SUGGESTION
        self.details = details or {}

    def to_dict(self) -> dict[str, Any]:
        """Render as a JSON-serialisable error body."""
        body: dict[str, Any] = {
            "kind": self.kind,
            "error": self.message,
            "suggestion": self.suggestion,
        }
        if self.details:
            body["details"] = self.details
        return body


class UnknownToken(SwapBridgeError):
    """Token resolution exhausted every lookup step."""

    kind = "UnknownToken"
    status_code = 400

    def __init__(
        self,
        identifier: str,
        chain_id: int,
        example: Optional[dict[str, Any]] = None,
        field_name: str = "customToken",
        supported_tokens: Optional[dict[str, str]] = None,
    ):
        message = (
            f"Unknown token {identifier} on chain {chain_id}. "
            f"You can provide a custom token definition using '{field_name}'."
        )
        super().__init__(
            message,
            suggestion=f"Correct the token identifier or pass '{field_name}' with "
            "address, symbol, decimals and chainId.",
        )
        self.identifier = identifier
        self.chain_id = chain_id
        self.example = example
        self.field_name = field_name
        self.supported_tokens = supported_tokens

    def to_dict(self) -> dict[str, Any]:
        body = super().to_dict()
        body["token"] = self.identifier
        body["chainId"] = self.chain_id
        if self.example is not None:
            body["example"] = {self.field_name: self.example}
        if self.supported_tokens:
            body["supportedBrazilianTokens"] = self.supported_tokens
        return body


class InvalidParameters(SwapBridgeError):
    """Request rejected before any network call."""

    kind = "InvalidParameters"
    status_code = 400


class InsufficientFunds(SwapBridgeError):
    """Wallet cannot cover the amount or gas, as reported by chain simulation."""

    kind = "InsufficientFunds"
    status_code = 400


class RoutingFailure(SwapBridgeError):
    """No aggregator produced a route.

    When raised by the execution engine both retry tiers are exhausted and
    their summaries are kept in ``tier1_summary`` / ``tier2_summary``.
    """

    kind = "RoutingFailure"
    status_code = 400

    def __init__(
        self,
        message: str,
        tier1_summary: Optional[str] = None,
        tier2_summary: Optional[str] = None,
        attempts: Optional[list[dict[str, Any]]] = None,
        suggestion: Optional[str] = None,
        details: Optional[dict[str, Any]] = None,
    ):
        super().__init__(
            message,
            suggestion=suggestion
            or "Wait a few minutes and try again, or reduce the swap amount.",
            details=details,
        )
        self.tier1_summary = tier1_summary
        self.tier2_summary = tier2_summary
        self.attempts = attempts or []

    def to_dict(self) -> dict[str, Any]:
        body = super().to_dict()
        if self.tier1_summary is not None or self.tier2_summary is not None:
            body["tiers"] = {
                "normal": self.tier1_summary,
                "forced": self.tier2_summary,
            }
        if self.attempts:
            body["attemptCount"] = len(self.attempts)
        return body


class DeadlineExpired(SwapBridgeError):
    """The swap deadline passed while retrying."""

    kind = "DeadlineExpired"
    status_code = 408

    def __init__(self, deadline: int, attempts_made: int):
        super().__init__(
            f"Swap deadline {deadline} passed after {attempts_made} attempt(s)",
            suggestion="Request a new quote; the previous one is no longer valid.",
            details={"deadline": deadline, "attemptsMade": attempts_made},
        )
        self.deadline = deadline
        self.attempts_made = attempts_made


class UnknownError(SwapBridgeError):
    """Any routing-engine failure that matched no known pattern."""

    kind = "UnknownError"
    status_code = 500
