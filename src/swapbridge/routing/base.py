"""Abstract interface to the external cross-chain routing engine."""

import logging
from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from decimal import Decimal
from typing import TYPE_CHECKING, Any, Optional

from swapbridge.tokens.models import Token, TokenAmount

if TYPE_CHECKING:
    from swapbridge.swap.params import SwapParams

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class RouteInfo:
    """One leg of a computed route."""

    provider: str  # e.g. "symbiosis", "1inch", "open-ocean"
    tokens: list[Token] = field(default_factory=list)


@dataclass(frozen=True)
class FeeInfo:
    """A fee charged along the route."""

    provider: str
    value: TokenAmount
    description: Optional[str] = None


@dataclass
class SwapResult:
    """A computed swap: expected output plus the transaction to sign."""

    token_amount_out: TokenAmount
    token_amount_out_min: TokenAmount
    price_impact: Decimal  # percent, may be negative
    routes: list[RouteInfo] = field(default_factory=list)
    fees: list[FeeInfo] = field(default_factory=list)
    transaction_request: dict[str, Any] = field(default_factory=dict)
    approve_to: str = ""
    transaction_type: str = "evm"
    estimated_time: Optional[int] = None

    @property
    def providers(self) -> list[str]:
        return [route.provider for route in self.routes]


class RoutingEngineError(Exception):
    """Failure reported by the routing engine or its transport.

    Engine errors come in many shapes; the fields below keep whatever the
    engine sent so the error decoder can classify them.
    """

    def __init__(
        self,
        message: str,
        code: Optional[str] = None,
        reason: Optional[str] = None,
        errors: Optional[list[dict[str, Any]]] = None,
        url: Optional[str] = None,
        status_code: Optional[int] = None,
        transaction: Optional[dict[str, Any]] = None,
    ):
        super().__init__(message)
        self.message = message
        self.code = code
        self.reason = reason
        self.errors = errors or []
        self.url = url
        self.status_code = status_code
        self.transaction = transaction or {}

    def __str__(self) -> str:
        if self.code:
            return f"{self.message} (code={self.code})"
        return self.message


class RoutingEngine(ABC):
    """A handle on the routing engine, scoped to one client identity."""

    @property
    @abstractmethod
    def client_id(self) -> str:
        """Client identity this handle was built with ("" = unrestricted)."""
        pass

    @abstractmethod
    async def find_token(self, address: str, chain_id: int) -> Optional[Token]:
        """Find a token in the engine catalog by exact address."""
        pass

    @abstractmethod
    async def list_tokens(self) -> list[Token]:
        """Return the engine's full token catalog across all chains."""
        pass

    @abstractmethod
    async def compute_swap(self, params: "SwapParams") -> SwapResult:
        """
        Compute a swap for the given parameters.

        Args:
            params: Swap parameters, including the aggregator mode to use

        Returns:
            SwapResult with output amounts, routes, fees and transaction data

        Raises:
            RoutingEngineError: on any aggregator or network problem
        """
        pass

    async def tokens_for_chain(self, chain_id: int) -> list[Token]:
        """Catalog tokens on a single chain."""
        return [t for t in await self.list_tokens() if t.chain_id == chain_id]

    async def aclose(self) -> None:
        """Release any transport resources held by this handle."""
        return None
