"""Pytest configuration and fixtures."""

import os
import time
from decimal import Decimal
from typing import Optional

import pytest

# Set test environment
os.environ["ENVIRONMENT"] = "test"
os.environ["DEBUG"] = "false"
os.environ["SYMBIOSIS_CLIENT_ID"] = "test-client"
os.environ["RETRY_DELAY_SECONDS"] = "0"

from swapbridge.chains import BASE, POLYGON
from swapbridge.routing.base import FeeInfo, RouteInfo, RoutingEngine, RoutingEngineError, SwapResult
from swapbridge.swap.engine import AttemptEvent
from swapbridge.swap.params import SwapParams, build_swap_params, create_token_amount
from swapbridge.tokens import registry
from swapbridge.tokens.models import Token, TokenAmount

USER = "0x1111111111111111111111111111111111111111"
RECIPIENT = "0x2222222222222222222222222222222222222222"

USDC_POLYGON = Token(
    chain_id=POLYGON,
    address="0x3c499c542cEF5E3811e1192ce70d8cC03d5c3359",
    symbol="USDC",
    decimals=6,
    name="USD Coin",
)
USDC_BASE = Token(
    chain_id=BASE,
    address="0x833589fCD6eDb6E08f4c7C32D4f71b54bdA02913",
    symbol="USDC",
    decimals=6,
    name="USD Coin",
)


def make_swap_result(params: SwapParams) -> SwapResult:
    """A plausible engine answer: 5 output tokens, 4.9 minimum."""
    token_in = params.token_amount_in.token
    token_out = params.token_out
    unit = 10 ** token_out.decimals
    return SwapResult(
        token_amount_out=TokenAmount(token_out, 5 * unit),
        token_amount_out_min=TokenAmount(token_out, 49 * unit // 10),
        price_impact=Decimal("-0.12"),
        routes=[RouteInfo(provider="symbiosis", tokens=[token_in, token_out])],
        fees=[FeeInfo(provider="symbiosis", value=TokenAmount(token_in, 10 ** token_in.decimals // 100))],
        transaction_request={"to": "0xrouter", "data": "0xdeadbeef", "value": "0", "gas": 210000},
        approve_to="0xapprove",
    )


def engine_error(message: str = "Route not found", code: Optional[str] = None, **kwargs) -> RoutingEngineError:
    return RoutingEngineError(message, code=code, **kwargs)


class FakeRoutingEngine(RoutingEngine):
    """Scriptable routing engine.

    ``script`` is consumed one entry per ``compute_swap`` call: an exception
    entry is raised, ``None`` yields a result. Once the script is empty,
    ``fail_with`` (if set) is raised on every call, otherwise calls succeed.
    """

    def __init__(
        self,
        tokens: Optional[list[Token]] = None,
        client_id: str = "test-client",
        script: Optional[list] = None,
        fail_with: Optional[Exception] = None,
        catalog_error: Optional[Exception] = None,
    ):
        self._client_id = client_id
        self.tokens = list(tokens or [])
        self.script = list(script or [])
        self.fail_with = fail_with
        self.catalog_error = catalog_error
        self.calls: list[SwapParams] = []
        self.catalog_calls = 0
        self.closed = False

    @property
    def client_id(self) -> str:
        return self._client_id

    async def list_tokens(self) -> list[Token]:
        self.catalog_calls += 1
        if self.catalog_error is not None:
            raise self.catalog_error
        return self.tokens

    async def find_token(self, address: str, chain_id: int) -> Optional[Token]:
        lower = address.lower()
        for token in await self.list_tokens():
            if token.chain_id == chain_id and token.address.lower() == lower:
                return token
        return None

    async def compute_swap(self, params: SwapParams) -> SwapResult:
        self.calls.append(params)
        if self.script:
            outcome = self.script.pop(0)
            if outcome is not None:
                raise outcome
        elif self.fail_with is not None:
            raise self.fail_with
        return make_swap_result(params)

    async def aclose(self) -> None:
        self.closed = True


class RecordingSink:
    """Attempt sink that keeps every event."""

    def __init__(self):
        self.events: list[AttemptEvent] = []

    def __call__(self, event: AttemptEvent) -> None:
        self.events.append(event)

    @property
    def statuses(self) -> list[str]:
        return [e.status for e in self.events]


class FallbackFactory:
    """Builds fake unrestricted handles and remembers them."""

    def __init__(self, **engine_kwargs):
        self.engine_kwargs = engine_kwargs
        self.created: list[FakeRoutingEngine] = []

    def __call__(self) -> FakeRoutingEngine:
        engine = FakeRoutingEngine(client_id="", **self.engine_kwargs)
        self.created.append(engine)
        return engine


def make_params(
    token_in: Token = USDC_POLYGON,
    token_out: Token = USDC_BASE,
    amount: str = "10",
    slippage_bps: int = 200,
    select_mode: str = "best_return",
    now: Optional[float] = None,
) -> SwapParams:
    return build_swap_params(
        token_amount_in=create_token_amount(token_in, amount),
        token_out=token_out,
        from_address=USER,
        to_address=RECIPIENT,
        slippage_bps=slippage_bps,
        select_mode=select_mode,
        now=now if now is not None else time.time(),
    )


@pytest.fixture
def brz_polygon() -> Token:
    return registry.lookup_regional("BRZ", POLYGON)


@pytest.fixture
def brz_base() -> Token:
    return registry.lookup_regional("BRZ", BASE)


@pytest.fixture
def fake_engine() -> FakeRoutingEngine:
    return FakeRoutingEngine(tokens=[USDC_POLYGON, USDC_BASE])


@pytest.fixture
def recording_sink() -> RecordingSink:
    return RecordingSink()


@pytest.fixture
def sleeps() -> list[float]:
    return []


@pytest.fixture
def fake_sleep(sleeps):
    async def _sleep(seconds: float) -> None:
        sleeps.append(seconds)

    return _sleep
