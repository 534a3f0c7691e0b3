"""Tests for the Symbiosis routing engine client."""

import json

import httpx
import pytest

from swapbridge.chains import BASE, POLYGON, TON
from swapbridge.routing.base import RoutingEngineError
from swapbridge.routing.symbiosis import CLIENT_ID_HEADER, SymbiosisEngine
from swapbridge.tokens.models import Token

from conftest import RECIPIENT, USDC_BASE, USDC_POLYGON, USER, make_params

API_URL = "https://symbiosis.test/crosschain"

CATALOG = [
    {"chainId": POLYGON, "address": USDC_POLYGON.address, "symbol": "USDC", "decimals": 6, "name": "USD Coin"},
    {"chainId": BASE, "address": USDC_BASE.address, "symbol": "USDC", "decimals": 6},
    {"chainId": TON, "address": "0xton", "symbol": "TON", "decimals": 9, "attributes": {"ton": "EQton"}},
    {"chainId": POLYGON, "symbol": "broken"},
]

SWAP_RESPONSE = {
    "tokenAmountOut": {"chainId": BASE, "address": USDC_BASE.address, "symbol": "USDC", "decimals": 6, "amount": "9950000"},
    "tokenAmountOutMin": {"chainId": BASE, "address": USDC_BASE.address, "symbol": "USDC", "decimals": 6, "amount": "9850000"},
    "priceImpact": "-0.05",
    "approveTo": "0xapprove",
    "type": "evm",
    "estimatedTime": 42,
    "routes": [
        {"provider": "symbiosis", "tokens": [CATALOG[0], CATALOG[1]]},
    ],
    "fees": [
        {"provider": "symbiosis", "value": {**CATALOG[0], "amount": "50000"}},
    ],
    "tx": {"to": "0xrouter", "data": "0x01", "value": "0"},
}


class Recorder:
    """Mock transport handler that records requests."""

    def __init__(self, responses: dict):
        self.responses = responses
        self.requests: list[httpx.Request] = []

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        status, body = self.responses[request.url.path]
        if isinstance(body, Exception):
            raise body
        if isinstance(body, str):
            return httpx.Response(status, text=body)
        return httpx.Response(status, json=body)


def _engine(responses: dict, client_id: str = "test-client") -> tuple[SymbiosisEngine, Recorder]:
    recorder = Recorder(responses)
    client = httpx.AsyncClient(transport=httpx.MockTransport(recorder))
    return SymbiosisEngine(api_url=API_URL, client_id=client_id, http_client=client), recorder


class TestCatalog:
    """Tests for token catalog access."""

    @pytest.mark.asyncio
    async def test_catalog_is_fetched_once(self):
        engine, recorder = _engine({"/crosschain/v1/tokens": (200, CATALOG)})

        tokens = await engine.list_tokens()
        await engine.list_tokens()

        assert len(recorder.requests) == 1
        assert len(tokens) == 3  # malformed entry skipped
        assert tokens[2].ton_address == "EQton"

    @pytest.mark.asyncio
    async def test_find_token_by_address(self):
        engine, _ = _engine({"/crosschain/v1/tokens": (200, {"tokens": CATALOG})})

        token = await engine.find_token(USDC_POLYGON.address.lower(), POLYGON)
        assert token.symbol == "USDC"
        assert token.name == "USD Coin"

        assert await engine.find_token(USDC_POLYGON.address, BASE) is None

    @pytest.mark.asyncio
    async def test_tokens_for_chain(self):
        engine, _ = _engine({"/crosschain/v1/tokens": (200, CATALOG)})

        tokens = await engine.tokens_for_chain(BASE)
        assert [t.address for t in tokens] == [USDC_BASE.address]


class TestClientIdentity:
    """The client id header is sent only when set."""

    @pytest.mark.asyncio
    async def test_header_present(self):
        engine, recorder = _engine({"/crosschain/v1/tokens": (200, [])})
        await engine.list_tokens()
        assert recorder.requests[0].headers[CLIENT_ID_HEADER] == "test-client"

    @pytest.mark.asyncio
    async def test_header_absent_for_unrestricted_handle(self):
        engine, recorder = _engine({"/crosschain/v1/tokens": (200, [])}, client_id="")
        await engine.list_tokens()
        assert CLIENT_ID_HEADER not in recorder.requests[0].headers


class TestComputeSwap:
    """Tests for swap computation."""

    def test_payload(self):
        engine = SymbiosisEngine(api_url=API_URL)
        params = make_params(amount="10", slippage_bps=250, select_mode="fastest")

        payload = engine.build_swap_payload(params)

        assert payload["tokenAmountIn"]["amount"] == "10000000"
        assert payload["tokenAmountIn"]["chainId"] == POLYGON
        assert payload["tokenOut"]["address"] == USDC_BASE.address
        assert "attributes" not in payload["tokenOut"]
        assert payload["from"] == USER
        assert payload["to"] == RECIPIENT
        assert payload["slippage"] == 250
        assert payload["selectMode"] == "fastest"
        assert payload["deadline"] == params.deadline
        assert payload["refundAddress"] == ""

    def test_ton_payload_carries_recipient(self):
        engine = SymbiosisEngine(api_url=API_URL)
        ton = Token(chain_id=TON, address="0xton", symbol="TON", decimals=9)

        payload = engine.build_swap_payload(make_params(token_out=ton))

        assert payload["tokenOut"]["attributes"] == {"ton": RECIPIENT}

    @pytest.mark.asyncio
    async def test_parses_result(self):
        engine, recorder = _engine({"/crosschain/v1/swap": (200, SWAP_RESPONSE)})

        result = await engine.compute_swap(make_params(slippage_bps=100))

        sent = json.loads(recorder.requests[0].content)
        assert sent["slippage"] == 100
        assert result.token_amount_out.to_significant() == "9.95"
        assert result.token_amount_out_min.to_significant() == "9.85"
        assert str(result.price_impact) == "-0.05"
        assert result.providers == ["symbiosis"]
        assert result.fees[0].value.to_significant() == "0.05"
        assert result.transaction_request["to"] == "0xrouter"
        assert result.approve_to == "0xapprove"
        assert result.estimated_time == 42

    @pytest.mark.asyncio
    async def test_error_response(self):
        body = {
            "code": "INSUFFICIENT_FUNDS",
            "message": "insufficient funds for gas",
            "reason": "insufficient funds",
            "url": "https://polygon-rpc.com",
            "transaction": {"from": USER},
        }
        engine, _ = _engine({"/crosschain/v1/swap": (400, body)})

        with pytest.raises(RoutingEngineError) as exc_info:
            await engine.compute_swap(make_params())

        error = exc_info.value
        assert error.code == "INSUFFICIENT_FUNDS"
        assert error.url == "https://polygon-rpc.com"
        assert error.transaction == {"from": USER}
        assert error.status_code == 400

    @pytest.mark.asyncio
    async def test_malformed_response(self):
        engine, _ = _engine({"/crosschain/v1/swap": (200, {"unexpected": True})})

        with pytest.raises(RoutingEngineError) as exc_info:
            await engine.compute_swap(make_params())

        assert exc_info.value.code == "BAD_RESPONSE"

    @pytest.mark.asyncio
    async def test_non_json_response(self):
        engine, _ = _engine({"/crosschain/v1/swap": (200, "<html>oops</html>")})

        with pytest.raises(RoutingEngineError) as exc_info:
            await engine.compute_swap(make_params())

        assert exc_info.value.code == "BAD_RESPONSE"

    @pytest.mark.asyncio
    async def test_transport_error(self):
        engine, _ = _engine({"/crosschain/v1/swap": (0, httpx.ConnectError("connection refused"))})

        with pytest.raises(RoutingEngineError) as exc_info:
            await engine.compute_swap(make_params())

        assert exc_info.value.code == "NETWORK_ERROR"


@pytest.mark.asyncio
async def test_aclose_leaves_shared_client_open():
    client = httpx.AsyncClient(transport=httpx.MockTransport(Recorder({})))
    engine = SymbiosisEngine(api_url=API_URL, http_client=client)

    await engine.aclose()

    assert not client.is_closed
    await client.aclose()
