"""Symbiosis cross-chain routing engine integration.

Uses the Symbiosis HTTP API for the token catalog and swap computation.
API docs: https://docs.symbiosis.finance/developer-tools/symbiosis-api
"""

import asyncio
import logging
from decimal import Decimal, InvalidOperation
from typing import Any, Optional

import httpx

from swapbridge.chains import TON
from swapbridge.errors import InvalidParameters
from swapbridge.routing.base import (
    FeeInfo,
    RouteInfo,
    RoutingEngine,
    RoutingEngineError,
    SwapResult,
)
from swapbridge.swap.params import SwapParams
from swapbridge.tokens.models import Token, TokenAmount

logger = logging.getLogger(__name__)

# Symbiosis API endpoints
SYMBIOSIS_API = "https://api.symbiosis.finance/crosschain"
SWAP_PATH = "/v1/swap"
TOKENS_PATH = "/v1/tokens"

CLIENT_ID_HEADER = "X-Client-Id"


def parse_token(data: dict[str, Any]) -> Token:
    """Build a Token from a Symbiosis token object."""
    address = data.get("address") or ""
    attributes = data.get("attributes") or {}
    return Token(
        chain_id=int(data["chainId"]),
        address=address,
        symbol=data.get("symbol") or "",
        decimals=int(data["decimals"]),
        name=data.get("name") or data.get("symbol") or "",
        is_native=bool(data.get("isNative", not address)),
        is_synthetic=bool(data.get("isSynthetic", False)),
        icon=data.get("icon") or None,
        ton_address=attributes.get("ton") or data.get("tonAddress"),
    )


def parse_token_amount(data: dict[str, Any]) -> TokenAmount:
    """Build a TokenAmount from a Symbiosis token-amount object."""
    return TokenAmount(token=parse_token(data), raw=int(data["amount"]))


def token_payload(token: Token) -> dict[str, Any]:
    return {
        "chainId": token.chain_id,
        "address": token.address,
        "symbol": token.symbol,
        "decimals": token.decimals,
    }


class SymbiosisEngine(RoutingEngine):
    """Routing engine handle backed by the Symbiosis HTTP API.

    Each handle carries one client identity. An empty identity gives
    unrestricted aggregator access.
    """

    def __init__(
        self,
        api_url: str = SYMBIOSIS_API,
        client_id: str = "",
        timeout: float = 30.0,
        http_client: Optional[httpx.AsyncClient] = None,
    ):
        """Initialize Symbiosis engine.

        Args:
            api_url: API base URL
            client_id: Client identity sent with every request ("" = none)
            timeout: HTTP timeout in seconds
            http_client: Shared client; created lazily and owned when omitted
        """
        self.api_url = api_url.rstrip("/")
        self._client_id = client_id
        self.timeout = timeout
        self._http_client = http_client
        self._owns_client = http_client is None
        self._tokens: Optional[list[Token]] = None
        self._tokens_lock = asyncio.Lock()

    @property
    def client_id(self) -> str:
        return self._client_id

    def _get_client(self) -> httpx.AsyncClient:
        """Get or create HTTP client."""
        if self._http_client is None:
            self._http_client = httpx.AsyncClient(timeout=self.timeout)
            self._owns_client = True
        return self._http_client

    def _get_headers(self) -> dict:
        headers = {"Accept": "application/json", "Content-Type": "application/json"}
        if self._client_id:
            headers[CLIENT_ID_HEADER] = self._client_id
        return headers

    async def aclose(self) -> None:
        if self._http_client is not None and self._owns_client:
            await self._http_client.aclose()
            self._http_client = None

    async def list_tokens(self) -> list[Token]:
        """Return the token catalog, fetched once per handle."""
        if self._tokens is not None:
            return self._tokens

        async with self._tokens_lock:
            if self._tokens is None:
                data = await self._request("GET", TOKENS_PATH)
                items = data.get("tokens", []) if isinstance(data, dict) else data
                tokens = []
                for item in items or []:
                    try:
                        tokens.append(parse_token(item))
                    except (KeyError, TypeError, ValueError) as e:
                        logger.debug(f"Skipping malformed catalog entry {item!r}: {e}")
                logger.info(f"Loaded {len(tokens)} tokens from routing engine catalog")
                self._tokens = tokens
        return self._tokens

    async def find_token(self, address: str, chain_id: int) -> Optional[Token]:
        if not address:
            return None
        lower = address.lower()
        for token in await self.list_tokens():
            if token.chain_id == chain_id and token.address and token.address.lower() == lower:
                return token
        return None

    def build_swap_payload(self, params: SwapParams) -> dict[str, Any]:
        """Request body in the format the Symbiosis frontend uses."""
        token_in = params.token_amount_in.token
        token_out_payload = token_payload(params.token_out)
        if params.token_out.chain_id == TON:
            token_out_payload["attributes"] = {"ton": params.to_address}

        return {
            "tokenAmountIn": {**token_payload(token_in), "amount": str(params.token_amount_in.raw)},
            "tokenOut": token_out_payload,
            "from": params.from_address,
            "to": params.to_address,
            "slippage": params.slippage_bps,
            "deadline": params.deadline,
            "selectMode": params.select_mode.value,
            "refundAddress": "",
        }

    async def compute_swap(self, params: SwapParams) -> SwapResult:
        payload = self.build_swap_payload(params)
        logger.debug(
            f"Symbiosis swap: {params.token_amount_in} -> {params.token_out.symbol} "
            f"mode={params.select_mode.value} slippage={params.slippage_bps}"
        )
        data = await self._request("POST", SWAP_PATH, json=payload)
        try:
            return self._parse_swap_result(data)
        except (KeyError, TypeError, ValueError, InvalidOperation, InvalidParameters) as e:
            raise RoutingEngineError(
                f"Malformed swap response from routing engine: {type(e).__name__}: {e}",
                code="BAD_RESPONSE",
            )

    def _parse_swap_result(self, data: dict[str, Any]) -> SwapResult:
        token_amount_out = parse_token_amount(data["tokenAmountOut"])
        out_min = data.get("tokenAmountOutMin")
        token_amount_out_min = parse_token_amount(out_min) if out_min else token_amount_out

        routes = [
            RouteInfo(
                provider=route.get("provider") or "unknown",
                tokens=[parse_token(t) for t in route.get("tokens") or []],
            )
            for route in data.get("routes") or []
        ]
        fees = [
            FeeInfo(
                provider=fee.get("provider") or "unknown",
                value=parse_token_amount(fee["value"]),
                description=fee.get("description"),
            )
            for fee in data.get("fees") or []
            if fee.get("value")
        ]

        estimated_time = data.get("estimatedTime")
        return SwapResult(
            token_amount_out=token_amount_out,
            token_amount_out_min=token_amount_out_min,
            price_impact=Decimal(str(data.get("priceImpact") or "0")),
            routes=routes,
            fees=fees,
            transaction_request=data.get("tx") or {},
            approve_to=data.get("approveTo") or "",
            transaction_type=data.get("type") or "evm",
            estimated_time=int(estimated_time) if estimated_time is not None else None,
        )

    async def _request(self, method: str, path: str, json: Optional[dict] = None) -> Any:
        url = f"{self.api_url}{path}"
        client = self._get_client()

        try:
            response = await client.request(method, url, headers=self._get_headers(), json=json)
        except httpx.HTTPError as e:
            logger.warning(f"Symbiosis request failed: {method} {path}: {e}")
            raise RoutingEngineError(
                f"Routing engine request failed: {type(e).__name__}: {e}",
                code="NETWORK_ERROR",
                url=url,
            )

        if response.status_code >= 400:
            raise self._error_from_response(response, url)

        try:
            return response.json()
        except ValueError:
            raise RoutingEngineError(
                "Routing engine returned a non-JSON response",
                code="BAD_RESPONSE",
                url=url,
                status_code=response.status_code,
            )

    @staticmethod
    def _error_from_response(response: httpx.Response, url: str) -> RoutingEngineError:
        try:
            body = response.json()
        except ValueError:
            body = {}
        if not isinstance(body, dict):
            body = {}

        message = body.get("message") or body.get("error") or response.text or f"HTTP {response.status_code}"
        code = body.get("code")
        errors = body.get("errors") if isinstance(body.get("errors"), list) else None
        transaction = body.get("transaction") if isinstance(body.get("transaction"), dict) else None

        logger.warning(f"Symbiosis API error: {response.status_code} - {message}")
        return RoutingEngineError(
            str(message),
            code=str(code) if code is not None else None,
            reason=body.get("reason"),
            errors=errors,
            url=body.get("url") or url,
            status_code=response.status_code,
            transaction=transaction,
        )
