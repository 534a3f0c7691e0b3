"""Tests for token resolution precedence."""

import pytest

from swapbridge.chains import ARBITRUM, BASE, POLYGON
from swapbridge.errors import UnknownToken
from swapbridge.tokens.models import Token
from swapbridge.tokens.resolver import TokenResolver, create_custom_token

from conftest import USDC_POLYGON, FakeRoutingEngine, engine_error


@pytest.fixture
def resolver(fake_engine) -> TokenResolver:
    return TokenResolver(fake_engine)


class TestResolve:
    """Each lookup step, in order."""

    @pytest.mark.asyncio
    async def test_custom_definition_wins(self, resolver, fake_engine):
        custom = create_custom_token("0xfeed", "MINE", 9, POLYGON, name="Mine")

        token = await resolver.resolve(POLYGON, "USDC", custom=custom)

        assert token is custom
        assert fake_engine.catalog_calls == 0

    @pytest.mark.asyncio
    async def test_native_flag(self, resolver, fake_engine):
        token = await resolver.resolve(BASE, "USDC", use_native=True)

        assert token.is_native
        assert token.address == ""
        assert token.symbol == "ETH"
        assert fake_engine.catalog_calls == 0

    @pytest.mark.asyncio
    async def test_native_symbol(self, resolver):
        token = await resolver.resolve(POLYGON, "matic")
        assert token.is_native
        assert token.chain_id == POLYGON

    @pytest.mark.asyncio
    async def test_catalog_address_any_case(self, resolver):
        token = await resolver.resolve(POLYGON, USDC_POLYGON.address.upper())
        assert token == USDC_POLYGON

    @pytest.mark.asyncio
    async def test_regional_registry(self, resolver):
        token = await resolver.resolve(BASE, "brz")
        assert token.symbol == "BRZ"
        assert token.address == "0xE9185Ee218cae427aF7B9764A011bb89FeA761B4"

    @pytest.mark.asyncio
    async def test_regional_registry_beats_catalog_symbol(self):
        impostor = Token(chain_id=POLYGON, address="0xbad", symbol="BRZ", decimals=4)
        resolver = TokenResolver(FakeRoutingEngine(tokens=[impostor]))

        token = await resolver.resolve(POLYGON, "BRZ")

        assert token.address == "0x4eD141110F6EeeAbA9A1df36d8c26f684d2475Dc"

    @pytest.mark.asyncio
    async def test_catalog_symbol(self, resolver):
        token = await resolver.resolve(POLYGON, "usdc")
        assert token == USDC_POLYGON

    @pytest.mark.asyncio
    async def test_catalog_symbol_respects_chain(self, resolver):
        with pytest.raises(UnknownToken):
            await resolver.resolve(ARBITRUM, "USDC")


class TestUnknownToken:
    """Tests for the unresolved-token error."""

    @pytest.mark.asyncio
    async def test_includes_worked_example(self, resolver):
        with pytest.raises(UnknownToken) as exc_info:
            await resolver.resolve(BASE, "NOPE", field_name="customTokenOut")

        body = exc_info.value.to_dict()
        assert body["kind"] == "UnknownToken"
        assert body["token"] == "NOPE"
        assert body["chainId"] == BASE
        example = body["example"]["customTokenOut"]
        assert example["symbol"] == "BRZ"
        assert example["chainId"] == BASE
        assert example["decimals"] == 18
        assert "customTokenOut" in body["error"]
        assert "Polygon" in body["supportedBrazilianTokens"]["BRZ"]

    @pytest.mark.asyncio
    async def test_example_falls_back_to_polygon(self, resolver):
        with pytest.raises(UnknownToken) as exc_info:
            await resolver.resolve(ARBITRUM, "NOPE")

        assert exc_info.value.example["chainId"] == POLYGON

    @pytest.mark.asyncio
    async def test_blank_identifier_skips_engine(self, resolver, fake_engine):
        with pytest.raises(UnknownToken):
            await resolver.resolve(POLYGON, "  ")

        assert fake_engine.catalog_calls == 0

    @pytest.mark.asyncio
    async def test_catalog_errors_are_not_fatal(self):
        engine = FakeRoutingEngine(catalog_error=engine_error("catalog down", code="NETWORK_ERROR"))
        resolver = TokenResolver(engine)

        token = await resolver.resolve(POLYGON, "BRZ")
        assert token.symbol == "BRZ"

        with pytest.raises(UnknownToken):
            await resolver.resolve(POLYGON, "USDC")


def test_custom_token_without_address_is_native():
    token = create_custom_token("", "ETH", 18, BASE)
    assert token.is_native
    assert token.name == "ETH"
