"""Tests for token models, amounts and the static registry."""

from decimal import Decimal

import pytest

from swapbridge.chains import ARBITRUM, BASE, ETHEREUM, POLYGON
from swapbridge.errors import InvalidParameters
from swapbridge.tokens import registry
from swapbridge.tokens.models import Token, TokenAmount, format_significant


def _token(decimals: int = 6, address: str = "0xAbC") -> Token:
    return Token(chain_id=POLYGON, address=address, symbol="TKN", decimals=decimals)


class TestToken:
    """Tests for token identity."""

    def test_identity_ignores_address_case(self):
        assert _token(address="0xABCDEF").same_as(_token(address="0xabcdef"))

    def test_native_identity(self):
        native = registry.lookup_native(POLYGON)
        assert native.identity == (POLYGON, "native")

    def test_different_chains_differ(self):
        other = Token(chain_id=BASE, address="0xAbC", symbol="TKN", decimals=6)
        assert not _token().same_as(other)


class TestTokenAmount:
    """Tests for human-to-raw amount conversion."""

    def test_from_human(self):
        assert TokenAmount.from_human(_token(6), "1.5").raw == 1_500_000

    def test_rounds_half_up(self):
        assert TokenAmount.from_human(_token(6), "0.0000005").raw == 1
        assert TokenAmount.from_human(_token(6), "0.00000049").raw == 0

    def test_large_amount_is_exact(self):
        amount = TokenAmount.from_human(_token(18), "1000000000")
        assert amount.raw == 10**27

    def test_value_round_trip(self):
        amount = TokenAmount(_token(6), 1_234_567)
        assert amount.value == Decimal("1.234567")

    @pytest.mark.parametrize("bad", ["abc", "-1", "NaN", "Infinity", ""])
    def test_rejects_invalid_amounts(self, bad):
        with pytest.raises(InvalidParameters):
            TokenAmount.from_human(_token(), bad)

    def test_rejects_negative_raw(self):
        with pytest.raises(InvalidParameters):
            TokenAmount(_token(), -1)

    def test_str(self):
        assert str(TokenAmount(_token(6), 2_500_000)) == "2.5 TKN"


class TestFormatSignificant:
    """Tests for significant-digit rendering."""

    def test_rounds_to_six_digits(self):
        assert format_significant(Decimal("1234567.89")) == "1234570"

    def test_small_values(self):
        assert format_significant(Decimal("0.000123456789")) == "0.000123457"

    def test_trims_trailing_zeros(self):
        assert format_significant(Decimal("1.50000")) == "1.5"

    def test_zero(self):
        assert format_significant(Decimal("0")) == "0"

    def test_negative(self):
        assert format_significant(Decimal("-0.12")) == "-0.12"


class TestRegistry:
    """Tests for the static token registry."""

    def test_brz_lookup_is_case_insensitive(self):
        token = registry.lookup_regional("brz", POLYGON)
        assert token is not None
        assert token.address == "0x4eD141110F6EeeAbA9A1df36d8c26f684d2475Dc"
        assert token.decimals == 18
        assert token.name == "Brazilian Digital Token"

    def test_brz_chain_order(self):
        assert registry.chains_for("BRZ") == [137, 8453, 43114, 10, 1]

    def test_brz_not_on_arbitrum(self):
        assert registry.lookup_regional("BRZ", ARBITRUM) is None

    def test_unknown_regional_symbol(self):
        assert registry.lookup_regional("XYZ", POLYGON) is None
        assert registry.chains_for("XYZ") == []
        assert not registry.is_regional("XYZ")

    def test_native_assets(self):
        matic = registry.lookup_native(POLYGON)
        assert matic.symbol == "MATIC"
        assert matic.address == ""
        assert matic.is_native
        assert registry.lookup_native(ETHEREUM).symbol == "ETH"

    def test_native_symbol_match(self):
        assert registry.is_native_symbol("eth", BASE)
        assert not registry.is_native_symbol("MATIC", ETHEREUM)

    def test_regional_summary(self):
        assert registry.regional_summary() == {
            "BRZ": "Brazilian Digital Token - Available on Polygon, Base, Avalanche, Optimism, Ethereum",
        }

    def test_token_example_prefers_requested_chain(self):
        assert registry.token_example(BASE).chain_id == BASE
        assert registry.token_example(ARBITRUM).chain_id == POLYGON
