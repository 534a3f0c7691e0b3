"""Canonical token and amount types."""

from dataclasses import dataclass
from decimal import ROUND_HALF_UP, Decimal, InvalidOperation, localcontext
from typing import Optional, Union

from swapbridge.errors import InvalidParameters

NATIVE_ADDRESS = ""


@dataclass(frozen=True)
class Token:
    """A token on a specific chain.

    An empty address means the chain's native asset.
    """

    chain_id: int
    address: str
    symbol: str
    decimals: int
    name: str = ""
    is_native: bool = False
    is_synthetic: bool = False
    icon: Optional[str] = None
    ton_address: Optional[str] = None

    @property
    def identity(self) -> tuple[int, str]:
        """(chain_id, lowercased address) or (chain_id, "native")."""
        if not self.address:
            return (self.chain_id, "native")
        return (self.chain_id, self.address.lower())

    def same_as(self, other: "Token") -> bool:
        return self.identity == other.identity


def format_significant(value: Decimal, digits: int = 6) -> str:
    """Render a decimal with at most ``digits`` significant digits.

    Trailing zeros are trimmed, exponent notation is never used.
    """
    if value == 0:
        return "0"
    exponent = value.adjusted() - digits + 1
    quantized = value.quantize(Decimal(1).scaleb(exponent), rounding=ROUND_HALF_UP)
    text = format(quantized, "f")
    if "." in text:
        text = text.rstrip("0").rstrip(".")
    return text


def parse_human_amount(amount: Union[str, int, float, Decimal]) -> Decimal:
    """Parse a caller-supplied amount into a non-negative finite Decimal."""
    try:
        value = Decimal(str(amount).strip())
    except (InvalidOperation, ValueError):
        raise InvalidParameters(
            f"Invalid amount: {amount!r}",
            suggestion="Send the amount as a decimal string, e.g. \"10.5\".",
        )
    if not value.is_finite() or value < 0:
        raise InvalidParameters(
            f"Invalid amount: {amount!r}",
            suggestion="The amount must be a non-negative number.",
        )
    return value


@dataclass(frozen=True)
class TokenAmount:
    """An integral amount of a token in its smallest unit."""

    token: Token
    raw: int

    def __post_init__(self):
        if self.raw < 0:
            raise InvalidParameters(f"Token amount cannot be negative: {self.raw}")

    @classmethod
    def from_human(cls, token: Token, amount: Union[str, int, float, Decimal]) -> "TokenAmount":
        """Scale a human-readable amount to ``round(amount * 10**decimals)``."""
        value = parse_human_amount(amount)
        with localcontext() as ctx:
            ctx.prec = 80  # uint256 needs 78 digits
            raw = value.scaleb(token.decimals).to_integral_value(rounding=ROUND_HALF_UP)
        return cls(token=token, raw=int(raw))

    @property
    def value(self) -> Decimal:
        """Amount in whole-token units."""
        return Decimal(self.raw).scaleb(-self.token.decimals)

    def to_significant(self, digits: int = 6) -> str:
        return format_significant(self.value, digits)

    def __str__(self) -> str:
        return f"{self.to_significant()} {self.token.symbol}"
