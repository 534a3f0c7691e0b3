"""Token and chain information contracts."""

from typing import Optional

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

from swapbridge.tokens.models import Token


class TokenInfo(BaseModel):
    """Information about a token in the routing engine catalog."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    address: str = Field(..., description="Contract address ('' for native assets)")
    symbol: str = Field(..., description="Token symbol")
    decimals: int = Field(..., description="Token decimals")
    is_native: bool = Field(default=False, description="Whether this is the chain's native asset")
    is_synthetic: bool = Field(default=False, description="Whether this is a bridge-synthetic token")
    ton_address: Optional[str] = Field(None, description="TON address, for TON tokens")

    @classmethod
    def from_token(cls, token: Token) -> "TokenInfo":
        return cls(
            address=token.address,
            symbol=token.symbol,
            decimals=token.decimals,
            is_native=token.is_native,
            is_synthetic=token.is_synthetic,
            ton_address=token.ton_address,
        )


class TokenDefinition(BaseModel):
    """A complete token definition, usable as customTokenIn/customTokenOut."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    address: str
    symbol: str
    decimals: int
    chain_id: int
    name: str
    icon: Optional[str] = None
    is_native: bool = False

    @classmethod
    def from_token(cls, token: Token) -> "TokenDefinition":
        return cls(
            address=token.address,
            symbol=token.symbol,
            decimals=token.decimals,
            chain_id=token.chain_id,
            name=token.name,
            icon=token.icon,
            is_native=token.is_native,
        )


class NetworkTokens(BaseModel):
    """Tokens available on one network."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    chain_id: int
    tokens: list[TokenInfo] = Field(default_factory=list)


class SupportedChainsResponse(BaseModel):
    """Chains the routing engine can swap between."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    supported_chains: dict[str, int]
    message: str = "All supported blockchain networks"


class RegionalTokensResponse(BaseModel):
    """All regional stablecoins, keyed by symbol then chain ID."""

    description: str = "Brazilian stablecoins supported for cross-chain swaps"
    tokens: dict[str, dict[int, TokenDefinition]]
    usage: dict[str, str] = Field(
        default_factory=lambda: {
            "example": "Use these token addresses in 'customTokenIn' or 'customTokenOut' fields",
            "tip": "BRZ is available across multiple chains for optimal cross-chain routing",
        }
    )


class RegionalTokenNetworksResponse(BaseModel):
    """One regional stablecoin across every chain it is deployed on."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    symbol: str
    available_chains: list[int]
    networks: dict[int, TokenDefinition]
