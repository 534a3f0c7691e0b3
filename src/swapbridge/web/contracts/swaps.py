"""Swap, quote and route request contracts.

Field names are camelCase on the wire (``fromChainId``, ``customTokenIn``...).
Slippage bounds are enforced by the swap parameter builder, not here, so
an out-of-range slippage is reported as InvalidParameters rather than a
schema error.
"""

from typing import Optional, Union

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

from swapbridge.tokens.models import Token
from swapbridge.tokens.resolver import create_custom_token


class CustomTokenDefinition(BaseModel):
    """A token fully specified by the caller."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    address: str = Field(default="", description="Token contract address ('' for native)")
    symbol: str = Field(..., min_length=1, description="Token symbol")
    decimals: int = Field(..., ge=0, le=255, description="Token decimals")
    chain_id: int = Field(..., description="Chain ID the token lives on")
    name: Optional[str] = Field(None, description="Full token name")

    def to_token(self) -> Token:
        return create_custom_token(
            address=self.address,
            symbol=self.symbol,
            decimals=self.decimals,
            chain_id=self.chain_id,
            name=self.name or "",
        )


class SwapRequest(BaseModel):
    """Request body shared by /quote and /swap."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    from_chain_id: int = Field(..., description="Source chain ID")
    to_chain_id: int = Field(..., description="Destination chain ID")
    token_in: Optional[str] = Field(None, description="Input token symbol or address")
    token_out: Optional[str] = Field(None, description="Output token symbol or address")
    amount: Optional[Union[str, int, float]] = Field(None, description="Human-readable input amount")

    from_address: Optional[str] = Field(None, alias="from", description="Sender wallet address")
    to_address: Optional[str] = Field(None, alias="to", description="Recipient wallet address")
    user_address: Optional[str] = Field(None, description="Fallback for from/to")

    slippage: Optional[int] = Field(None, description="Slippage in basis points (default 300, max 300)")
    select_mode: Optional[str] = Field(None, description="Aggregator mode (default best_return)")

    custom_token_in: Optional[CustomTokenDefinition] = None
    custom_token_out: Optional[CustomTokenDefinition] = None
    use_native_token_in: bool = Field(default=False, description="Swap from the source chain's native asset")
    use_native_token_out: bool = Field(default=False, description="Swap into the destination chain's native asset")

    @property
    def resolved_from(self) -> Optional[str]:
        return self.from_address or self.user_address

    @property
    def resolved_to(self) -> Optional[str]:
        return self.to_address or self.user_address


class RouteRequest(SwapRequest):
    """Request body for /route. The amount defaults to one token."""

    amount: Optional[Union[str, int, float]] = Field("1", description="Human-readable input amount")
