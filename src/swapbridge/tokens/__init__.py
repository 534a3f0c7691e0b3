"""Token types and the static token registry."""

from swapbridge.tokens.models import NATIVE_ADDRESS, Token, TokenAmount, format_significant

__all__ = [
    "NATIVE_ADDRESS",
    "Token",
    "TokenAmount",
    "format_significant",
]
