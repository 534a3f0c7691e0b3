"""Static registry of native assets and Brazilian (regional) stablecoins.

Addresses of the main Brazilian stablecoins on each supported network,
plus the native asset of every chain. This module is read-only data;
lookups never touch the network.
"""

from typing import Optional

from swapbridge.chains import ARBITRUM, AVALANCHE, BASE, ETHEREUM, OPTIMISM, POLYGON, get_chain_name
from swapbridge.tokens.models import NATIVE_ADDRESS, Token

ETH_ICON = "https://tokens.1inch.io/0xeeeeeeeeeeeeeeeeeeeeeeeeeeeeeeeeeeeeeeee.png"
MATIC_ICON = "https://tokens.1inch.io/0x7d1afa7b718fb893db30a3abc0cfc608aacfebb0.png"
AVAX_ICON = "https://tokens.1inch.io/0xb31f66aa3c1e785363f0875a1b74e27b85fd66c7.png"

TOKEN_ICONS = {
    "BRZ": "https://assets.coingecko.com/coins/images/8472/standard/MicrosoftTeams-image_%286%29.png?1696508657",
}

TOKEN_NAMES = {
    "BRZ": "Brazilian Digital Token",
}

DEFAULT_EXAMPLE_SYMBOL = "BRZ"
DEFAULT_EXAMPLE_CHAIN = POLYGON


def _native(chain_id: int, symbol: str, name: str, icon: str) -> Token:
    return Token(
        chain_id=chain_id,
        address=NATIVE_ADDRESS,
        symbol=symbol,
        decimals=18,
        name=name,
        is_native=True,
        icon=icon,
    )


def _brz(chain_id: int, address: str) -> Token:
    return Token(
        chain_id=chain_id,
        address=address,
        symbol="BRZ",
        decimals=18,
        name=TOKEN_NAMES["BRZ"],
        icon=TOKEN_ICONS["BRZ"],
    )


# Native asset per chain
NATIVE_TOKENS: dict[int, Token] = {
    ETHEREUM: _native(ETHEREUM, "ETH", "Ethereum", ETH_ICON),
    BASE: _native(BASE, "ETH", "Ethereum", ETH_ICON),
    POLYGON: _native(POLYGON, "MATIC", "Polygon", MATIC_ICON),
    ARBITRUM: _native(ARBITRUM, "ETH", "Ethereum", ETH_ICON),
    OPTIMISM: _native(OPTIMISM, "ETH", "Ethereum", ETH_ICON),
    AVALANCHE: _native(AVALANCHE, "AVAX", "Avalanche", AVAX_ICON),
}

# symbol -> chain_id -> token; chain order is the order networks are listed in
REGIONAL_TOKENS: dict[str, dict[int, Token]] = {
    "BRZ": {
        POLYGON: _brz(POLYGON, "0x4eD141110F6EeeAbA9A1df36d8c26f684d2475Dc"),
        BASE: _brz(BASE, "0xE9185Ee218cae427aF7B9764A011bb89FeA761B4"),
        AVALANCHE: _brz(AVALANCHE, "0x05539F021b66Fd01d1FB1ff8E167CdD09bf7c2D0"),
        OPTIMISM: _brz(OPTIMISM, "0xE9185Ee218cae427aF7B9764A011bb89FeA761B4"),
        ETHEREUM: _brz(ETHEREUM, "0x01d33fd36ec67c6ada32cf36b31e88ee190b1839"),
    },
}


def lookup_regional(symbol: str, chain_id: int) -> Optional[Token]:
    """Get a regional stablecoin by symbol (case-insensitive) on a chain."""
    return REGIONAL_TOKENS.get(symbol.upper(), {}).get(chain_id)


def lookup_native(chain_id: int) -> Optional[Token]:
    """Get the native asset of a chain."""
    return NATIVE_TOKENS.get(chain_id)


def is_native_symbol(symbol: str, chain_id: int) -> bool:
    """Check whether ``symbol`` names the native asset of ``chain_id``."""
    native = NATIVE_TOKENS.get(chain_id)
    return native is not None and native.symbol.lower() == symbol.lower()


def is_regional(symbol: str) -> bool:
    return symbol.upper() in REGIONAL_TOKENS


def chains_for(symbol: str) -> list[int]:
    """List every chain a regional token is available on, in registry order."""
    return list(REGIONAL_TOKENS.get(symbol.upper(), {}).keys())


def regional_symbols() -> list[str]:
    return list(REGIONAL_TOKENS.keys())


def all_regional() -> dict[str, dict[int, Token]]:
    return REGIONAL_TOKENS


def token_example(chain_id: int = DEFAULT_EXAMPLE_CHAIN) -> Token:
    """A known-good token to show callers how a custom definition looks.

    BRZ on the requested chain when available, otherwise BRZ on Polygon.
    """
    return (
        lookup_regional(DEFAULT_EXAMPLE_SYMBOL, chain_id)
        or REGIONAL_TOKENS[DEFAULT_EXAMPLE_SYMBOL][DEFAULT_EXAMPLE_CHAIN]
    )


def regional_summary() -> dict[str, str]:
    """One line per regional token: its name and the networks it is on."""
    return {
        symbol: f"{TOKEN_NAMES.get(symbol, symbol)} - Available on "
        + ", ".join(get_chain_name(chain_id) for chain_id in by_chain)
        for symbol, by_chain in REGIONAL_TOKENS.items()
    }
