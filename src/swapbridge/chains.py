"""Chains supported by the cross-chain routing engine.

Chain IDs follow the routing engine's numbering. TON uses the engine's
synthetic id 85918 since it is not an EVM chain.
"""

from dataclasses import dataclass
from typing import Optional


@dataclass(frozen=True)
class ChainConfig:
    """Configuration for a blockchain."""

    key: str  # e.g. "POLYGON"
    name: str
    chain_id: int
    is_evm: bool = True
    rpc_hint: Optional[str] = None  # substring used to recognise the chain's RPC URLs


ETHEREUM = 1
OPTIMISM = 10
BSC = 56
POLYGON = 137
BASE = 8453
ARBITRUM = 42161
AVALANCHE = 43114
TON = 85918


# ======================
# Chain Configurations
# ======================

CHAINS: dict[int, ChainConfig] = {
    POLYGON: ChainConfig(key="POLYGON", name="Polygon", chain_id=POLYGON, rpc_hint="polygon"),
    TON: ChainConfig(key="TON", name="TON", chain_id=TON, is_evm=False),
    ETHEREUM: ChainConfig(key="ETHEREUM", name="Ethereum", chain_id=ETHEREUM, rpc_hint="ethereum"),
    BSC: ChainConfig(key="BSC", name="BSC", chain_id=BSC, rpc_hint="bsc"),
    ARBITRUM: ChainConfig(key="ARBITRUM", name="Arbitrum", chain_id=ARBITRUM, rpc_hint="arbitrum"),
    OPTIMISM: ChainConfig(key="OPTIMISM", name="Optimism", chain_id=OPTIMISM, rpc_hint="optimism"),
    AVALANCHE: ChainConfig(key="AVALANCHE", name="Avalanche", chain_id=AVALANCHE, rpc_hint="avax"),
    BASE: ChainConfig(key="BASE", name="Base", chain_id=BASE, rpc_hint="base"),
}

# Chains exposed by /supported-chains (BSC is named but not offered for swaps)
SUPPORTED_CHAINS: dict[str, int] = {
    "ETHEREUM": ETHEREUM,
    "POLYGON": POLYGON,
    "TON": TON,
    "ARBITRUM": ARBITRUM,
    "OPTIMISM": OPTIMISM,
    "AVALANCHE": AVALANCHE,
    "BASE": BASE,
}


def get_chain_name(chain_id: int) -> str:
    """Get display name for a chain, or 'Unknown'."""
    chain = CHAINS.get(chain_id)
    return chain.name if chain else "Unknown"


def infer_chain_from_url(url: str) -> Optional[ChainConfig]:
    """Guess which chain an RPC URL belongs to.

    Generic "mainnet" URLs are treated as Ethereum.
    """
    if not url:
        return None
    lowered = url.lower()
    for chain in (CHAINS[BASE], CHAINS[POLYGON], CHAINS[ETHEREUM]):
        if chain.rpc_hint and chain.rpc_hint in lowered:
            return chain
    if "mainnet" in lowered:
        return CHAINS[ETHEREUM]
    for chain in CHAINS.values():
        if chain.rpc_hint and chain.rpc_hint in lowered:
            return chain
    return None
