"""Web boundary layer for cross-chain swaps.

PRINCIPLES:
1. This layer prepares swap transactions; it never signs or broadcasts
   them. The user's wallet executes what the API returns.

2. Validation and token resolution happen here, before any call to the
   routing engine.
"""

__all__ = [
    "contracts",
    "services",
    "controllers",
]
