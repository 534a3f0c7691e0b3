"""Web services for swap preparation and token listings.

These services MUST NOT:
- Access private keys or seed phrases
- Sign or broadcast transactions

These services CAN:
- Query the routing engine for routes, quotes and its token catalog
- Prepare unsigned transactions for client signing
"""

from swapbridge.web.services.swap_service import SwapService
from swapbridge.web.services.token_service import TokenService

__all__ = [
    "SwapService",
    "TokenService",
]
