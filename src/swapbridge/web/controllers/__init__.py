"""HTTP controllers for web API endpoints.

All operations are read-only or prepare data for client-side signing.
"""

from swapbridge.web.controllers.swaps import router as swaps_router
from swapbridge.web.controllers.tokens import router as tokens_router
from swapbridge.web.controllers.regional_tokens import router as regional_tokens_router

__all__ = [
    "swaps_router",
    "tokens_router",
    "regional_tokens_router",
]
