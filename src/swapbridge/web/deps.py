"""FastAPI dependencies.

Services are built once in ``create_app`` and stored on ``app.state``.
"""

from fastapi import Request

from swapbridge.web.services.swap_service import SwapService
from swapbridge.web.services.token_service import TokenService


def get_swap_service(request: Request) -> SwapService:
    return request.app.state.swap_service


def get_token_service(request: Request) -> TokenService:
    return request.app.state.token_service
