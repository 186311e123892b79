"""API routers mounted under the account prefix."""

from marketplace_auth.presentation.routers.api.v1.account import router as account_router

__all__ = ["account_router"]
