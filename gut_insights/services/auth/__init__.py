"""
Authentication service package.

Provides pluggable authentication; currently local password-based auth with
database-backed session cookies.

Usage:
    from gut_insights.services.auth import get_auth_provider
    from gut_insights.services.auth.dependencies import get_current_user

    # In routes:
    @router.post("/protected")
    async def protected_route(user: User = Depends(get_current_user)):
        ...
"""
from gut_insights.services.auth.base import AuthProvider
from gut_insights.services.auth.local_provider import local_auth_provider


def get_auth_provider() -> AuthProvider:
    """Factory function to get the configured auth provider."""
    return local_auth_provider


__all__ = [
    "AuthProvider",
    "get_auth_provider",
    "local_auth_provider",
]
