"""Abstract base class for authentication providers."""
from abc import ABC, abstractmethod
from typing import Optional

from fastapi import Request
from sqlalchemy.orm import Session as DBSession

from gut_insights.models.user import User


class AuthProvider(ABC):
    """
    Abstract authentication provider interface.

    Routes only depend on this interface, so the principal can come from a
    different identity backend without touching the analysis endpoints.
    """

    @abstractmethod
    async def authenticate(self, db: DBSession, email: str, password: str) -> Optional[User]:
        """
        Authenticate user with email and password.

        Returns User if credentials are valid, None otherwise.
        """
        pass

    @abstractmethod
    async def create_user(
        self,
        db: DBSession,
        email: str,
        password: str,
        is_admin: bool = False
    ) -> User:
        """
        Create a new user with the given credentials.

        Returns the created User.
        """
        pass

    @abstractmethod
    async def get_user_from_request(self, db: DBSession, request: Request) -> Optional[User]:
        """
        Extract and validate user from request (session cookie, token, etc).

        Returns User if authenticated, None otherwise.
        """
        pass

    @abstractmethod
    async def create_session(self, db: DBSession, user: User, request: Request) -> str:
        """
        Create a new session for the user.

        Returns the session token to be stored in cookie.
        """
        pass

    @abstractmethod
    async def revoke_session(self, db: DBSession, token: str) -> bool:
        """
        Revoke/invalidate a session by its token.

        Returns True if session was revoked, False if not found.
        """
        pass
