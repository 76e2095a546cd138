"""FastAPI dependencies for authentication."""
from fastapi import Depends, HTTPException, Request, status
from sqlalchemy.orm import Session

from gut_insights.database import get_db
from gut_insights.models.user import User
from gut_insights.services.auth import get_auth_provider


async def get_current_user(
    request: Request,
    db: Session = Depends(get_db)
) -> User:
    """
    Get the currently authenticated user.

    Raises 401 if not authenticated, before any user data is read.
    """
    auth_provider = get_auth_provider()
    user = await auth_provider.get_user_from_request(db, request)

    if not user:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Not authenticated"
        )

    return user
