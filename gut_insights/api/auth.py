"""Authentication routes for login, logout and the current principal."""

from fastapi import APIRouter, Depends, HTTPException, Request, status
from fastapi.responses import JSONResponse
from pydantic import BaseModel
from sqlalchemy.orm import Session

from gut_insights.config import settings
from gut_insights.database import get_db
from gut_insights.models.user import User
from gut_insights.services.auth import get_auth_provider
from gut_insights.services.auth.dependencies import get_current_user


router = APIRouter(prefix="/auth", tags=["auth"])


class LoginRequest(BaseModel):
    email: str
    password: str


@router.post("/login")
async def login(
    request: Request,
    credentials: LoginRequest,
    db: Session = Depends(get_db),
):
    """Check credentials and set the session cookie."""
    auth_provider = get_auth_provider()
    user = await auth_provider.authenticate(db, credentials.email, credentials.password)

    if not user:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Invalid email or password",
        )

    token = await auth_provider.create_session(db, user, request)

    response = JSONResponse({"id": str(user.id), "email": user.email})
    response.set_cookie(
        key=settings.session_cookie_name,
        value=token,
        max_age=settings.session_max_age,
        httponly=True,
        samesite="lax",
        secure=settings.session_cookie_secure,
    )
    return response


@router.post("/logout")
async def logout(request: Request, db: Session = Depends(get_db)):
    """Revoke the session and clear the cookie."""
    auth_provider = get_auth_provider()

    token = request.cookies.get(settings.session_cookie_name)
    if token:
        await auth_provider.revoke_session(db, token)

    response = JSONResponse({"status": "logged_out"})
    response.delete_cookie(settings.session_cookie_name)
    return response


@router.get("/me")
async def me(user: User = Depends(get_current_user)):
    return {"id": str(user.id), "email": user.email, "is_admin": user.is_admin}
