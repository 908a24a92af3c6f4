import logging
from typing import Optional

from fastapi import APIRouter, Depends, Response
from sqlalchemy import or_
from sqlalchemy.orm import Session

from meetup.db.authUtils import checkPassword, createToken
from meetup.db.database import getDb
from meetup.errors import UnauthenticatedError
from meetup.models.user import User
from meetup.routes.guards import restoreUser, validBody
from meetup.schemas.group import MessageResponse
from meetup.schemas.user import LoginRequest, SessionResponse, SessionUser
from meetup.settings import settings

router = APIRouter(prefix="/session", tags=["Session"])

logger = logging.getLogger("meetup.routes.session")

TOKEN_COOKIE = "token"


def toSessionUser(user: User) -> SessionUser:
    return SessionUser(
        id=user.id,
        firstName=user.first_name,
        lastName=user.last_name,
        email=user.email,
        username=user.username,
    )


def setTokenCookie(response: Response, token: str):
    response.set_cookie(
        key=TOKEN_COOKIE,
        value=token,
        max_age=settings.jwt_expires_in,
        httponly=True,
        secure=settings.is_production,
        samesite="lax" if not settings.is_production else "strict",
    )


@router.post("", response_model=SessionResponse)
def login(
    response: Response,
    payload: LoginRequest = Depends(validBody(LoginRequest)),
    db: Session = Depends(getDb),
):
    """Log in with an email or username and a password."""
    user = (
        db.query(User)
        .filter(or_(User.username == payload.credential, User.email == payload.credential))
        .first()
    )

    if not user or not checkPassword(payload.password, user.hashed_password):
        raise UnauthenticatedError(
            "Invalid credentials",
            errors={"credential": "The provided credentials were invalid."},
            title="Login failed",
        )

    logger.info("user logged in", extra={"user_id": user.id})

    token = createToken(user)
    setTokenCookie(response, token)
    return SessionResponse(user=toSessionUser(user), token=token)


@router.get("", response_model=SessionResponse)
def getSession(user: Optional[User] = Depends(restoreUser)):
    return SessionResponse(user=toSessionUser(user) if user else None)


@router.delete("", response_model=MessageResponse)
def logout(response: Response):
    response.delete_cookie(TOKEN_COOKIE)
    return MessageResponse(message="success")
