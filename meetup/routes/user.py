import logging

from fastapi import APIRouter, Depends, Response
from sqlalchemy import or_
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from meetup.db.authUtils import createToken, hashPassword
from meetup.db.database import getDb
from meetup.errors import ValidationError
from meetup.models.user import User
from meetup.routes.guards import validBody
from meetup.routes.session import setTokenCookie, toSessionUser
from meetup.schemas.user import SessionResponse, SignupRequest

router = APIRouter(prefix="/users", tags=["User"])

logger = logging.getLogger("meetup.routes.user")


def duplicateErrors(db: Session, email: str, username: str) -> dict:
    errors = {}
    taken = db.query(User).filter(or_(User.email == email, User.username == username)).all()
    for user in taken:
        if user.email == email:
            errors["email"] = "User with that email already exists"
        if user.username == username:
            errors["username"] = "User with that username already exists"
    return errors


# ============================================
# SIGN UP
# ============================================

@router.post("", response_model=SessionResponse)
def signup(
    response: Response,
    payload: SignupRequest = Depends(validBody(SignupRequest)),
    db: Session = Depends(getDb),
):
    """
    Register a user and log them in.
    """
    errors = duplicateErrors(db, payload.email, payload.username)
    if errors:
        raise ValidationError("User already exists", errors=errors, title="User already exists")

    try:
        user = User(
            first_name=payload.firstName,
            last_name=payload.lastName,
            email=payload.email,
            username=payload.username,
            hashed_password=hashPassword(payload.password),
        )
        db.add(user)
        db.commit()
        db.refresh(user)
    except IntegrityError:
        # Lost a race with a concurrent signup
        db.rollback()
        raise ValidationError(
            "User already exists",
            errors=duplicateErrors(db, payload.email, payload.username),
            title="User already exists",
        )

    logger.info("user signed up", extra={"user_id": user.id})

    token = createToken(user)
    setTokenCookie(response, token)
    return SessionResponse(user=toSessionUser(user), token=token)
