"""
Authorization predicates over groups.

Each predicate answers one question about an already-loaded principal and
group; turning a "no" into a 403 (or a missing row into a 404) is left to
the route guards.
"""
import time
from typing import Iterable, Optional

import bcrypt
import jwt
from sqlalchemy.orm import Session

from meetup.models.group import Group
from meetup.models.membership import CO_HOST, MEMBER, Membership
from meetup.models.user import User
from meetup.settings import settings

TOKEN_ALGORITHM = "HS256"


def hashPassword(password: str) -> str:
    return bcrypt.hashpw(password.encode("utf-8"), bcrypt.gensalt()).decode("utf-8")


def checkPassword(password: str, hashedPassword: str) -> bool:
    try:
        return bcrypt.checkpw(password.encode("utf-8"), hashedPassword.encode("utf-8"))
    except ValueError:
        # Malformed stored hash
        return False


def createToken(user: User) -> str:
    now = int(time.time())
    payload = {"sub": str(user.id), "iat": now, "exp": now + settings.jwt_expires_in}
    return jwt.encode(payload, settings.secret_key, algorithm=TOKEN_ALGORITHM)


def decodeToken(token: str) -> Optional[int]:
    """Return the user id carried by a token, or None if it does not verify."""
    try:
        payload = jwt.decode(
            token,
            settings.secret_key,
            algorithms=[TOKEN_ALGORITHM],
            options={"require": ["sub", "exp", "iat"]},
        )
        return int(payload["sub"])
    except (jwt.InvalidTokenError, ValueError):
        return None


def isOrganizer(userId: int, group: Group) -> bool:
    return group.organizer_id == userId


def hasMembershipStatus(db: Session, userId: int, groupId: int, statuses: Iterable[str]) -> bool:
    return (
        db.query(Membership.id)
        .filter(
            Membership.group_id == groupId,
            Membership.user_id == userId,
            Membership.status.in_(list(statuses)),
        )
        .first()
        is not None
    )


def isCoHost(db: Session, userId: int, groupId: int) -> bool:
    return hasMembershipStatus(db, userId, groupId, [CO_HOST])


def isOrganizerOrCoHost(db: Session, userId: int, group: Group) -> bool:
    return isOrganizer(userId, group) or isCoHost(db, userId, group.id)


def isMember(db: Session, userId: int, groupId: int) -> bool:
    """Co-hosts and members count; pending requests do not."""
    return hasMembershipStatus(db, userId, groupId, [CO_HOST, MEMBER])
