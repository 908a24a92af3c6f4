"""
Request guards shared by the routers.

Route handlers list these as dependencies in the order they must fire:
authentication (401), then resource lookup (404), then capability (403),
then body validation (400). Each guard hands the loaded row on to the next,
so handlers receive the principal and resources explicitly.
"""
from typing import Optional, Type

from fastapi import Cookie, Depends, Path, Request
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from pydantic import ValidationError as PydanticValidationError
from sqlalchemy.orm import Session

from meetup.db.authUtils import decodeToken, isMember, isOrganizer, isOrganizerOrCoHost
from meetup.db.database import getDb
from meetup.db.eventUtils import getEvent
from meetup.db.groupUtils import getGroup
from meetup.errors import AuthorizationError, NotFoundError, UnauthenticatedError, ValidationError
from meetup.models.event import Event
from meetup.models.group import Group
from meetup.models.user import User
from meetup.schemas.validation import MAX_ID, RequestBody

bearerScheme = HTTPBearer(auto_error=False)


def restoreUser(
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(bearerScheme),
    token: Optional[str] = Cookie(default=None),
    db: Session = Depends(getDb),
) -> Optional[User]:
    """The user behind the bearer token (or `token` cookie), if any"""
    rawToken = credentials.credentials if credentials else token
    if not rawToken:
        return None

    userId = decodeToken(rawToken)
    if userId is None:
        return None

    return db.query(User).filter(User.id == userId).first()


def requireAuth(user: Optional[User] = Depends(restoreUser)) -> User:
    if user is None:
        raise UnauthenticatedError("Authentication required")
    return user


def groupExists(groupId: int = Path(ge=1, le=MAX_ID), db: Session = Depends(getDb)) -> Group:
    group = getGroup(db, groupId)
    if not group:
        raise NotFoundError.forResource("Group")
    return group


def eventExists(eventId: int = Path(ge=1, le=MAX_ID), db: Session = Depends(getDb)) -> Event:
    event = getEvent(db, eventId)
    if not event:
        raise NotFoundError.forResource("Event")
    return event


def requireOrganizer(
    user: User = Depends(requireAuth),
    group: Group = Depends(groupExists),
) -> Group:
    if not isOrganizer(user.id, group):
        raise AuthorizationError("Only the group organizer may do this")
    return group


def requireOrgOrCoHost(
    user: User = Depends(requireAuth),
    group: Group = Depends(groupExists),
    db: Session = Depends(getDb),
) -> Group:
    if not isOrganizerOrCoHost(db, user.id, group):
        raise AuthorizationError("Only the group organizer or a co-host may do this")
    return group


def requireEventMember(
    user: User = Depends(requireAuth),
    event: Event = Depends(eventExists),
    db: Session = Depends(getDb),
) -> Event:
    """The event's group organizer or one of its (non-pending) members"""
    group = event.group
    if not (isOrganizer(user.id, group) or isMember(db, user.id, group.id)):
        raise AuthorizationError("Only members of the group may do this")
    return event


def validBody(model: Type[RequestBody]):
    """Dependency that parses the JSON body into `model` or fails with per-field errors."""

    async def dependency(request: Request) -> RequestBody:
        try:
            data = await request.json()
        except ValueError:
            raise ValidationError(errors={"body": "Request body must be valid JSON"})

        try:
            return model.model_validate(data)
        except PydanticValidationError as exc:
            raise ValidationError(errors=model.fieldErrors(exc))

    return dependency
