import logging
from datetime import datetime, timezone

from sqlalchemy import func, select
from sqlalchemy.orm import Session, joinedload, selectinload

from meetup.errors import ValidationError
from meetup.models.attendance import ATTENDING, PENDING, Attendance
from meetup.models.event import Event
from meetup.models.eventImage import EventImage
from meetup.models.group import Group

logger = logging.getLogger("meetup.events")


def attendingCount():
    """Correlated count of attendances with status "attending" for the outer Event."""
    return (
        select(func.count(Attendance.id))
        .where(Attendance.event_id == Event.id, Attendance.status == ATTENDING)
        .correlate(Event)
        .scalar_subquery()
    )


def eventPreviewUrl():
    """Most recently attached preview image of the outer Event."""
    return (
        select(EventImage.url)
        .where(EventImage.event_id == Event.id, EventImage.preview.is_(True))
        .order_by(EventImage.id.desc())
        .limit(1)
        .correlate(Event)
        .scalar_subquery()
    )


def listEvents(db: Session, groupId: int = None):
    """
    Events as (event, numAttending, previewImage) rows, oldest first.
    Restricted to one group when groupId is given.
    """
    query = db.query(
        Event,
        attendingCount().label("numAttending"),
        eventPreviewUrl().label("previewImage"),
    ).options(joinedload(Event.group), joinedload(Event.venue))

    if groupId is not None:
        query = query.filter(Event.group_id == groupId)

    return query.order_by(Event.start_date, Event.id).all()


def getEvent(db: Session, eventId: int):
    return db.query(Event).filter(Event.id == eventId).first()


def getEventDetails(db: Session, eventId: int):
    row = (
        db.query(Event, attendingCount().label("numAttending"))
        .options(
            joinedload(Event.group),
            joinedload(Event.venue),
            selectinload(Event.images),
        )
        .filter(Event.id == eventId)
        .first()
    )
    if not row:
        return None

    event, numAttending = row
    return {"event": event, "numAttending": numAttending}


def createEvent(db: Session, group: Group, fields: dict):
    venueId = fields.get("venue_id")
    if venueId is not None and not any(v.id == venueId for v in group.venues):
        raise ValidationError(errors={"venueId": "Venue does not exist"})

    event = Event(group_id=group.id, **fields)
    db.add(event)
    db.commit()
    db.refresh(event)
    logger.info("event created", extra={"group_id": group.id, "event_id": event.id})
    return event


def requestAttendance(db: Session, event: Event, userId: int):
    existing = (
        db.query(Attendance)
        .filter(Attendance.event_id == event.id, Attendance.user_id == userId)
        .first()
    )
    if existing:
        message = (
            "User is already an attendee of the event"
            if existing.status == ATTENDING
            else "Attendance has already been requested"
        )
        raise ValidationError(message, errors={"message": message})

    attendance = Attendance(event_id=event.id, user_id=userId, status=PENDING)
    db.add(attendance)
    db.commit()
    db.refresh(attendance)
    logger.info("attendance requested", extra={"event_id": event.id, "user_id": userId})
    return attendance


def _asUtc(value: datetime) -> datetime:
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value.astimezone(timezone.utc)


def partitionEvents(events, now: datetime = None, key=lambda e: e.startDate):
    """
    Split events into (upcoming, past) around `now`.

    An event is past once `now` is strictly later than its start; one starting
    exactly at `now` is still upcoming. Both lists ascend by start time.
    Naive timestamps are read as UTC.
    """
    now = _asUtc(now or datetime.now(timezone.utc))

    ordered = sorted(events, key=lambda e: _asUtc(key(e)))
    upcoming = [e for e in ordered if not now > _asUtc(key(e))]
    past = [e for e in ordered if now > _asUtc(key(e))]
    return upcoming, past
