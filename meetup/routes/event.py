from typing import Optional

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from meetup.db.database import getDb
from meetup.db.eventUtils import getEventDetails, listEvents, requestAttendance
from meetup.models.event import Event
from meetup.models.user import User
from meetup.routes.guards import eventExists, requireAuth, requireEventMember
from meetup.schemas.event import (
    AttendanceResponse,
    EventDetailGroup,
    EventDetailResponse,
    EventDetailVenue,
    EventGroupSummary,
    EventListItem,
    EventListResponse,
    EventVenueSummary,
)
from meetup.schemas.group import ImageResponse

router = APIRouter(prefix="/events", tags=["Event"])


def toEventListItem(row) -> EventListItem:
    event, numAttending, previewImage = row
    venue: Optional[EventVenueSummary] = None
    if event.venue is not None:
        venue = EventVenueSummary(id=event.venue.id, city=event.venue.city, state=event.venue.state)

    return EventListItem(
        id=event.id,
        groupId=event.group_id,
        venueId=event.venue_id,
        name=event.name,
        startDate=event.start_date,
        numAttending=numAttending or 0,
        previewImage=previewImage,
        Group=EventGroupSummary(
            id=event.group.id,
            name=event.group.name,
            city=event.group.city,
            state=event.group.state,
        ),
        Venue=venue,
    )


def toEventDetail(event: Event, numAttending: int) -> EventDetailResponse:
    venue = None
    if event.venue is not None:
        venue = EventDetailVenue(
            id=event.venue.id,
            address=event.venue.address,
            city=event.venue.city,
            state=event.venue.state,
            lat=event.venue.lat,
            lng=event.venue.lng,
        )

    return EventDetailResponse(
        id=event.id,
        groupId=event.group_id,
        venueId=event.venue_id,
        name=event.name,
        description=event.description,
        capacity=event.capacity,
        price=event.price,
        startDate=event.start_date,
        numAttending=numAttending or 0,
        Group=EventDetailGroup(
            id=event.group.id,
            name=event.group.name,
            private=event.group.private,
            city=event.group.city,
            state=event.group.state,
        ),
        Venue=venue,
        EventImages=[
            ImageResponse(id=image.id, url=image.url, preview=image.preview)
            for image in event.images
        ],
    )


@router.get("", response_model=EventListResponse)
def getAllEvents(db: Session = Depends(getDb)):
    return EventListResponse(Events=[toEventListItem(row) for row in listEvents(db)])


@router.get("/{eventId}", response_model=EventDetailResponse)
def getEvent(event: Event = Depends(eventExists), db: Session = Depends(getDb)):
    """Single event, including description, capacity and price."""
    details = getEventDetails(db, event.id)
    return toEventDetail(details["event"], details["numAttending"])


@router.post("/{eventId}/attendance", response_model=AttendanceResponse)
def requestEventAttendance(
    user: User = Depends(requireAuth),
    event: Event = Depends(requireEventMember),
    db: Session = Depends(getDb),
):
    """Ask to attend an event; only members of the event's group may ask."""
    attendance = requestAttendance(db, event, user.id)
    return AttendanceResponse(eventId=event.id, userId=user.id, status=attendance.status)
