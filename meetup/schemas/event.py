from datetime import datetime, timezone
from typing import List, Optional

from pydantic import BaseModel, Field, field_validator

from meetup.schemas.group import ImageResponse
from meetup.schemas.validation import MAX_ID, RequestBody


class EventRequest(RequestBody):
    venueId: Optional[int] = Field(default=None, ge=1, le=MAX_ID)
    name: str = Field(min_length=5)
    description: str = Field(min_length=1)
    capacity: int = Field(ge=0, le=MAX_ID)
    price: float = Field(ge=0)
    startDate: datetime

    messages = {
        "venueId": "Venue does not exist",
        "name": "Name must be at least 5 characters",
        "description": "Description is required",
        "capacity": "Capacity must be an integer",
        "price": "Price is invalid",
        "startDate": "Start date must be in the future",
    }

    @field_validator("startDate")
    @classmethod
    def startsInFuture(cls, value: datetime) -> datetime:
        if value.tzinfo is None:
            value = value.replace(tzinfo=timezone.utc)
        if value <= datetime.now(timezone.utc):
            raise ValueError("Start date must be in the future")
        # Stored as naive UTC
        return value.astimezone(timezone.utc).replace(tzinfo=None)

    class Config:
        json_schema_extra = {
            "example": {
                "venueId": 1,
                "name": "Tennis Group First Meet and Greet",
                "description": "First meet and greet event for the evening tennis on the water group!",
                "capacity": 10,
                "price": 18.50,
                "startDate": "2030-11-19T20:00:00",
            }
        }


class EventGroupSummary(BaseModel):
    id: int
    name: str
    city: str
    state: str


class EventVenueSummary(BaseModel):
    id: int
    city: str
    state: str


class EventListItem(BaseModel):
    """List view: description, capacity and price are left out"""
    id: int
    groupId: int
    venueId: Optional[int] = None
    name: str
    startDate: datetime
    numAttending: int
    previewImage: Optional[str] = None
    Group: EventGroupSummary
    Venue: Optional[EventVenueSummary] = None


class EventListResponse(BaseModel):
    Events: List[EventListItem]


class EventTimelineResponse(BaseModel):
    upcomingEvents: List[EventListItem]
    pastEvents: List[EventListItem]


class EventDetailGroup(EventGroupSummary):
    private: bool


class EventDetailVenue(BaseModel):
    id: int
    address: str
    city: str
    state: str
    lat: float
    lng: float


class EventDetailResponse(BaseModel):
    id: int
    groupId: int
    venueId: Optional[int] = None
    name: str
    description: str
    capacity: int
    price: float
    startDate: datetime
    numAttending: int
    Group: EventDetailGroup
    Venue: Optional[EventDetailVenue] = None
    EventImages: List[ImageResponse]


class AttendanceResponse(BaseModel):
    eventId: int
    userId: int
    status: str
