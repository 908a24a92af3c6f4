from typing import List

from pydantic import BaseModel, Field

from meetup.schemas.validation import RequestBody


class VenueRequest(RequestBody):
    address: str = Field(min_length=1)
    city: str = Field(min_length=1)
    state: str = Field(min_length=1)

    # Bounds are exclusive
    lat: float = Field(gt=-89, lt=91)
    lng: float = Field(gt=-179, lt=181)

    messages = {
        "address": "Street address is required",
        "city": "City is required",
        "state": "State is required",
        "lat": "Latitude is not valid",
        "lng": "Longitude is not valid",
    }

    class Config:
        json_schema_extra = {
            "example": {
                "address": "123 Disney Lane",
                "city": "New York",
                "state": "NY",
                "lat": 37.7645358,
                "lng": -122.4730327,
            }
        }


class VenueResponse(BaseModel):
    id: int
    groupId: int
    address: str
    city: str
    state: str
    lat: float
    lng: float


class VenueListResponse(BaseModel):
    Venues: List[VenueResponse]
