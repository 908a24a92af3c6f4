from datetime import datetime
from typing import List, Literal, Optional

from pydantic import BaseModel, Field

from meetup.schemas.user import UserSummary
from meetup.schemas.validation import RequestBody
from meetup.schemas.venue import VenueResponse


class GroupRequest(RequestBody):
    """Body for both create and full update"""
    name: str = Field(min_length=1, max_length=60)
    about: str = Field(min_length=50)
    type: Literal["Online", "In person"]
    private: bool
    city: str = Field(min_length=1)
    state: str = Field(min_length=1)

    messages = {
        "name": "Name must be 60 characters or less",
        "about": "About must be 50 characters or more",
        "type": "Type must be 'Online' or 'In person'",
        "private": "Private must be a boolean",
        "city": "City is required",
        "state": "State is required",
    }

    class Config:
        json_schema_extra = {
            "example": {
                "name": "Evening Tennis on the Water",
                "about": "Enjoy rounds of tennis with a tight-nit group of people on the water facing the Brooklyn Bridge. Singles or doubles.",
                "type": "In person",
                "private": True,
                "city": "New York",
                "state": "NY",
            }
        }


class GroupCreateRequest(GroupRequest):
    # Optional preview image written in the same transaction as the group
    previewImage: Optional[str] = Field(default=None, min_length=1)

    messages = {**GroupRequest.messages, "previewImage": "Preview image must be a url"}


class ImageRequest(RequestBody):
    url: str = Field(min_length=1)
    preview: bool

    messages = {
        "url": "Url is required",
        "preview": "Preview must be a boolean",
    }


class ImageResponse(BaseModel):
    id: int
    url: str
    preview: bool


class GroupResponse(BaseModel):
    id: int
    organizerId: int
    name: str
    about: str
    type: str
    private: bool
    city: str
    state: str
    createdAt: Optional[datetime] = None
    updatedAt: Optional[datetime] = None


class GroupListItem(GroupResponse):
    numMembers: int
    previewImage: Optional[str] = None


class GroupListResponse(BaseModel):
    Groups: List[GroupListItem]


class GroupDetailResponse(GroupResponse):
    numMembers: int
    GroupImages: List[ImageResponse]
    Organizer: UserSummary
    Venues: List[VenueResponse]


class MemberResponse(BaseModel):
    id: int
    firstName: str
    lastName: str
    status: str


class MemberListResponse(BaseModel):
    Members: List[MemberResponse]


class MembershipResponse(BaseModel):
    memberId: int
    groupId: int
    status: str


class MessageResponse(BaseModel):
    message: str
