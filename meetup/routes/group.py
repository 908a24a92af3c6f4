from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from meetup.db.authUtils import isOrganizerOrCoHost
from meetup.db.database import getDb
from meetup.db.eventUtils import createEvent, listEvents, partitionEvents
from meetup.db.groupUtils import (
    addGroupImage,
    createGroup,
    createVenue,
    deleteGroup,
    getGroupDetails,
    listGroups,
    listMembers,
    listUserGroups,
    listVenues,
    requestMembership,
    updateGroup,
)
from meetup.models.group import Group
from meetup.models.user import User
from meetup.routes.event import toEventDetail, toEventListItem
from meetup.routes.guards import (
    groupExists,
    requireAuth,
    requireOrganizer,
    requireOrgOrCoHost,
    validBody,
)
from meetup.schemas.event import (
    EventDetailResponse,
    EventListResponse,
    EventRequest,
    EventTimelineResponse,
)
from meetup.schemas.group import (
    GroupCreateRequest,
    GroupDetailResponse,
    GroupListItem,
    GroupListResponse,
    GroupRequest,
    GroupResponse,
    ImageRequest,
    ImageResponse,
    MemberListResponse,
    MemberResponse,
    MembershipResponse,
    MessageResponse,
)
from meetup.schemas.user import UserSummary
from meetup.schemas.venue import VenueListResponse, VenueRequest, VenueResponse

router = APIRouter(prefix="/groups", tags=["Group"])


def toGroupResponse(group: Group) -> GroupResponse:
    return GroupResponse(
        id=group.id,
        organizerId=group.organizer_id,
        name=group.name,
        about=group.about,
        type=group.type,
        private=group.private,
        city=group.city,
        state=group.state,
        createdAt=group.created_at,
        updatedAt=group.updated_at,
    )


def toGroupListItem(row) -> GroupListItem:
    group, numMembers, previewImage = row
    return GroupListItem(
        **toGroupResponse(group).model_dump(),
        numMembers=numMembers or 0,
        previewImage=previewImage,
    )


def toVenueResponse(venue) -> VenueResponse:
    return VenueResponse(
        id=venue.id,
        groupId=venue.group_id,
        address=venue.address,
        city=venue.city,
        state=venue.state,
        lat=venue.lat,
        lng=venue.lng,
    )


def groupFields(payload: GroupRequest) -> dict:
    return {
        "name": payload.name,
        "about": payload.about,
        "type": payload.type,
        "private": payload.private,
        "city": payload.city,
        "state": payload.state,
    }


@router.get("", response_model=GroupListResponse)
def getAllGroups(db: Session = Depends(getDb)):
    """
    All groups with their member count and preview image url.
    """
    return GroupListResponse(Groups=[toGroupListItem(row) for row in listGroups(db)])


@router.get("/current", response_model=GroupListResponse)
def getCurrentUserGroups(user: User = Depends(requireAuth), db: Session = Depends(getDb)):
    """
    Groups the current user organizes or belongs to.
    """
    return GroupListResponse(Groups=[toGroupListItem(row) for row in listUserGroups(db, user.id)])


@router.get("/{groupId}", response_model=GroupDetailResponse)
def getGroup(group: Group = Depends(groupExists), db: Session = Depends(getDb)):
    """
    Group details including images, organizer, venues and member count.
    """
    details = getGroupDetails(db, group.id)
    group = details["group"]

    return GroupDetailResponse(
        **toGroupResponse(group).model_dump(),
        numMembers=details["numMembers"] or 0,
        GroupImages=[
            ImageResponse(id=image.id, url=image.url, preview=image.preview)
            for image in group.images
        ],
        Organizer=UserSummary(
            id=group.organizer.id,
            firstName=group.organizer.first_name,
            lastName=group.organizer.last_name,
        ),
        Venues=[toVenueResponse(venue) for venue in group.venues],
    )


@router.post("", response_model=GroupResponse)
def create(
    user: User = Depends(requireAuth),
    payload: GroupCreateRequest = Depends(validBody(GroupCreateRequest)),
    db: Session = Depends(getDb),
):
    """
    Create a group organized by the current user. An optional previewImage
    url is attached in the same transaction.
    """
    group = createGroup(db, user.id, groupFields(payload), previewImage=payload.previewImage)
    return toGroupResponse(group)


@router.post("/{groupId}/images", response_model=ImageResponse)
def addImage(
    group: Group = Depends(requireOrganizer),
    payload: ImageRequest = Depends(validBody(ImageRequest)),
    db: Session = Depends(getDb),
):
    image = addGroupImage(db, group, payload.url, payload.preview)
    return ImageResponse(id=image.id, url=image.url, preview=image.preview)


@router.put("/{groupId}", response_model=GroupResponse)
def update(
    group: Group = Depends(requireOrganizer),
    payload: GroupRequest = Depends(validBody(GroupRequest)),
    db: Session = Depends(getDb),
):
    """Full update; same body as create."""
    return toGroupResponse(updateGroup(db, group, groupFields(payload)))


@router.delete("/{groupId}", response_model=MessageResponse)
def delete(group: Group = Depends(requireOrganizer), db: Session = Depends(getDb)):
    """Delete a group together with everything that belongs to it."""
    deleteGroup(db, group)
    return MessageResponse(message="Successfully deleted")


@router.get("/{groupId}/venues", response_model=VenueListResponse)
def getVenues(group: Group = Depends(requireOrgOrCoHost), db: Session = Depends(getDb)):
    return VenueListResponse(Venues=[toVenueResponse(v) for v in listVenues(db, group.id)])


@router.post("/{groupId}/venues", response_model=VenueResponse)
def addVenue(
    group: Group = Depends(requireOrgOrCoHost),
    payload: VenueRequest = Depends(validBody(VenueRequest)),
    db: Session = Depends(getDb),
):
    venue = createVenue(db, group, payload.model_dump())
    return toVenueResponse(venue)


@router.get("/{groupId}/members", response_model=MemberListResponse)
def getMembers(
    user: User = Depends(requireAuth),
    group: Group = Depends(groupExists),
    db: Session = Depends(getDb),
):
    """
    Members of a group. Pending requests are only listed for the organizer
    and co-hosts.
    """
    includePending = isOrganizerOrCoHost(db, user.id, group)
    rows = listMembers(db, group.id, includePending)
    return MemberListResponse(
        Members=[
            MemberResponse(
                id=member.id,
                firstName=member.first_name,
                lastName=member.last_name,
                status=membership.status,
            )
            for membership, member in rows
        ]
    )


@router.post("/{groupId}/membership", response_model=MembershipResponse)
def requestGroupMembership(
    user: User = Depends(requireAuth),
    group: Group = Depends(groupExists),
    db: Session = Depends(getDb),
):
    membership = requestMembership(db, group, user.id)
    return MembershipResponse(memberId=user.id, groupId=group.id, status=membership.status)


@router.get("/{groupId}/events", response_model=EventListResponse)
def getGroupEvents(
    user: User = Depends(requireAuth),
    group: Group = Depends(groupExists),
    db: Session = Depends(getDb),
):
    """
    Events of a group with attendance counts and preview images.
    Description, capacity and price are left out of the listing.
    """
    return EventListResponse(Events=[toEventListItem(row) for row in listEvents(db, group.id)])


@router.get("/{groupId}/events/timeline", response_model=EventTimelineResponse)
def getGroupEventTimeline(
    user: User = Depends(requireAuth),
    group: Group = Depends(groupExists),
    db: Session = Depends(getDb),
):
    """
    The group's events split into upcoming and past, each ascending by start.
    """
    events = [toEventListItem(row) for row in listEvents(db, group.id)]
    upcoming, past = partitionEvents(events)
    return EventTimelineResponse(upcomingEvents=upcoming, pastEvents=past)


@router.post("/{groupId}/events", response_model=EventDetailResponse)
def addEvent(
    group: Group = Depends(requireOrgOrCoHost),
    payload: EventRequest = Depends(validBody(EventRequest)),
    db: Session = Depends(getDb),
):
    event = createEvent(
        db,
        group,
        {
            "venue_id": payload.venueId,
            "name": payload.name,
            "description": payload.description,
            "capacity": payload.capacity,
            "price": payload.price,
            "start_date": payload.startDate,
        },
    )
    return toEventDetail(event, numAttending=0)
