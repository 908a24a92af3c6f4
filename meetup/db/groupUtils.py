import logging

from sqlalchemy import func, or_, select
from sqlalchemy.orm import Session, joinedload, selectinload

from meetup.errors import ValidationError
from meetup.models.group import Group
from meetup.models.groupImage import GroupImage
from meetup.models.membership import MEMBER, PENDING, Membership
from meetup.models.user import User
from meetup.models.venue import Venue

logger = logging.getLogger("meetup.groups")


def memberCount():
    """Correlated count of membership rows for the outer Group."""
    return (
        select(func.count(Membership.id))
        .where(Membership.group_id == Group.id)
        .correlate(Group)
        .scalar_subquery()
    )


def groupPreviewUrl():
    """
    Url of the group's preview image.

    When several images are flagged as preview the most recently attached
    one (highest id) wins.
    """
    return (
        select(GroupImage.url)
        .where(GroupImage.group_id == Group.id, GroupImage.preview.is_(True))
        .order_by(GroupImage.id.desc())
        .limit(1)
        .correlate(Group)
        .scalar_subquery()
    )


def _groupListing(db: Session):
    return db.query(
        Group,
        memberCount().label("numMembers"),
        groupPreviewUrl().label("previewImage"),
    )


def getGroup(db: Session, groupId: int):
    return db.query(Group).filter(Group.id == groupId).first()


def listGroups(db: Session):
    """All groups as (group, numMembers, previewImage) rows"""
    return _groupListing(db).order_by(Group.id).all()


def listUserGroups(db: Session, userId: int):
    """Groups the user organizes or holds any membership row in"""
    memberOf = select(Membership.group_id).where(Membership.user_id == userId)
    return (
        _groupListing(db)
        .filter(or_(Group.organizer_id == userId, Group.id.in_(memberOf)))
        .order_by(Group.id)
        .all()
    )


def getGroupDetails(db: Session, groupId: int):
    """Group with organizer, images and venues loaded, plus its member count"""
    row = (
        db.query(Group, memberCount().label("numMembers"))
        .options(
            joinedload(Group.organizer),
            selectinload(Group.images),
            selectinload(Group.venues),
        )
        .filter(Group.id == groupId)
        .first()
    )
    if not row:
        return None

    group, numMembers = row
    return {"group": group, "numMembers": numMembers}


def createGroup(db: Session, organizerId: int, fields: dict, previewImage: str = None):
    """
    Create a group and, when given, its preview image in one transaction.
    """
    try:
        group = Group(organizer_id=organizerId, **fields)
        db.add(group)
        db.flush()  # get group.id without commit

        if previewImage:
            db.add(GroupImage(group_id=group.id, url=previewImage, preview=True))

        db.commit()
    except Exception:
        db.rollback()
        raise

    db.refresh(group)
    logger.info("group created", extra={"group_id": group.id, "user_id": organizerId})
    return group


def updateGroup(db: Session, group: Group, fields: dict):
    for key, value in fields.items():
        setattr(group, key, value)
    db.commit()
    db.refresh(group)
    logger.info("group updated", extra={"group_id": group.id})
    return group


def deleteGroup(db: Session, group: Group):
    groupId = group.id
    db.delete(group)
    db.commit()
    logger.info("group deleted", extra={"group_id": groupId})


def addGroupImage(db: Session, group: Group, url: str, preview: bool):
    image = GroupImage(group_id=group.id, url=url, preview=preview)
    db.add(image)
    db.commit()
    db.refresh(image)
    return image


def listVenues(db: Session, groupId: int):
    return db.query(Venue).filter(Venue.group_id == groupId).order_by(Venue.id).all()


def createVenue(db: Session, group: Group, fields: dict):
    venue = Venue(group_id=group.id, **fields)
    db.add(venue)
    db.commit()
    db.refresh(venue)
    logger.info("venue created", extra={"group_id": group.id, "venue_id": venue.id})
    return venue


def listMembers(db: Session, groupId: int, includePending: bool):
    query = (
        db.query(Membership, User)
        .join(User, Membership.user_id == User.id)
        .filter(Membership.group_id == groupId)
    )
    if not includePending:
        query = query.filter(Membership.status != PENDING)
    return query.order_by(Membership.id).all()


def requestMembership(db: Session, group: Group, userId: int):
    if group.organizer_id == userId:
        raise ValidationError(
            "User is already a member of the group",
            errors={"message": "User is already a member of the group"},
        )

    existing = (
        db.query(Membership)
        .filter(Membership.group_id == group.id, Membership.user_id == userId)
        .first()
    )
    if existing:
        message = (
            "Membership has already been requested"
            if existing.status == PENDING
            else "User is already a member of the group"
        )
        raise ValidationError(message, errors={"message": message})

    membership = Membership(group_id=group.id, user_id=userId, status=PENDING)
    db.add(membership)
    db.commit()
    db.refresh(membership)
    logger.info("membership requested", extra={"group_id": group.id, "user_id": userId})
    return membership


def addMember(db: Session, groupId: int, userId: int, status: str = MEMBER):
    """Insert a membership row directly; used for seeding"""
    membership = Membership(group_id=groupId, user_id=userId, status=status)
    db.add(membership)
    db.commit()
    return membership
