"""
Seed script to populate the database with demo data for development.
Run with: python scripts/seed_data.py
"""
import sys
from datetime import datetime, timedelta
from pathlib import Path

# Add project root to path
project_root = Path(__file__).parent.parent
sys.path.insert(0, str(project_root))

from meetup.db.authUtils import hashPassword
from meetup.db.database import Base, SessionLocal, engine
from meetup.db.groupUtils import addMember
from meetup.models.attendance import ATTENDING, PENDING, Attendance
from meetup.models.event import Event
from meetup.models.eventImage import EventImage
from meetup.models.group import Group
from meetup.models.groupImage import GroupImage
from meetup.models.membership import CO_HOST, MEMBER, Membership
from meetup.models.user import User
from meetup.models.venue import Venue


def clear_existing_data(db):
    """Clear all rows, children first"""
    print("Clearing existing data...")
    for model in (EventImage, Attendance, Event, Venue, GroupImage, Membership, Group, User):
        db.query(model).delete()
    db.commit()
    print("✓ Existing data cleared")


def create_users(db):
    users = [
        {"first_name": "Demo", "last_name": "Lition", "username": "Demo-lition", "email": "demo@user.io"},
        {"first_name": "Fake", "last_name": "User", "username": "FakeUser1", "email": "user1@user.io"},
        {"first_name": "Another", "last_name": "Person", "username": "FakeUser2", "email": "user2@user.io"},
    ]

    user_objects = []
    for user_data in users:
        user = User(hashed_password=hashPassword("password"), **user_data)
        db.add(user)
        user_objects.append(user)

    db.commit()
    print(f"✓ Created {len(user_objects)} users (password: 'password')")
    return user_objects


def create_groups(db, organizer):
    groups = [
        {
            "name": "Evening Tennis on the Water",
            "about": "Enjoy rounds of tennis with a tight-nit group of people on the water facing the Brooklyn Bridge.",
            "type": "In person",
            "private": True,
            "city": "New York",
            "state": "NY",
        },
        {
            "name": "Remote Book Club",
            "about": "One book a month, one video call at the end of it. Every genre is welcome, spoilers are not.",
            "type": "Online",
            "private": False,
            "city": "Austin",
            "state": "TX",
        },
    ]

    group_objects = []
    for group_data in groups:
        group = Group(organizer_id=organizer.id, **group_data)
        db.add(group)
        db.flush()  # Get group.id

        db.add(GroupImage(group_id=group.id, url=f"https://picsum.photos/seed/group{group.id}/600", preview=True))
        group_objects.append(group)

    db.commit()
    print(f"✓ Created {len(group_objects)} groups")
    return group_objects


def create_events(db, group, members):
    venue = Venue(
        group_id=group.id,
        address="123 Disney Lane",
        city=group.city,
        state=group.state,
        lat=37.7645358,
        lng=-122.4730327,
    )
    db.add(venue)
    db.flush()

    now = datetime.utcnow()
    for offset, name in ((-30, "Kickoff Meet and Greet"), (14, "Spring Doubles Night")):
        event = Event(
            group_id=group.id,
            venue_id=venue.id,
            name=name,
            description=f"{name} for {group.name}.",
            capacity=10,
            price=18.5,
            start_date=now + timedelta(days=offset),
        )
        db.add(event)
        db.flush()

        db.add(EventImage(event_id=event.id, url=f"https://picsum.photos/seed/event{event.id}/600", preview=True))
        for i, member in enumerate(members):
            db.add(Attendance(event_id=event.id, user_id=member.id, status=ATTENDING if i == 0 else PENDING))

    db.commit()
    print(f"✓ Created venue and 2 events for '{group.name}'")


def main():
    print("=" * 60)
    print("SEEDING DATABASE WITH DEMO DATA")
    print("=" * 60)

    Base.metadata.create_all(bind=engine)
    db = SessionLocal()

    try:
        clear_existing_data(db)
        organizer, *members = create_users(db)
        groups = create_groups(db, organizer)

        addMember(db, groups[0].id, members[0].id, status=CO_HOST)
        addMember(db, groups[0].id, members[1].id, status=MEMBER)
        create_events(db, groups[0], members)

        print("\n" + "=" * 60)
        print("✓ SEEDING COMPLETE")
        print("=" * 60)

    except Exception as e:
        print(f"\n✗ ERROR: {e}")
        db.rollback()
        raise
    finally:
        db.close()


if __name__ == "__main__":
    main()
