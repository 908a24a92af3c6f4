from datetime import datetime

import bcrypt
import pytest
from fastapi.testclient import TestClient
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from meetup.db.authUtils import createToken
from meetup.db.database import Base, buildEngine, getDb
from meetup.main import app
from meetup.models.attendance import Attendance
from meetup.models.event import Event
from meetup.models.eventImage import EventImage
from meetup.models.group import Group
from meetup.models.groupImage import GroupImage
from meetup.models.membership import Membership
from meetup.models.user import User
from meetup.models.venue import Venue

ABOUT = "A friendly group that meets regularly to share a common interest together."

# Cheap hash for fixtures; real signups use the default cost
FIXTURE_PASSWORD_HASH = bcrypt.hashpw(b"password", bcrypt.gensalt(rounds=4)).decode()


@pytest.fixture
def engine():
    engine = buildEngine("sqlite://", poolclass=StaticPool)
    Base.metadata.create_all(bind=engine)
    try:
        yield engine
    finally:
        Base.metadata.drop_all(bind=engine)
        engine.dispose()


@pytest.fixture
def sessionFactory(engine):
    return sessionmaker(bind=engine, autoflush=False, autocommit=False)


@pytest.fixture
def db(sessionFactory):
    session = sessionFactory()
    try:
        yield session
    finally:
        session.close()


@pytest.fixture
def client(sessionFactory):
    def overrideGetDb():
        session = sessionFactory()
        try:
            yield session
        finally:
            session.close()

    app.dependency_overrides[getDb] = overrideGetDb
    try:
        with TestClient(app) as testClient:
            yield testClient
    finally:
        app.dependency_overrides.clear()


class Factory:
    """Inserts rows directly, bypassing the API"""

    def __init__(self, db):
        self.db = db
        self.counter = 0

    def _save(self, row):
        self.db.add(row)
        self.db.commit()
        self.db.refresh(row)
        return row

    def user(self, **fields):
        self.counter += 1
        defaults = {
            "first_name": "Test",
            "last_name": f"User{self.counter}",
            "username": f"tester{self.counter}",
            "email": f"tester{self.counter}@example.com",
            "hashed_password": FIXTURE_PASSWORD_HASH,
        }
        defaults.update(fields)
        return self._save(User(**defaults))

    def group(self, organizer, **fields):
        defaults = {
            "name": "Test Group",
            "about": ABOUT,
            "type": "In person",
            "private": False,
            "city": "New York",
            "state": "NY",
        }
        defaults.update(fields)
        return self._save(Group(organizer_id=organizer.id, **defaults))

    def membership(self, group, user, status="member"):
        return self._save(Membership(group_id=group.id, user_id=user.id, status=status))

    def groupImage(self, group, url, preview=False):
        return self._save(GroupImage(group_id=group.id, url=url, preview=preview))

    def venue(self, group, **fields):
        defaults = {"address": "1 Main St", "city": "New York", "state": "NY", "lat": 40.7, "lng": -74.0}
        defaults.update(fields)
        return self._save(Venue(group_id=group.id, **defaults))

    def event(self, group, venue=None, **fields):
        defaults = {
            "name": "Test Event",
            "description": "An event for testing.",
            "capacity": 10,
            "price": 12.5,
            "start_date": datetime(2099, 1, 1, 18, 0),
        }
        defaults.update(fields)
        return self._save(Event(group_id=group.id, venue_id=venue.id if venue else None, **defaults))

    def attendance(self, event, user, status="attending"):
        return self._save(Attendance(event_id=event.id, user_id=user.id, status=status))

    def eventImage(self, event, url, preview=False):
        return self._save(EventImage(event_id=event.id, url=url, preview=preview))


@pytest.fixture
def factory(db):
    return Factory(db)


def authHeaders(user):
    return {"Authorization": f"Bearer {createToken(user)}"}


@pytest.fixture
def auth():
    return authHeaders
