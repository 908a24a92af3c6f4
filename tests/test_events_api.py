from datetime import datetime, timedelta

import pytest

from meetup.models.attendance import Attendance


@pytest.fixture
def group(factory):
    return factory.group(factory.user(), name="Tennis", city="Brooklyn", state="NY")


def test_group_events_count_only_attending(client, factory, auth, group):
    venue = factory.venue(group, city="Queens")
    event = factory.event(group, venue)
    factory.attendance(event, factory.user(), status="attending")
    factory.attendance(event, factory.user(), status="attending")
    factory.attendance(event, factory.user(), status="pending")
    factory.attendance(event, factory.user(), status="waitlist")
    factory.eventImage(event, "https://img/e.png", preview=True)

    response = client.get(f"/groups/{group.id}/events", headers=auth(factory.user()))

    assert response.status_code == 200
    [listed] = response.json()["Events"]
    assert listed["numAttending"] == 2
    assert listed["previewImage"] == "https://img/e.png"
    assert listed["Group"] == {"id": group.id, "name": "Tennis", "city": "Brooklyn", "state": "NY"}
    assert listed["Venue"] == {"id": venue.id, "city": "Queens", "state": "NY"}
    for heavy in ("description", "capacity", "price"):
        assert heavy not in listed


def test_group_events_without_venue_or_images(client, factory, auth, group):
    factory.event(group)

    [listed] = client.get(f"/groups/{group.id}/events", headers=auth(factory.user())).json()["Events"]

    assert listed["numAttending"] == 0
    assert listed["previewImage"] is None
    assert listed["Venue"] is None


def test_group_events_are_scoped_and_ordered(client, factory, auth, group):
    other = factory.group(factory.user())
    later = factory.event(group, name="Later", start_date=datetime(2099, 6, 1))
    earlier = factory.event(group, name="Earlier", start_date=datetime(2098, 6, 1))
    factory.event(other, name="Elsewhere")

    events = client.get(f"/groups/{group.id}/events", headers=auth(factory.user())).json()["Events"]

    assert [e["id"] for e in events] == [earlier.id, later.id]


def test_group_events_guards(client, factory, auth, group):
    assert client.get(f"/groups/{group.id}/events").status_code == 401
    assert client.get("/groups/999/events", headers=auth(factory.user())).status_code == 404


def test_all_events(client, factory, group):
    other = factory.group(factory.user())
    factory.event(group)
    factory.event(other)

    response = client.get("/events")

    assert response.status_code == 200
    assert len(response.json()["Events"]) == 2


def test_event_details_include_heavy_fields(client, factory, group):
    venue = factory.venue(group)
    event = factory.event(group, venue, capacity=25, price=18.5, description="Bring a racket.")
    factory.attendance(event, factory.user())
    image = factory.eventImage(event, "https://img/e.png", preview=True)

    response = client.get(f"/events/{event.id}")

    assert response.status_code == 200
    body = response.json()
    assert body["description"] == "Bring a racket."
    assert body["capacity"] == 25
    assert body["price"] == 18.5
    assert body["numAttending"] == 1
    assert body["Group"]["private"] is False
    assert body["Venue"]["address"] == venue.address
    assert body["EventImages"] == [{"id": image.id, "url": "https://img/e.png", "preview": True}]


def test_event_not_found(client):
    response = client.get("/events/999")

    assert response.status_code == 404
    assert response.json()["title"] == "Event couldn't be found"


def test_oversized_event_id_is_bad_request(client):
    response = client.get("/events/99999999999999999999")

    assert response.status_code == 400
    assert "eventId" in response.json()["errors"]


# ============================================
# CREATE EVENT
# ============================================

def eventBody(**overrides):
    body = {
        "name": "Tennis Meet and Greet",
        "description": "First meet and greet event for the group.",
        "capacity": 10,
        "price": 18.5,
        "startDate": (datetime.utcnow() + timedelta(days=30)).isoformat(),
    }
    body.update(overrides)
    return body


def test_co_host_creates_event(client, factory, auth, group):
    coHost = factory.user()
    factory.membership(group, coHost, status="co-host")
    venue = factory.venue(group)

    response = client.post(
        f"/groups/{group.id}/events",
        json=eventBody(venueId=venue.id),
        headers=auth(coHost),
    )

    assert response.status_code == 200
    body = response.json()
    assert body["groupId"] == group.id
    assert body["venueId"] == venue.id
    assert body["numAttending"] == 0
    assert body["price"] == 18.5


def test_member_cannot_create_event(client, factory, auth, group):
    member = factory.user()
    factory.membership(group, member)

    response = client.post(f"/groups/{group.id}/events", json=eventBody(), headers=auth(member))

    assert response.status_code == 403


def test_event_venue_must_belong_to_group(client, factory, auth, group):
    foreignVenue = factory.venue(factory.group(factory.user()))

    response = client.post(
        f"/groups/{group.id}/events",
        json=eventBody(venueId=foreignVenue.id),
        headers=auth(group.organizer),
    )

    assert response.status_code == 400
    assert response.json()["errors"] == {"venueId": "Venue does not exist"}


@pytest.mark.parametrize(
    "overrides, field, message",
    [
        ({"name": "Tea"}, "name", "Name must be at least 5 characters"),
        ({"capacity": 2.5}, "capacity", "Capacity must be an integer"),
        ({"capacity": 2 ** 31}, "capacity", "Capacity must be an integer"),
        ({"price": -1}, "price", "Price is invalid"),
        ({"description": ""}, "description", "Description is required"),
        ({"startDate": "2020-01-01T00:00:00"}, "startDate", "Start date must be in the future"),
    ],
)
def test_event_validation(client, auth, group, overrides, field, message):
    response = client.post(
        f"/groups/{group.id}/events",
        json=eventBody(**overrides),
        headers=auth(group.organizer),
    )

    assert response.status_code == 400
    assert response.json()["errors"][field] == message


# ============================================
# ATTENDANCE
# ============================================

def test_member_requests_attendance(client, factory, auth, group, db):
    member = factory.user()
    factory.membership(group, member)
    event = factory.event(group)

    first = client.post(f"/events/{event.id}/attendance", headers=auth(member))
    again = client.post(f"/events/{event.id}/attendance", headers=auth(member))

    assert first.status_code == 200
    assert first.json() == {"eventId": event.id, "userId": member.id, "status": "pending"}
    assert again.status_code == 400
    assert db.query(Attendance).count() == 1


def test_attendance_requires_membership(client, factory, auth, group):
    event = factory.event(group)
    pending = factory.user()
    factory.membership(group, pending, status="pending")

    assert client.post(f"/events/{event.id}/attendance").status_code == 401
    assert client.post("/events/999/attendance", headers=auth(pending)).status_code == 404
    assert client.post(f"/events/{event.id}/attendance", headers=auth(pending)).status_code == 403


# ============================================
# TIMELINE
# ============================================

def test_timeline_partitions_events(client, factory, auth, group):
    future = factory.event(group, name="Future", start_date=datetime(2099, 1, 1))
    pastLate = factory.event(group, name="Past late", start_date=datetime(2021, 1, 1))
    pastEarly = factory.event(group, name="Past early", start_date=datetime(2020, 1, 1))

    response = client.get(f"/groups/{group.id}/events/timeline", headers=auth(factory.user()))

    assert response.status_code == 200
    body = response.json()
    assert [e["id"] for e in body["upcomingEvents"]] == [future.id]
    assert [e["id"] for e in body["pastEvents"]] == [pastEarly.id, pastLate.id]
