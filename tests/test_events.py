"""Event CRUD through the HTTP API."""

from datetime import datetime

from bson import ObjectId

from tests.conftest import event_payload, iso_in


def test_create_and_get_event(client):
    payload = event_payload()
    response = client.post("/events", json=payload)
    assert response.status_code == 201
    body = response.json()
    assert body["ok"] is True
    assert ObjectId.is_valid(body["eventId"])

    response = client.get(f"/events/{body['eventId']}")
    assert response.status_code == 200
    event = response.json()["event"]
    assert event["_id"] == body["eventId"]
    for field in ("title", "description", "eventType", "thumbnail", "location", "creatorEmail"):
        assert event[field] == payload[field]
    assert datetime.fromisoformat(event["eventDate"].replace("Z", "+00:00")) == datetime.fromisoformat(payload["eventDate"])
    assert event["createdAt"]


def test_create_requires_every_field(client):
    for missing in ("title", "description", "eventType", "thumbnail", "location", "eventDate", "creatorEmail"):
        payload = event_payload()
        del payload[missing]
        response = client.post("/events", json=payload)
        assert response.status_code == 400, missing
        assert response.json() == {"ok": False, "message": "All fields are required."}


def test_create_rejects_empty_strings(client):
    response = client.post("/events", json=event_payload(title=""))
    assert response.status_code == 400


def test_create_rejects_unparseable_date(client):
    response = client.post("/events", json=event_payload(eventDate="next tuesday-ish"))
    assert response.status_code == 400
    assert response.json()["message"] == "Invalid event date."


def test_create_rejects_dates_that_overflow_when_converted_to_utc(client):
    for value in ("9999-12-31T23:30:00-01:00", "0001-01-01T00:00:00+01:00"):
        response = client.post("/events", json=event_payload(eventDate=value))
        assert response.status_code == 400, value
        assert response.json() == {"ok": False, "message": "Invalid event date."}


def test_create_rejects_past_date(client):
    response = client.post("/events", json=event_payload(days=-1))
    assert response.status_code == 400
    assert response.json()["message"] == "Event date must be a future date."


def test_non_object_body_is_a_400(client):
    response = client.post("/events", content=b"not json", headers={"content-type": "application/json"})
    assert response.status_code == 400
    assert response.json()["ok"] is False


def test_get_event_with_malformed_id(client):
    response = client.get("/events/not-an-id")
    assert response.status_code == 400
    assert response.json()["message"] == "Invalid event id."


def test_get_missing_event(client):
    response = client.get(f"/events/{ObjectId()}")
    assert response.status_code == 404
    assert response.json() == {"ok": False, "message": "Event not found."}


def test_list_events_sorted_by_date(client, create_event):
    later = create_event(days=10, title="Later")
    sooner = create_event(days=2, title="Sooner")
    middle = create_event(days=5, title="Middle")

    body = client.get("/events").json()
    assert body["ok"] is True
    assert body["count"] == 3
    assert [event["_id"] for event in body["events"]] == [sooner, middle, later]


def test_upcoming_excludes_past_events(client, create_event, store):
    upcoming = create_event(days=3)
    store.events.insert_one(
        {
            "title": "Old",
            "description": "Already happened",
            "eventType": "Cleanup",
            "thumbnail": "https://placehold.co/1",
            "location": "Somewhere",
            "eventDate": datetime(2020, 1, 1),
            "creatorEmail": "alice@x.com",
            "createdAt": datetime(2019, 12, 1),
        }
    )

    assert client.get("/events").json()["count"] == 2
    body = client.get("/events/upcoming").json()
    assert [event["_id"] for event in body["events"]] == [upcoming]


def test_list_events_by_creator(client, create_event):
    mine = create_event(creator="alice@x.com")
    create_event(creator="bob@x.com")

    body = client.get("/events/user", params={"email": "alice@x.com"}).json()
    assert body["count"] == 1
    assert body["events"][0]["_id"] == mine


def test_list_events_by_creator_requires_email(client):
    response = client.get("/events/user")
    assert response.status_code == 400
    assert response.json()["message"] == "User email is required."


def test_update_by_creator(client, create_event):
    event_id = create_event()
    update = event_payload(title="Renamed", days=9)
    del update["creatorEmail"]
    update["requestorEmail"] = "alice@x.com"

    response = client.put(f"/events/{event_id}", json=update)
    assert response.status_code == 200
    assert response.json()["modifiedCount"] == 1

    event = client.get(f"/events/{event_id}").json()["event"]
    assert event["title"] == "Renamed"
    assert event["creatorEmail"] == "alice@x.com"


def test_update_cannot_change_creator(client, create_event):
    event_id = create_event()
    update = event_payload(creator="mallory@x.com")
    update["requestorEmail"] = "alice@x.com"

    assert client.put(f"/events/{event_id}", json=update).status_code == 200
    assert client.get(f"/events/{event_id}").json()["event"]["creatorEmail"] == "alice@x.com"


def test_update_by_someone_else_is_forbidden(client, create_event):
    event_id = create_event()
    for intruder in ("bob@x.com", "ALICE@x.com", "alice@x.com "):
        update = event_payload()
        update["requestorEmail"] = intruder
        response = client.put(f"/events/{event_id}", json=update)
        assert response.status_code == 403, intruder
        assert response.json()["ok"] is False


def test_update_revalidates_fields(client, create_event):
    event_id = create_event()
    update = event_payload(days=-1)
    update["requestorEmail"] = "alice@x.com"
    assert client.put(f"/events/{event_id}", json=update).status_code == 400

    update = event_payload(location="")
    update["requestorEmail"] = "alice@x.com"
    response = client.put(f"/events/{event_id}", json=update)
    assert response.status_code == 400
    assert response.json()["message"] == "All fields are required."


def test_update_missing_event(client):
    update = event_payload()
    update["requestorEmail"] = "alice@x.com"
    assert client.put(f"/events/{ObjectId()}", json=update).status_code == 404


def test_update_requires_requestor(client, create_event):
    event_id = create_event()
    response = client.put(f"/events/{event_id}", json=event_payload())
    assert response.status_code == 400


def test_delete_by_someone_else_is_forbidden(client, create_event):
    event_id = create_event()
    response = client.delete(f"/events/{event_id}", params={"requestorEmail": "bob@x.com"})
    assert response.status_code == 403
    assert client.get(f"/events/{event_id}").status_code == 200


def test_delete_with_requestor_in_body(client, create_event):
    event_id = create_event()
    response = client.request("DELETE", f"/events/{event_id}", json={"requestorEmail": "alice@x.com"})
    assert response.status_code == 200
    assert client.get(f"/events/{event_id}").status_code == 404


def test_delete_cascades_to_joins(client, create_event):
    event_id = create_event()
    other_id = create_event(title="Other")
    for email in ("carol@x.com", "dave@x.com"):
        assert client.post("/join-event", json={"eventId": event_id, "userEmail": email}).status_code == 201
    assert client.post("/join-event", json={"eventId": other_id, "userEmail": "carol@x.com"}).status_code == 201

    response = client.delete(f"/events/{event_id}", params={"requestorEmail": "alice@x.com"})
    assert response.status_code == 200
    assert response.json()["deletedJoins"] == 2

    carol = client.get("/joined", params={"email": "carol@x.com"}).json()["joinedEvents"]
    assert [join["eventId"] for join in carol] == [other_id]
    assert client.get("/joined", params={"email": "dave@x.com"}).json()["count"] == 0


def test_delete_twice_reports_not_found(client, create_event):
    event_id = create_event()
    assert client.delete(f"/events/{event_id}", params={"requestorEmail": "alice@x.com"}).status_code == 200
    assert client.delete(f"/events/{event_id}", params={"requestorEmail": "alice@x.com"}).status_code == 404


def test_scenario_create_join_delete(client):
    created = client.post("/events", json=event_payload(creator="alice@x.com", days=7))
    assert created.status_code == 201
    event_id = created.json()["eventId"]

    fetched = client.get(f"/events/{event_id}")
    assert fetched.status_code == 200
    assert fetched.json()["event"]["title"] == "Beach Cleanup"

    by_bob = event_payload(title="Hijacked")
    by_bob["requestorEmail"] = "bob@x.com"
    assert client.put(f"/events/{event_id}", json=by_bob).status_code == 403

    yesterday = event_payload(eventDate=iso_in(-1))
    yesterday["requestorEmail"] = "alice@x.com"
    assert client.put(f"/events/{event_id}", json=yesterday).status_code == 400

    join = {"eventId": event_id, "userEmail": "carol@x.com"}
    assert client.post("/join-event", json=join).status_code == 201
    repeat = client.post("/join-event", json=join)
    assert repeat.status_code == 400
    assert repeat.json()["message"] == "You have already joined this event."

    assert client.delete(f"/events/{event_id}", params={"requestorEmail": "alice@x.com"}).status_code == 200
    joined = client.get("/joined", params={"email": "carol@x.com"}).json()
    assert joined == {"ok": True, "count": 0, "joinedEvents": []}
