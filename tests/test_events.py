import pytest

from missions.conditions import is_qualifying_item
from missions.errors import UnknownEventType
from missions.events import DomainEvent, EventType, normalize_payload

from conftest import at


def test_from_dict_parses_camel_case():
    event = DomainEvent.from_dict({
        "type": "ITEM_CREATED",
        "profileId": "abc",
        "payload": {
            "source": "garment",
            "createdAt": "2025-03-01T23:30:00Z",
            "fieldCount": 4,
            "criticalFieldCompleted": False,
        },
    })

    assert event.type == EventType.ITEM_CREATED
    assert event.profile_id == "abc"
    assert event.payload["field_count"] == 4
    assert event.occurred_at == at(2025, 3, 1, 23, 30)


def test_from_dict_rejects_unknown_type():
    with pytest.raises(UnknownEventType) as exc:
        DomainEvent.from_dict({"type": "ITEM_DELETED", "profile_id": "abc"})
    assert exc.value.event_type == "ITEM_DELETED"


def test_from_dict_requires_profile():
    with pytest.raises(ValueError):
        DomainEvent.from_dict({"type": "ITEM_CREATED"})


def test_payload_defaults():
    now = at(2025, 3, 1)
    payload = normalize_payload({"source": "spaceship", "fieldCount": "7"}, now)

    assert payload["source"] == "other"
    assert payload["created_at"] == now
    assert payload["field_count"] == 0
    assert payload["critical_field_completed"] is False


def test_offset_timestamps_are_converted_to_utc():
    payload = normalize_payload({"createdAt": "2025-03-02T01:30:00+02:00"})
    assert payload["created_at"] == at(2025, 3, 1, 23, 30)


@pytest.mark.parametrize("payload,expected", [
    ({"field_count": 3}, True),
    ({"field_count": 2}, False),
    ({"field_count": 0, "critical_field_completed": True}, True),
    ({}, False),
])
def test_qualifying_item(payload, expected):
    assert is_qualifying_item(payload) is expected


def test_event_time_is_fixed_at_construction():
    event = DomainEvent(type=EventType.ITEM_CREATED, profile_id="abc", payload={"field_count": 3})

    first = event.occurred_at
    assert first.tzinfo is not None
    assert event.occurred_at is first
    assert event.payload["created_at"] is first


def test_direct_event_with_string_time():
    event = DomainEvent(
        type=EventType.ITEM_CREATED,
        profile_id="abc",
        payload={"created_at": "2025-03-01T23:30:00Z"},
    )
    assert event.occurred_at == at(2025, 3, 1, 23, 30)
