# missions/events.py

from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum

import pytz

from .errors import UnknownEventType


class EventType(str, Enum):
    ITEM_CREATED = "ITEM_CREATED"
    ITEM_UPDATED = "ITEM_UPDATED"
    MEASUREMENT_UPDATED = "MEASUREMENT_UPDATED"
    PROFILE_UPDATED = "PROFILE_UPDATED"
    WISHLIST_ITEM_CREATED = "WISHLIST_ITEM_CREATED"
    PROFILE_SHARED = "PROFILE_SHARED"
    INVITE_SENT = "INVITE_SENT"
    INVITE_ACCEPTED = "INVITE_ACCEPTED"
    INVITED_USER_PROGRESS = "INVITED_USER_PROGRESS"
    STREAK_UPDATED = "STREAK_UPDATED"
    PHOTO_ADDED = "PHOTO_ADDED"
    PURCHASE_LOGGED = "PURCHASE_LOGGED"
    CIRCLE_PROGRESS = "CIRCLE_PROGRESS"

    @classmethod
    def parse(cls, value) -> "EventType":
        if isinstance(value, cls):
            return value
        try:
            return cls(value)
        except ValueError:
            raise UnknownEventType(value) from None


# служебные типы для аудита start/claim, в доменных событиях не бывают
MISSION_STARTED = "MISSION_STARTED"
MISSION_CLAIMED = "MISSION_CLAIMED"

ITEM_SOURCES = {"measurement", "garment", "size_label", "wishlist", "trusted_circle", "other"}

# camelCase из API → наши ключи
_PAYLOAD_KEYS = {
    "createdAt": "created_at",
    "fieldCount": "field_count",
    "criticalFieldCompleted": "critical_field_completed",
    "uniqueHash": "unique_hash",
    "wishlistId": "wishlist_id",
    "matchedSize": "matched_size",
}


def utcnow() -> datetime:
    return datetime.now(pytz.utc)


def to_utc(value) -> datetime:
    """ISO-строка или datetime → aware datetime в UTC. Naive считаем UTC."""
    if isinstance(value, str):
        value = datetime.fromisoformat(value.strip().replace("Z", "+00:00"))
    if not isinstance(value, datetime):
        raise ValueError(f"Not a timestamp: {value!r}")
    if value.tzinfo is None:
        return pytz.utc.localize(value)
    return value.astimezone(pytz.utc)


def normalize_payload(raw: dict | None, now: datetime | None = None) -> dict:
    raw = dict(raw or {})
    payload = {}
    for key, value in raw.items():
        payload[_PAYLOAD_KEYS.get(key, key)] = value

    source = payload.get("source")
    payload["source"] = source if source in ITEM_SOURCES else "other"
    payload.setdefault("category", None)
    payload.setdefault("subtype", None)

    created_at = payload.get("created_at")
    try:
        payload["created_at"] = to_utc(created_at) if created_at else (now or utcnow())
    except ValueError:
        payload["created_at"] = now or utcnow()

    field_count = payload.get("field_count")
    payload["field_count"] = field_count if isinstance(field_count, int) and not isinstance(field_count, bool) else 0
    payload["critical_field_completed"] = bool(payload.get("critical_field_completed"))
    return payload


@dataclass(frozen=True)
class DomainEvent:
    type: EventType
    profile_id: str
    payload: dict = field(default_factory=dict)

    def __post_init__(self):
        # время события фиксируем один раз, повторная обработка видит тот же день
        created_at = self.payload.get("created_at")
        if not isinstance(created_at, datetime):
            try:
                created_at = to_utc(created_at) if created_at else utcnow()
            except ValueError:
                created_at = utcnow()
            object.__setattr__(self, "payload", {**self.payload, "created_at": created_at})

    @classmethod
    def from_dict(cls, data: dict, now: datetime | None = None) -> "DomainEvent":
        """
        Разбор сырого события. Неизвестный type → UnknownEventType
        ещё до любых чтений из базы.
        """
        event_type = EventType.parse(data.get("type"))
        profile_id = data.get("profile_id") or data.get("profileId")
        if not profile_id:
            raise ValueError("Mission event without profile_id")
        return cls(
            type=event_type,
            profile_id=str(profile_id),
            payload=normalize_payload(data.get("payload"), now),
        )

    @property
    def occurred_at(self) -> datetime:
        return self.payload["created_at"]
