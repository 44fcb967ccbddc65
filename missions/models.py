# missions/models.py

from dataclasses import dataclass, field, replace
from datetime import datetime
from enum import Enum


class MissionStatus(str, Enum):
    HIDDEN = "hidden"
    LOCKED = "locked"
    AVAILABLE = "available"
    IN_PROGRESS = "in_progress"
    CLAIMABLE = "claimable"
    COMPLETED = "completed"
    COOLDOWN = "cooldown"


@dataclass(frozen=True)
class MissionState:
    profile_id: str
    mission_code: str
    status: MissionStatus
    progress: dict = field(default_factory=dict)
    streak_counter: int = 0
    attempts: int = 0
    started_at: datetime | None = None
    completed_at: datetime | None = None
    next_eligible_at: datetime | None = None
    last_event_at: datetime | None = None
    # None: строки в базе ещё нет
    version: int | None = None

    @property
    def is_persisted(self) -> bool:
        return self.version is not None

    def evolve(self, **changes) -> "MissionState":
        return replace(self, **changes)


@dataclass(frozen=True)
class ProgressResult:
    """Ответ evaluator'а: новый progress и предлагаемый статус."""

    progress: dict
    status: MissionStatus | None = None
    logs: dict | None = None


@dataclass(frozen=True)
class MissionProgressEvent:
    profile_id: str
    mission_code: str
    event_type: str
    payload: dict
    occurred_at: datetime


def derive_streak_counter(progress: dict) -> int:
    """streak_counter: только зеркало progress['streak'], отдельно не меняется."""
    value = progress.get("streak") if isinstance(progress, dict) else None
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        return 0
    return max(int(value), 0)
