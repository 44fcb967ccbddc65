# missions/catalog.py

from dataclasses import dataclass, field
from types import MappingProxyType

from .definitions import CATALOG_VERSION, MISSIONS
from .errors import UnknownMission
from .events import EventType


@dataclass(frozen=True)
class SeasonalWindow:
    start_month: int
    end_month: int

    def __post_init__(self):
        for month in (self.start_month, self.end_month):
            if not 1 <= month <= 12:
                raise ValueError(f"Season month out of range: {month}")


@dataclass(frozen=True)
class RewardSchedule:
    xp: int = 0
    freeze_tokens: int = 0
    premium_days: int = 0
    badges: tuple = ()
    unlocks: tuple = ()
    extras: tuple = ()

    def as_dict(self) -> dict:
        return {
            "xp": self.xp,
            "freeze_tokens": self.freeze_tokens,
            "premium_days": self.premium_days,
            "badges": list(self.badges),
            "unlocks": list(self.unlocks),
            "extras": list(self.extras),
        }


@dataclass(frozen=True)
class MissionDefinition:
    code: str
    category: str
    difficulty: str
    repeatable: bool
    cooldown_days: int
    triggers: frozenset
    rewards: RewardSchedule
    season: SeasonalWindow | None = None
    title: str = ""
    summary: str = ""
    requirements: str = ""
    repeatability: str = ""

    @property
    def is_seasonal(self) -> bool:
        return self.season is not None


def build_definition(code: str, raw: dict) -> MissionDefinition:
    season = raw.get("season")
    rewards = raw.get("rewards") or {}
    cooldown_days = int(raw.get("cooldown_days", 0))
    if cooldown_days < 0:
        raise ValueError(f"{code}: cooldown_days must be >= 0")

    return MissionDefinition(
        code=code,
        category=raw["category"],
        difficulty=raw["difficulty"],
        repeatable=bool(raw["repeatable"]),
        cooldown_days=cooldown_days,
        triggers=frozenset(EventType.parse(t) for t in raw["triggers"]),
        rewards=RewardSchedule(
            xp=int(rewards.get("xp", 0)),
            freeze_tokens=int(rewards.get("freeze_tokens", 0)),
            premium_days=int(rewards.get("premium_days", 0)),
            badges=tuple(rewards.get("badges", ())),
            unlocks=tuple(rewards.get("unlocks", ())),
            extras=tuple(rewards.get("extras", ())),
        ),
        season=SeasonalWindow(**season) if season else None,
        title=raw.get("title", ""),
        summary=raw.get("summary", ""),
        requirements=raw.get("requirements", ""),
        repeatability=raw.get("repeatability", ""),
    )


@dataclass(frozen=True)
class MissionCatalog:
    """Неизменяемый каталог. Загружается один раз при старте."""

    version: str
    definitions: MappingProxyType = field(repr=False)

    @classmethod
    def load(cls, raw: dict | None = None, version: str = CATALOG_VERSION) -> "MissionCatalog":
        raw = MISSIONS if raw is None else raw
        definitions = {code: build_definition(code, item) for code, item in raw.items()}
        return cls(version=version, definitions=MappingProxyType(definitions))

    def get(self, code: str) -> MissionDefinition | None:
        return self.definitions.get(code)

    def require(self, code: str) -> MissionDefinition:
        definition = self.definitions.get(code.upper()) if code else None
        if definition is None:
            raise UnknownMission(code)
        return definition

    def for_event(self, event_type: EventType) -> list:
        # фильтр только по триггеру, статус не важен
        return [d for d in self.definitions.values() if event_type in d.triggers]

    def __iter__(self):
        return iter(self.definitions.values())

    def __len__(self):
        return len(self.definitions)

    def __contains__(self, code):
        return code in self.definitions
