import asyncio
from datetime import datetime

import pytest
import pytz

from missions import MissionCatalog, MissionService
from missions.errors import AuxiliaryReadFailure, ConcurrentWriteConflict
from missions.events import DomainEvent, EventType, normalize_payload
from services.reward_ledger import GrantedRewards
from services.xp_service import get_level_for_xp

PROFILE_ID = "11111111-1111-1111-1111-111111111111"


def at(year, month, day, hour=12, minute=0):
    return datetime(year, month, day, hour, minute, tzinfo=pytz.utc)


def item_event(moment, profile_id=PROFILE_ID, **payload):
    payload.setdefault("fieldCount", 3)
    payload["createdAt"] = moment.isoformat()
    return DomainEvent(
        type=EventType.ITEM_CREATED,
        profile_id=profile_id,
        payload=normalize_payload(payload, moment),
    )


def make_event(event_type, moment, profile_id=PROFILE_ID, **payload):
    payload["createdAt"] = moment.isoformat()
    return DomainEvent(type=EventType(event_type), profile_id=profile_id, payload=normalize_payload(payload, moment))


# -----------------------------------------
# 🗄 In-memory хранилище с той же проверкой version
# -----------------------------------------
class FakeUnitOfWork:
    def __init__(self, repo):
        self.repo = repo
        self.conn = None
        self._undo = []
        self._events = []

    async def __aenter__(self):
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb):
        if exc_type is None:
            self.repo.events.extend(self._events)
            self.repo.commits += 1
        else:
            for undo in reversed(self._undo):
                undo()
            self.repo.rollbacks += 1

    def on_rollback(self, callback):
        self._undo.append(callback)

    async def save_state(self, state, expected_version):
        await asyncio.sleep(0)
        key = (state.profile_id, state.mission_code)
        current = self.repo.states.get(key)

        if expected_version is None:
            if current is not None:
                raise ConcurrentWriteConflict(state.profile_id, state.mission_code)
            version = 1
        else:
            if current is None or current.version != expected_version:
                raise ConcurrentWriteConflict(state.profile_id, state.mission_code)
            version = current.version + 1

        saved = state.evolve(version=version)
        self.repo.states[key] = saved
        self.on_rollback(lambda: self.repo._restore(key, current))
        return saved

    async def append_event(self, event):
        self._events.append(event)


class FakeRepository:
    def __init__(self, profiles=(PROFILE_ID,)):
        self.profiles = set(profiles)
        self.states = {}
        self.events = []
        self.commits = 0
        self.rollbacks = 0
        self.reads = 0

    def _restore(self, key, previous):
        if previous is None:
            self.states.pop(key, None)
        else:
            self.states[key] = previous

    def unit_of_work(self):
        return FakeUnitOfWork(self)

    async def profile_exists(self, profile_id):
        return profile_id in self.profiles

    async def get_state(self, profile_id, mission_code):
        self.reads += 1
        await asyncio.sleep(0)
        return self.states.get((profile_id, mission_code))

    async def get_states(self, profile_id, mission_codes=None):
        self.reads += 1
        await asyncio.sleep(0)
        return {
            code: state
            for (pid, code), state in self.states.items()
            if pid == profile_id and (mission_codes is None or code in mission_codes)
        }

    def put(self, state):
        self.states[(state.profile_id, state.mission_code)] = state
        return state

    def state(self, code, profile_id=PROFILE_ID):
        return self.states.get((profile_id, code))

    def events_for(self, code):
        return [e for e in self.events if e.mission_code == code]


class FakeReads:
    def __init__(self):
        self.garments = []
        self.size_labels = []
        self.measurements = []
        self.wishlist_count = 0
        self.members = 0
        self.progression_row = {}
        self.failing = set()
        self.calls = []

    async def _value(self, source, value):
        self.calls.append(source)
        if source in self.failing:
            raise AuxiliaryReadFailure(source, asyncio.TimeoutError())
        return value

    async def garment_categories(self, profile_id):
        return await self._value("garments", list(self.garments))

    async def size_label_categories(self, profile_id):
        return await self._value("size_labels", list(self.size_labels))

    async def measurement_categories(self, profile_id):
        return await self._value("measurements", list(self.measurements))

    async def wishlist_items_with_size(self, profile_id):
        return await self._value("wishlist_items", self.wishlist_count)

    async def circle_members(self, profile_id):
        return await self._value("trusted_circle_memberships", self.members)

    async def progression(self, profile_id):
        return await self._value("profile_progression", dict(self.progression_row))


class FakeLedger:
    """Журнал наград в памяти; откатывается вместе с UoW."""

    def __init__(self):
        self.grants = []
        self.xp = {}

    async def grant(self, uow, profile_id, definition, attempt, now):
        key = (profile_id, definition.code, attempt)
        if key in self.grants:
            raise ConcurrentWriteConflict(profile_id, definition.code)

        previous_xp = self.xp.get(profile_id, 0)
        total = previous_xp + definition.rewards.xp
        self.grants.append(key)
        self.xp[profile_id] = total

        def undo():
            self.grants.remove(key)
            self.xp[profile_id] = previous_xp

        uow.on_rollback(undo)
        return GrantedRewards(
            xp=definition.rewards.xp,
            freeze_tokens=definition.rewards.freeze_tokens,
            badges=definition.rewards.badges,
            xp_total=total,
            level=get_level_for_xp(total),
        )


@pytest.fixture
def catalog():
    return MissionCatalog.load()


@pytest.fixture
def repo():
    return FakeRepository()


@pytest.fixture
def reads():
    return FakeReads()


@pytest.fixture
def ledger():
    return FakeLedger()


@pytest.fixture
def service(repo, reads, ledger, catalog):
    return MissionService(repository=repo, reads=reads, ledger=ledger, catalog=catalog, max_retries=1)


@pytest.fixture
def dispatcher(service):
    return service.dispatcher
