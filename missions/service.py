# missions/service.py

import logging
from dataclasses import dataclass

from config import MISSIONS_WRITE_RETRIES

from . import lifecycle
from .catalog import MissionCatalog
from .dispatcher import EventDispatcher
from .errors import ConcurrentWriteConflict
from .events import MISSION_CLAIMED, MISSION_STARTED, utcnow
from .models import MissionProgressEvent, MissionState

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ClaimResult:
    state: MissionState
    rewards: object


class MissionService:
    def __init__(
        self,
        repository,
        reads,
        ledger,
        catalog=None,
        dispatcher=None,
        max_retries: int = MISSIONS_WRITE_RETRIES,
    ):
        self.repo = repository
        self.ledger = ledger
        self.catalog = catalog or MissionCatalog.load()
        self.max_retries = max_retries
        self.dispatcher = dispatcher or EventDispatcher(
            repository, reads, catalog=self.catalog, max_retries=max_retries
        )

    # -----------------------------------------
    # 📥 Доменное событие
    # -----------------------------------------
    async def process_event(self, event, now=None):
        return await self.dispatcher.process_event(event, now=now)

    # -----------------------------------------
    # 📋 Все миссии профиля (только чтение)
    # -----------------------------------------
    async def get_missions(self, profile_id: str, now=None) -> list:
        now = now or utcnow()
        states = await self.repo.get_states(profile_id)
        result = []
        for definition in self.catalog:
            state = states.get(definition.code) or lifecycle.fresh_state(profile_id, definition, now)
            result.append((definition, lifecycle.refresh(state, definition, now)))
        return result

    async def _load(self, profile_id: str, definition, now) -> MissionState:
        state = await self.repo.get_state(profile_id, definition.code)
        return state or lifecycle.fresh_state(profile_id, definition, now)

    # -----------------------------------------
    # ▶️ Старт миссии
    # -----------------------------------------
    async def start(self, profile_id: str, mission_code: str, now=None) -> MissionState:
        definition = self.catalog.require(mission_code)
        now = now or utcnow()

        retries = 0
        while True:
            state = await self._load(profile_id, definition, now)
            started = lifecycle.start_transition(lifecycle.refresh(state, definition, now), definition, now)

            audit = MissionProgressEvent(
                profile_id=profile_id,
                mission_code=definition.code,
                event_type=MISSION_STARTED,
                payload={
                    "status": started.status.value,
                    "previous_status": state.status.value,
                    "started_at": now.isoformat(),
                    "catalog_version": self.catalog.version,
                },
                occurred_at=now,
            )
            try:
                async with self.repo.unit_of_work() as uow:
                    saved = await uow.save_state(started, expected_version=state.version)
                    await uow.append_event(audit)
            except ConcurrentWriteConflict:
                if retries >= max(self.max_retries, 1):
                    raise
                retries += 1
                # перечитаем: скорее всего второй start уже прошёл
                continue

            logger.info(f"▶️ [MISSION-START] {definition.code} начата профилем {profile_id}")
            return saved

    # -----------------------------------------
    # 🏆 Забрать награду
    # -----------------------------------------
    async def claim(self, profile_id: str, mission_code: str, now=None) -> ClaimResult:
        """
        Только из claimable. Состояние, награда и аудит: одна транзакция;
        параллельный дубль проигрывает по version и получает InvalidTransition.
        """
        definition = self.catalog.require(mission_code)
        now = now or utcnow()

        retries = 0
        while True:
            state = await self._load(profile_id, definition, now)
            claimed = lifecycle.claim_transition(lifecycle.refresh(state, definition, now), definition, now)

            try:
                async with self.repo.unit_of_work() as uow:
                    saved = await uow.save_state(claimed, expected_version=state.version)
                    rewards = await self.ledger.grant(uow, profile_id, definition, claimed.attempts, now)
                    await uow.append_event(MissionProgressEvent(
                        profile_id=profile_id,
                        mission_code=definition.code,
                        event_type=MISSION_CLAIMED,
                        payload={
                            "status": claimed.status.value,
                            "previous_status": state.status.value,
                            "attempt": claimed.attempts,
                            "xp_reward": definition.rewards.xp,
                            "freeze_tokens_reward": definition.rewards.freeze_tokens,
                            "next_eligible_at": claimed.next_eligible_at.isoformat() if claimed.next_eligible_at else None,
                            "catalog_version": self.catalog.version,
                        },
                        occurred_at=now,
                    ))
            except ConcurrentWriteConflict:
                if retries >= max(self.max_retries, 1):
                    raise
                retries += 1
                continue

            logger.info(
                f"🏆 [MISSION-CLAIM] {definition.code} забрана профилем {profile_id} "
                f"→ {saved.status.value}, попытка {saved.attempts}"
            )
            return ClaimResult(state=saved, rewards=rewards)
