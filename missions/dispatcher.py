# missions/dispatcher.py

import asyncio
import logging
from dataclasses import dataclass, field

import asyncpg

from config import MISSIONS_WRITE_RETRIES

from . import lifecycle
from .catalog import MissionCatalog
from .errors import ConcurrentWriteConflict, EvaluatorError, MissionError
from .events import EventType, utcnow
from .models import MissionProgressEvent
from .registry import EVALUATORS

logger = logging.getLogger(__name__)

APPLIED = "applied"
UNCHANGED = "unchanged"
SKIPPED = "skipped"


@dataclass
class DispatchReport:
    profile_id: str
    event_type: str
    applied: list = field(default_factory=list)
    unchanged: list = field(default_factory=list)
    skipped: list = field(default_factory=list)
    failed: dict = field(default_factory=dict)

    def record(self, code: str, outcome: str):
        {APPLIED: self.applied, UNCHANGED: self.unchanged, SKIPPED: self.skipped}[outcome].append(code)


class EventDispatcher:
    """
    Один доменный event → все миссии с этим триггером.
    Каждая миссия пишется своей транзакцией; ошибка одной
    не мешает остальным.
    """

    def __init__(self, repository, reads, catalog=None, evaluators=None, max_retries: int = MISSIONS_WRITE_RETRIES):
        self.repo = repository
        self.reads = reads
        self.catalog = catalog or MissionCatalog.load()
        self.evaluators = EVALUATORS if evaluators is None else evaluators
        self.max_retries = max_retries

    async def process_event(self, event, now=None) -> DispatchReport:
        # неизвестный тип отбрасываем до любых чтений
        event_type = EventType.parse(event.type)
        now = now or utcnow()
        report = DispatchReport(profile_id=event.profile_id, event_type=event_type.value)

        if not await self.repo.profile_exists(event.profile_id):
            logger.info(f"[MISSION-EVENT] Профиль {event.profile_id} не найден, {event_type.value} пропущен")
            return report

        definitions = self.catalog.for_event(event_type)
        if not definitions:
            return report

        states = await self.repo.get_states(event.profile_id, [d.code for d in definitions])

        for definition in definitions:
            code = definition.code
            evaluator = self.evaluators.get(code)
            if evaluator is None:
                report.record(code, SKIPPED)
                continue

            state = states.get(code) or lifecycle.fresh_state(event.profile_id, definition, now)
            try:
                outcome = await self._apply(event, event_type, definition, evaluator, state, now)
            except (MissionError, asyncpg.PostgresError, asyncpg.InterfaceError, asyncio.TimeoutError, OSError) as e:
                logger.error(f"❌ [MISSION-EVENT] {code} для профиля {event.profile_id} не обновлён: {e}")
                report.failed[code] = e
                continue

            report.record(code, outcome)

        logger.info(
            f"[MISSION-EVENT] {event_type.value} профиль={event.profile_id} "
            f"applied={report.applied} failed={list(report.failed)}"
        )
        return report

    async def _evaluate(self, evaluator, event, state, code: str):
        try:
            return await evaluator(event, state, self.reads)
        except MissionError:
            raise
        except Exception as e:
            raise EvaluatorError(code, e) from e

    async def _apply(self, event, event_type, definition, evaluator, state, now) -> str:
        retries = 0
        while True:
            current = lifecycle.refresh(state, definition, now)
            result = await self._evaluate(evaluator, event, current, definition.code)
            if result is None:
                return SKIPPED

            next_state = lifecycle.advance(current, result, definition, now)
            if state.is_persisted and next_state.status == state.status and next_state.progress == state.progress:
                # повтор того же события: ничего не пишем
                return UNCHANGED

            audit = MissionProgressEvent(
                profile_id=event.profile_id,
                mission_code=definition.code,
                event_type=event_type.value,
                payload={
                    "status": next_state.status.value,
                    "previous_status": state.status.value,
                    "progress": next_state.progress,
                    "logs": result.logs or {},
                    "catalog_version": self.catalog.version,
                },
                occurred_at=now,
            )

            try:
                async with self.repo.unit_of_work() as uow:
                    await uow.save_state(next_state, expected_version=state.version)
                    await uow.append_event(audit)
                return APPLIED
            except ConcurrentWriteConflict:
                if retries >= self.max_retries:
                    logger.warning(
                        f"⚠️ [MISSION-EVENT] {definition.code}: конфликт записи для профиля "
                        f"{event.profile_id}, событие можно доставить повторно"
                    )
                    raise
                retries += 1
                fresh = await self.repo.get_state(event.profile_id, definition.code)
                state = fresh or lifecycle.fresh_state(event.profile_id, definition, now)
