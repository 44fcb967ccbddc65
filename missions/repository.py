# missions/repository.py

from repositories import profile_repository

from .errors import ConcurrentWriteConflict
from .models import MissionState, MissionStatus

_STATE_COLUMNS = """
    profile_id, mission_code, status, progress, streak_counter, attempts,
    started_at, completed_at, next_eligible_at, last_event_at, version
"""


def _row_to_state(row) -> MissionState:
    return MissionState(
        profile_id=str(row["profile_id"]),
        mission_code=row["mission_code"],
        status=MissionStatus(row["status"]),
        progress=dict(row["progress"] or {}),
        streak_counter=row["streak_counter"],
        attempts=row["attempts"],
        started_at=row["started_at"],
        completed_at=row["completed_at"],
        next_eligible_at=row["next_eligible_at"],
        last_event_at=row["last_event_at"],
        version=row["version"],
    )


class MissionUnitOfWork:
    """
    Одна транзакция на одну миссию: upsert состояния + аудит
    (+ награда при claim). Либо всё, либо ничего.

    Usage:
        async with repo.unit_of_work() as uow:
            saved = await uow.save_state(new_state, expected_version=state.version)
            await uow.append_event(audit)
    """

    def __init__(self, pool):
        self.pool = pool
        self.conn = None
        self._tx = None

    async def __aenter__(self) -> "MissionUnitOfWork":
        self.conn = await self.pool.acquire()
        self._tx = self.conn.transaction()
        await self._tx.start()
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb):
        try:
            if exc_type is None:
                await self._tx.commit()
            else:
                await self._tx.rollback()
        finally:
            await self.pool.release(self.conn)
            self.conn = None
            self._tx = None

    async def save_state(self, state: MissionState, expected_version: int | None) -> MissionState:
        """
        Условная запись по version. Проиграли гонку → ConcurrentWriteConflict.
        """
        args = (
            state.profile_id,
            state.mission_code,
            state.status.value,
            state.progress,
            state.streak_counter,
            state.attempts,
            state.started_at,
            state.completed_at,
            state.next_eligible_at,
            state.last_event_at,
        )

        if expected_version is None:
            version = await self.conn.fetchval("""
                INSERT INTO user_mission_states
                    (profile_id, mission_code, status, progress, streak_counter, attempts,
                     started_at, completed_at, next_eligible_at, last_event_at, version)
                VALUES ($1, $2, $3, $4, $5, $6, $7, $8, $9, $10, 1)
                ON CONFLICT (profile_id, mission_code) DO NOTHING
                RETURNING version
            """, *args)
        else:
            version = await self.conn.fetchval("""
                UPDATE user_mission_states
                SET status = $3,
                    progress = $4,
                    streak_counter = $5,
                    attempts = $6,
                    started_at = $7,
                    completed_at = $8,
                    next_eligible_at = $9,
                    last_event_at = $10,
                    version = version + 1,
                    updated_at = NOW()
                WHERE profile_id = $1
                  AND mission_code = $2
                  AND version = $11
                RETURNING version
            """, *args, expected_version)

        if version is None:
            raise ConcurrentWriteConflict(state.profile_id, state.mission_code)
        return state.evolve(version=version)

    async def append_event(self, event):
        await self.conn.execute("""
            INSERT INTO mission_progress_events
                (profile_id, mission_code, event_type, payload, occurred_at)
            VALUES ($1, $2, $3, $4, $5)
        """, event.profile_id, event.mission_code, event.event_type, event.payload, event.occurred_at)


class MissionRepository:
    def __init__(self, pool):
        self.pool = pool

    def unit_of_work(self) -> MissionUnitOfWork:
        return MissionUnitOfWork(self.pool)

    async def profile_exists(self, profile_id: str) -> bool:
        async with self.pool.acquire() as conn:
            return await profile_repository.profile_exists(conn, profile_id)

    async def get_state(self, profile_id: str, mission_code: str) -> MissionState | None:
        query = f"""
        SELECT {_STATE_COLUMNS}
        FROM user_mission_states
        WHERE profile_id = $1 AND mission_code = $2
        """
        async with self.pool.acquire() as conn:
            row = await conn.fetchrow(query, profile_id, mission_code)
            return _row_to_state(row) if row else None

    async def get_states(self, profile_id: str, mission_codes=None) -> dict:
        if mission_codes is None:
            query = f"""
            SELECT {_STATE_COLUMNS}
            FROM user_mission_states
            WHERE profile_id = $1
            """
            args = (profile_id,)
        else:
            query = f"""
            SELECT {_STATE_COLUMNS}
            FROM user_mission_states
            WHERE profile_id = $1 AND mission_code = ANY($2::text[])
            """
            args = (profile_id, list(mission_codes))

        async with self.pool.acquire() as conn:
            rows = await conn.fetch(query, *args)
            return {row["mission_code"]: _row_to_state(row) for row in rows}
