import logging

from database import get_pool

logger = logging.getLogger(__name__)


async def create_mission_tables():
    pool = await get_pool()
    async with pool.acquire() as conn:
        # -------------------------------
        # 🔹 Состояние миссии пользователя (profile × mission)
        # -------------------------------
        await conn.execute("""
            CREATE TABLE IF NOT EXISTS user_mission_states (
                id BIGSERIAL PRIMARY KEY,
                profile_id UUID NOT NULL,
                mission_code TEXT NOT NULL,
                status TEXT NOT NULL,
                progress JSONB NOT NULL DEFAULT '{}'::jsonb,
                streak_counter INTEGER NOT NULL DEFAULT 0 CHECK (streak_counter >= 0),
                attempts INTEGER NOT NULL DEFAULT 0 CHECK (attempts >= 0),
                started_at TIMESTAMPTZ,
                completed_at TIMESTAMPTZ,
                next_eligible_at TIMESTAMPTZ,
                last_event_at TIMESTAMPTZ,
                version INTEGER NOT NULL DEFAULT 1,
                updated_at TIMESTAMPTZ NOT NULL DEFAULT NOW(),
                UNIQUE(profile_id, mission_code)
            )
        """)

        # -------------------------------
        # 🔹 Аудит: append-only, строки никогда не меняются
        # -------------------------------
        await conn.execute("""
            CREATE TABLE IF NOT EXISTS mission_progress_events (
                id BIGSERIAL PRIMARY KEY,
                profile_id UUID NOT NULL,
                mission_code TEXT NOT NULL,
                event_type TEXT NOT NULL,
                payload JSONB NOT NULL DEFAULT '{}'::jsonb,
                occurred_at TIMESTAMPTZ NOT NULL DEFAULT NOW()
            )
        """)

        # -------------------------------
        # 🔹 Выданные награды (одна строка на каждый claim)
        # -------------------------------
        await conn.execute("""
            CREATE TABLE IF NOT EXISTS mission_reward_ledger (
                id BIGSERIAL PRIMARY KEY,
                profile_id UUID NOT NULL,
                mission_code TEXT NOT NULL,
                attempt INTEGER NOT NULL,
                source TEXT NOT NULL DEFAULT 'mission_claim',
                xp INTEGER NOT NULL DEFAULT 0,
                rewards JSONB NOT NULL DEFAULT '{}'::jsonb,
                created_at TIMESTAMPTZ NOT NULL DEFAULT NOW(),
                UNIQUE(profile_id, mission_code, attempt)
            )
        """)

        # -------------------------------
        # 🔹 Индексы
        # -------------------------------
        await conn.execute("""
            CREATE INDEX IF NOT EXISTS idx_mission_events_profile_code_time
            ON mission_progress_events(profile_id, mission_code, occurred_at)
        """)
        await conn.execute("""
            CREATE INDEX IF NOT EXISTS idx_mission_states_profile
            ON user_mission_states(profile_id)
        """)
        await conn.execute("""
            CREATE INDEX IF NOT EXISTS idx_reward_ledger_profile
            ON mission_reward_ledger(profile_id, created_at)
        """)

        logger.info("✅ Таблицы миссий созданы или уже существуют.")
