# repositories/progression_repository.py

# =====================================================
# 🔹 Репозиторий: profile_progression
#     XP, уровень, стрик и freeze-токены профиля.
#     Стрик ведёт другая подсистема, миссии его только читают.
# =====================================================


async def get_profile_progression(conn, profile_id: str, timeout: float | None = None):
    return await conn.fetchrow("""
        SELECT profile_id, xp, level, current_streak, best_streak,
               freezes_owned, freezes_used, last_reward_claim_at
        FROM profile_progression
        WHERE profile_id = $1
    """, profile_id, timeout=timeout)


async def lock_profile_progression(conn, profile_id: str):
    # строка блокируется до конца транзакции claim
    return await conn.fetchrow("""
        SELECT xp, level, freezes_owned
        FROM profile_progression
        WHERE profile_id = $1
        FOR UPDATE
    """, profile_id)


async def upsert_progression_rewards(
    conn,
    profile_id: str,
    xp: int,
    level: int,
    freezes_owned: int,
    claimed_at,
):
    await conn.execute("""
        INSERT INTO profile_progression
            (profile_id, xp, level, freezes_owned, last_reward_claim_at)
        VALUES ($1, $2, $3, $4, $5)
        ON CONFLICT (profile_id) DO UPDATE
        SET xp = EXCLUDED.xp,
            level = EXCLUDED.level,
            freezes_owned = EXCLUDED.freezes_owned,
            last_reward_claim_at = EXCLUDED.last_reward_claim_at
    """, profile_id, xp, level, freezes_owned, claimed_at)
