# repositories/reward_repository.py


# -------------------------------
# 🏆 Запись в журнал наград (одна строка на claim)
# -------------------------------
async def insert_reward(
    conn,
    profile_id: str,
    mission_code: str,
    attempt: int,
    xp: int,
    rewards: dict,
    source: str = "mission_claim",
) -> bool:
    """
    🔹 UNIQUE(profile_id, mission_code, attempt): повторный claim
       той же попытки ничего не вставит.
    🔹 Возвращает True, если строка реально добавлена.
    """
    row_id = await conn.fetchval("""
        INSERT INTO mission_reward_ledger
            (profile_id, mission_code, attempt, source, xp, rewards)
        VALUES ($1, $2, $3, $4, $5, $6)
        ON CONFLICT (profile_id, mission_code, attempt) DO NOTHING
        RETURNING id
    """, profile_id, mission_code, attempt, source, xp, rewards)
    return row_id is not None

