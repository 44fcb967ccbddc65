
async def profile_exists(conn, profile_id: str) -> bool:
    val = await conn.fetchval("""
        SELECT 1 FROM profiles
        WHERE id = $1
    """, profile_id)
    return val is not None


async def get_profile_id_for_owner(conn, owner_id) -> str | None:
    # владелец профиля: аккаунт, который его создал
    val = await conn.fetchval("""
        SELECT id FROM profiles
        WHERE owner_id = $1
    """, str(owner_id))
    return str(val) if val is not None else None
