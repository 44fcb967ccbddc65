# repositories/circle_repository.py


async def count_circle_members(conn, profile_id: str, timeout: float | None = None) -> int:
    val = await conn.fetchval("""
        SELECT COUNT(*)
        FROM trusted_circle_memberships
        WHERE owner_profile_id = $1
    """, profile_id, timeout=timeout)
    return val or 0
