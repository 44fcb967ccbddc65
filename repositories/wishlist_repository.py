# repositories/wishlist_repository.py


# -------------------------------
# 🎁 Позиции вишлиста с подобранным размером
# -------------------------------
async def count_items_with_matched_size(conn, profile_id: str, timeout: float | None = None) -> int:
    val = await conn.fetchval("""
        SELECT COUNT(*)
        FROM wishlist_items wi
        JOIN wishlists w ON w.id = wi.wishlist_id
        WHERE w.owner_profile_id = $1
          AND wi.matched_size IS NOT NULL
    """, profile_id, timeout=timeout)
    return val or 0
