# repositories/wardrobe_repository.py

# =====================================================
# 🔹 Репозиторий: гардероб профиля (только чтение)
#     Таблицы garments / size_labels / measurements
#     принадлежат гардеробу, миссии их не пишут.
# =====================================================


async def get_garment_categories(conn, profile_id: str, timeout: float | None = None):
    rows = await conn.fetch("""
        SELECT category FROM garments
        WHERE profile_id = $1
    """, profile_id, timeout=timeout)
    return [row["category"] for row in rows]


async def get_size_label_categories(conn, profile_id: str, timeout: float | None = None):
    rows = await conn.fetch("""
        SELECT category FROM size_labels
        WHERE profile_id = $1
    """, profile_id, timeout=timeout)
    return [row["category"] for row in rows]


async def get_measurement_categories(conn, profile_id: str, timeout: float | None = None):
    rows = await conn.fetch("""
        SELECT category FROM measurements
        WHERE profile_id = $1
    """, profile_id, timeout=timeout)
    return [row["category"] for row in rows]
