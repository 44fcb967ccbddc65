import json
import logging

import asyncpg
from config import DATABASE_URL

logger = logging.getLogger(__name__)

pool = None


async def _init_connection(conn):
    # progress / payload храним как jsonb, отдаём наружу как dict
    await conn.set_type_codec(
        "jsonb",
        encoder=_dumps,
        decoder=_loads,
        schema="pg_catalog",
    )


def _dumps(value):
    return json.dumps(value, default=str)


def _loads(value):
    return json.loads(value)


async def create_pool():
    global pool
    if pool is None:
        if not DATABASE_URL:
            raise RuntimeError("DATABASE_URL не задан. Проверь .env")
        pool = await asyncpg.create_pool(DATABASE_URL, init=_init_connection)
        logger.info("✅ Database pool created")


async def close_pool():
    global pool
    if pool:
        await pool.close()
        pool = None
        logger.info("🔒 Database pool closed")


async def get_pool():
    global pool
    if pool is None:
        raise RuntimeError("Database pool is not initialized! Call create_pool() first.")
    return pool
