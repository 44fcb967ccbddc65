# missions/reads.py

import asyncio
import logging

import asyncpg

from repositories import circle_repository, progression_repository, wardrobe_repository, wishlist_repository

from .errors import AuxiliaryReadFailure

logger = logging.getLogger(__name__)


class AuxiliaryReads:
    """
    Только чтение чужих таблиц для evaluator'ов.
    Любая ошибка запроса → AuxiliaryReadFailure, чтобы диспетчер
    пропустил только эту миссию.
    """

    def __init__(self, pool, timeout: float | None = None):
        self.pool = pool
        self.timeout = timeout

    async def _read(self, source: str, query, profile_id: str):
        try:
            async with self.pool.acquire() as conn:
                return await query(conn, profile_id, timeout=self.timeout)
        except (asyncpg.PostgresError, asyncpg.InterfaceError, asyncio.TimeoutError, OSError) as e:
            logger.warning(f"[MISSION-READ] {source} для профиля {profile_id} не прочитан: {e}")
            raise AuxiliaryReadFailure(source, e) from e

    async def garment_categories(self, profile_id: str) -> list:
        return await self._read("garments", wardrobe_repository.get_garment_categories, profile_id)

    async def size_label_categories(self, profile_id: str) -> list:
        return await self._read("size_labels", wardrobe_repository.get_size_label_categories, profile_id)

    async def measurement_categories(self, profile_id: str) -> list:
        return await self._read("measurements", wardrobe_repository.get_measurement_categories, profile_id)

    async def wishlist_items_with_size(self, profile_id: str) -> int:
        return await self._read("wishlist_items", wishlist_repository.count_items_with_matched_size, profile_id)

    async def circle_members(self, profile_id: str) -> int:
        return await self._read("trusted_circle_memberships", circle_repository.count_circle_members, profile_id)

    async def progression(self, profile_id: str) -> dict:
        row = await self._read("profile_progression", progression_repository.get_profile_progression, profile_id)
        return dict(row) if row else {}
