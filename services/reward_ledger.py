import logging
from dataclasses import dataclass

from config import MAX_FREEZE_TOKENS
from missions.errors import ConcurrentWriteConflict
from repositories import progression_repository, reward_repository
from services.xp_service import get_level_for_xp

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class GrantedRewards:
    xp: int = 0
    freeze_tokens: int = 0
    premium_days: int = 0
    badges: tuple = ()
    unlocks: tuple = ()
    extras: tuple = ()
    xp_total: int = 0
    level: int = 1
    freezes_owned: int = 0


class RewardLedger:
    """
    Выдача награды за claim. Работает внутри транзакции claim
    (uow.conn), поэтому откатывается вместе с переходом миссии.
    """

    def __init__(self, max_freeze_tokens: int = MAX_FREEZE_TOKENS):
        self.max_freeze_tokens = max_freeze_tokens

    async def grant(self, uow, profile_id: str, definition, attempt: int, now) -> GrantedRewards:
        conn = uow.conn
        schedule = definition.rewards

        inserted = await reward_repository.insert_reward(
            conn,
            profile_id,
            definition.code,
            attempt,
            schedule.xp,
            schedule.as_dict(),
        )
        if not inserted:
            # эта попытка уже оплачена: второй раз не выдаём
            logger.warning(
                f"⛔ [MISSION-REWARD] Повторная выдача {definition.code} "
                f"attempt={attempt} профилю {profile_id} (откат)"
            )
            raise ConcurrentWriteConflict(profile_id, definition.code)

        row = await progression_repository.lock_profile_progression(conn, profile_id)
        current_xp = row["xp"] if row else 0
        current_freezes = row["freezes_owned"] if row else 0

        xp_total = (current_xp or 0) + schedule.xp
        level = get_level_for_xp(xp_total)
        freezes_owned = min((current_freezes or 0) + schedule.freeze_tokens, self.max_freeze_tokens)

        await progression_repository.upsert_progression_rewards(
            conn, profile_id, xp_total, level, freezes_owned, now
        )

        logger.info(
            f"💰 [MISSION-REWARD] {definition.code} → профиль {profile_id}: "
            f"+{schedule.xp} XP, +{schedule.freeze_tokens} freeze, уровень {level}"
        )

        return GrantedRewards(
            xp=schedule.xp,
            freeze_tokens=schedule.freeze_tokens,
            premium_days=schedule.premium_days,
            badges=schedule.badges,
            unlocks=schedule.unlocks,
            extras=schedule.extras,
            xp_total=xp_total,
            level=level,
            freezes_owned=freezes_owned,
        )
