# missions/evaluators.py

"""
Evaluator'ы миссий: (event, state, reads) → ProgressResult | None.

None: событие не относится к миссии или уже учтено, запись не нужна.
Побочных эффектов нет, только чтение через reads.
"""

import asyncio
from datetime import date

from .conditions import day_gap, gte, is_qualifying_item, utc_day
from .events import EventType
from .models import MissionStatus, ProgressResult
from .registry import register

S = MissionStatus


def _pending_status(state, criterion_met: bool) -> MissionStatus:
    if criterion_met:
        return S.CLAIMABLE
    if state.status == S.COMPLETED:
        return S.COMPLETED
    return S.IN_PROGRESS


# ==================================================
# 🔥 ROZRUCH 7/7: 7 дней подряд
# ==================================================

STREAK_TARGET_DAYS = 7


@register("ROZRUCH_7_7")
async def daily_streak(event, state, reads):
    if event.type != EventType.ITEM_CREATED:
        return None
    if not is_qualifying_item(event.payload):
        return None

    day = utc_day(event.occurred_at)
    previous = state.progress or {}
    completed_days = set(previous.get("completedDays") or [])

    # дубль за тот же день ловим по множеству дней, а не по времени
    if day.isoformat() in completed_days:
        return None

    streak = int(previous.get("streak") or 0)
    last_day = previous.get("lastDay")

    if not last_day:
        streak = 1
        last_day = day.isoformat()
    else:
        gap = day_gap(date.fromisoformat(last_day), day)
        if gap == 1:
            streak += 1
            last_day = day.isoformat()
        elif gap >= 2:
            streak = 1
            last_day = day.isoformat()
        # gap < 0: опоздавшее событие за прошлый день, стрик не трогаем

    completed_days.add(day.isoformat())

    progress = {
        "streak": streak,
        "lastDay": last_day,
        "completedDays": sorted(completed_days),
    }
    return ProgressResult(
        progress=progress,
        status=_pending_status(state, gte(streak, STREAK_TARGET_DAYS)),
        logs={"streak": streak, "day": day.isoformat()},
    )


# ==================================================
# 🧱 SIX PILLARS: по предмету в каждой из 6 категорий
# ==================================================

SIX_PILLARS_REQUIRED = ["outerwear", "tops", "bottoms", "headwear", "accessories", "footwear"]

# TODO: алиасы выглядят как след переименования категорий, ждём решения продукта
CATEGORY_ALIASES = {
    "headwear": "lingerie",
    "accessories": "jewelry",
}


def collect_categories(*collections) -> set:
    present = set()
    for rows in collections:
        for category in rows or []:
            if not category:
                continue
            normalized = str(category).strip().lower()
            present.add(normalized)
            alias = CATEGORY_ALIASES.get(normalized)
            if alias:
                present.add(alias)
    return present


@register("SIX_PILLARS")
async def six_pillars(event, state, reads):
    if event.type != EventType.ITEM_CREATED:
        return None

    garments, size_labels, measurements = await asyncio.gather(
        reads.garment_categories(event.profile_id),
        reads.size_label_categories(event.profile_id),
        reads.measurement_categories(event.profile_id),
    )
    present = collect_categories(garments, size_labels, measurements)

    completed = [c for c in SIX_PILLARS_REQUIRED if c in present]
    missing = [c for c in SIX_PILLARS_REQUIRED if c not in present]

    progress = {
        "required": list(SIX_PILLARS_REQUIRED),
        "completed": completed,
        "missing": missing,
    }
    return ProgressResult(progress=progress, status=_pending_status(state, not missing))


# ==================================================
# 🎁 WISHLIST PRO: 5 позиций с размером
# ==================================================

WISHLIST_REQUIRED_ITEMS = 5


@register("WISHLIST_PRO")
async def wishlist_pro(event, state, reads):
    if event.type != EventType.WISHLIST_ITEM_CREATED:
        return None

    count = await reads.wishlist_items_with_size(event.profile_id)
    progress = {"itemsWithSizes": count, "required": WISHLIST_REQUIRED_ITEMS}
    return ProgressResult(progress=progress, status=_pending_status(state, gte(count, WISHLIST_REQUIRED_ITEMS)))


# ==================================================
# 🤫 SECRET HELPER: хотя бы один человек в круге
# ==================================================

CIRCLE_REQUIRED_MEMBERS = 1


@register("SECRET_HELPER")
async def secret_helper(event, state, reads):
    if event.type != EventType.PROFILE_SHARED:
        return None

    members = await reads.circle_members(event.profile_id)
    progress = {"members": members, "required": CIRCLE_REQUIRED_MEMBERS}
    return ProgressResult(progress=progress, status=_pending_status(state, gte(members, CIRCLE_REQUIRED_MEMBERS)))


# ==================================================
# 🧊 STREAK RESCUER: зеркало стрика из profile_progression
# ==================================================

RESCUER_REQUIRED_DAYS = 14


@register("STREAK_RESCUER")
async def streak_rescuer(event, state, reads):
    if event.type != EventType.STREAK_UPDATED:
        return None
    if event.payload.get("category") == "wishlist-share":
        return None

    progression = await reads.progression(event.profile_id)
    streak = int(progression.get("current_streak") or 0)
    freezes_owned = int(progression.get("freezes_owned") or 0)

    progress = {
        "streak": streak,
        "required": RESCUER_REQUIRED_DAYS,
        "freezesOwned": freezes_owned,
    }
    return ProgressResult(progress=progress, status=_pending_status(state, gte(streak, RESCUER_REQUIRED_DAYS)))
