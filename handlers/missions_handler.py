import logging

from aiogram import Router, types
from aiogram.filters import Command, CommandObject

from database import get_pool
from missions import InvalidTransition, MissionStatus, UnknownMission
from repositories.profile_repository import get_profile_id_for_owner
from services.xp_service import get_level_progress

router = Router()
logger = logging.getLogger(__name__)

STATUS_ICONS = {
    MissionStatus.HIDDEN: "🙈",
    MissionStatus.LOCKED: "🔒",
    MissionStatus.AVAILABLE: "🟢",
    MissionStatus.IN_PROGRESS: "⏳",
    MissionStatus.CLAIMABLE: "🎁",
    MissionStatus.COMPLETED: "✅",
    MissionStatus.COOLDOWN: "🧊",
}


# ============================================================
#                    ТЕКСТЫ (без aiogram)
# ============================================================
def format_rejection(error: InvalidTransition) -> str:
    if error.reason == InvalidTransition.ALREADY_CLAIMED:
        return f"✅ Награда за {error.code} уже получена."
    if error.reason == InvalidTransition.IN_COOLDOWN:
        if error.next_eligible_at:
            return f"🧊 {error.code} снова будет доступна {error.next_eligible_at:%d.%m.%Y}."
        return f"🧊 {error.code} пока на перезарядке."
    if error.reason == InvalidTransition.NOT_AVAILABLE:
        return f"🔒 {error.code} сейчас нельзя начать."
    return f"⏳ {error.code} ещё не выполнена, забирать пока нечего."


def format_claim(result) -> str:
    rewards = result.rewards
    level = get_level_progress(rewards.xp_total)

    lines = [f"🏆 Миссия {result.state.mission_code} выполнена!"]
    if rewards.xp:
        lines.append(f"+{rewards.xp} XP (всего {rewards.xp_total})")
    if rewards.freeze_tokens:
        lines.append(f"🧊 +{rewards.freeze_tokens} заморозка (у тебя {rewards.freezes_owned})")
    for badge in rewards.badges:
        lines.append(f"🎖 Бейдж: {badge}")

    if level["next_level_xp"] is None:
        lines.append(f"⭐ Уровень {level['level']} (максимальный)")
    else:
        lines.append(
            f"⭐ Уровень {level['level']}: {level['current_xp']}/{level['next_level_xp']} XP "
            f"({round(level['progress_to_next'] * 100)}%)"
        )
    if result.state.next_eligible_at:
        lines.append(f"🔁 Повторить можно с {result.state.next_eligible_at:%d.%m.%Y}")
    return "\n".join(lines)


def format_missions(items) -> str:
    lines = ["🎯 *Миссии*", ""]
    for definition, state in items:
        if state.status == MissionStatus.HIDDEN:
            continue
        icon = STATUS_ICONS.get(state.status, "•")
        lines.append(f"{icon} `{definition.code}` {definition.title}")
    return "\n".join(lines)


async def _profile_for(message: types.Message):
    pool = await get_pool()
    async with pool.acquire() as conn:
        return await get_profile_id_for_owner(conn, message.from_user.id)


# ============================================================
#                       СПИСОК МИССИЙ
# ============================================================
@router.message(Command("missions"))
async def show_missions(message: types.Message, missions):
    profile_id = await _profile_for(message)
    if not profile_id:
        await message.answer("Сначала создай профиль 🙂")
        return

    items = await missions.get_missions(profile_id)
    await message.answer(format_missions(items), parse_mode="Markdown")


# ============================================================
#                       СТАРТ МИССИИ
# ============================================================
@router.message(Command("start_mission"))
async def start_mission(message: types.Message, command: CommandObject, missions):
    code = (command.args or "").strip()
    if not code:
        await message.answer("Укажи код: /start_mission SIX_PILLARS")
        return

    profile_id = await _profile_for(message)
    if not profile_id:
        await message.answer("Сначала создай профиль 🙂")
        return

    try:
        state = await missions.start(profile_id, code)
    except UnknownMission:
        await message.answer(f"Миссии {code} не существует.")
        return
    except InvalidTransition as e:
        logger.info(f"[MISSIONS] {message.from_user.id}: start {code} отклонён ({e.reason})")
        await message.answer(format_rejection(e))
        return

    await message.answer(f"▶️ Миссия {state.mission_code} начата. Удачи!")


# ============================================================
#                      ЗАБРАТЬ НАГРАДУ
# ============================================================
@router.message(Command("claim"))
async def claim_mission(message: types.Message, command: CommandObject, missions):
    code = (command.args or "").strip()
    if not code:
        await message.answer("Укажи код: /claim ROZRUCH_7_7")
        return

    profile_id = await _profile_for(message)
    if not profile_id:
        await message.answer("Сначала создай профиль 🙂")
        return

    try:
        result = await missions.claim(profile_id, code)
    except UnknownMission:
        await message.answer(f"Миссии {code} не существует.")
        return
    except InvalidTransition as e:
        logger.info(f"[MISSIONS] {message.from_user.id}: claim {code} отклонён ({e.reason})")
        await message.answer(format_rejection(e))
        return

    await message.answer(format_claim(result))
