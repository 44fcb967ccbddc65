# missions/lifecycle.py

"""
Общая для всех миссий машина состояний.

hidden → locked → available → in_progress → claimable → completed | cooldown
cooldown → available, когда прошёл next_eligible_at.

Evaluator только предлагает статус, решает всегда этот модуль.
"""

from datetime import datetime, timedelta

from .conditions import in_season
from .errors import InvalidTransition
from .models import MissionState, MissionStatus, ProgressResult, derive_streak_counter

S = MissionStatus

TRANSITIONS = {
    S.HIDDEN: {S.LOCKED, S.AVAILABLE},
    S.LOCKED: {S.AVAILABLE},
    # available → hidden: сезон закончился, а миссию так и не начали
    S.AVAILABLE: {S.HIDDEN, S.IN_PROGRESS, S.CLAIMABLE},
    S.IN_PROGRESS: {S.CLAIMABLE},
    # available/hidden: повторяемая миссия без cooldown
    S.CLAIMABLE: {S.COMPLETED, S.COOLDOWN, S.AVAILABLE, S.HIDDEN},
    S.COMPLETED: set(),
    S.COOLDOWN: {S.AVAILABLE, S.HIDDEN},
}

# порядок «вперёд» для событийных переходов
_EVENT_RANK = {S.AVAILABLE: 0, S.IN_PROGRESS: 1, S.CLAIMABLE: 2}


def is_eligible(definition, now: datetime) -> bool:
    if not definition.is_seasonal:
        return True
    return in_season(definition.season.start_month, definition.season.end_month, now.month)


def initial_status(definition, now: datetime) -> MissionStatus:
    return S.AVAILABLE if is_eligible(definition, now) else S.HIDDEN


def fresh_state(profile_id: str, definition, now: datetime) -> MissionState:
    return MissionState(
        profile_id=profile_id,
        mission_code=definition.code,
        status=initial_status(definition, now),
    )


def can_transition(current: MissionStatus, target: MissionStatus) -> bool:
    return current == target or target in TRANSITIONS[current]


def assert_transition(code: str, current: MissionStatus, target: MissionStatus):
    if not can_transition(current, target):
        raise InvalidTransition(code, current, f"ILLEGAL:{current.value}->{target.value}")


def refresh(state: MissionState, definition, now: datetime) -> MissionState:
    """
    Ленивые переходы без фонового воркера:
    - cooldown истёк → available (или hidden вне сезона)
    - hidden/locked → available, когда миссия доступна
    - available вне сезона и не начата → hidden
    """
    status = state.status

    if status == S.COOLDOWN:
        if state.next_eligible_at is not None and state.next_eligible_at <= now:
            return state.evolve(status=initial_status(definition, now), next_eligible_at=None)
        return state

    if status in (S.HIDDEN, S.LOCKED) and is_eligible(definition, now):
        return state.evolve(status=S.AVAILABLE)

    if status == S.AVAILABLE and not is_eligible(definition, now):
        return state.evolve(status=S.HIDDEN)

    return state


def advance(state: MissionState, result: ProgressResult, definition, now: datetime) -> MissionState:
    """
    Применяет ответ evaluator'а. Только вперёд: claimable не откатится
    в in_progress, completed/cooldown/hidden/locked статус не меняют,
    но progress продолжаем вести.
    """
    current = state.status
    suggested = result.status or current
    target = current

    if current in _EVENT_RANK and suggested in _EVENT_RANK:
        if _EVENT_RANK[suggested] > _EVENT_RANK[current]:
            target = suggested
    assert_transition(definition.code, current, target)

    started_at = state.started_at
    if current == S.AVAILABLE and target in (S.IN_PROGRESS, S.CLAIMABLE):
        # неявный старт по первому подходящему событию
        started_at = started_at or now

    progress = result.progress if result.progress is not None else state.progress
    if current == S.CLAIMABLE and suggested != S.CLAIMABLE:
        # claimable держит progress, на котором критерий выполнен
        progress = state.progress
    return state.evolve(
        status=target,
        progress=progress,
        streak_counter=derive_streak_counter(progress),
        started_at=started_at,
        last_event_at=now,
    )


def start_transition(state: MissionState, definition, now: datetime) -> MissionState:
    if state.status == S.COOLDOWN:
        raise InvalidTransition(definition.code, state.status, InvalidTransition.IN_COOLDOWN, state.next_eligible_at)
    if state.status != S.AVAILABLE:
        raise InvalidTransition(definition.code, state.status, InvalidTransition.NOT_AVAILABLE)

    return state.evolve(status=S.IN_PROGRESS, started_at=now, last_event_at=now)


def claim_rejection(state: MissionState, code: str) -> InvalidTransition:
    if state.status == S.COMPLETED:
        return InvalidTransition(code, state.status, InvalidTransition.ALREADY_CLAIMED)
    if state.status == S.COOLDOWN:
        return InvalidTransition(code, state.status, InvalidTransition.IN_COOLDOWN, state.next_eligible_at)
    return InvalidTransition(code, state.status, InvalidTransition.NOT_CLAIMABLE)


def claim_transition(state: MissionState, definition, now: datetime) -> MissionState:
    """
    claimable → completed (одноразовая) или cooldown (повторяемая).
    Повторяемая без cooldown сразу возвращается в начальный статус.
    """
    if state.status != S.CLAIMABLE:
        raise claim_rejection(state, definition.code)

    common = dict(
        attempts=state.attempts + 1,
        completed_at=now,
        last_event_at=now,
    )

    if not definition.repeatable:
        target = S.COMPLETED
        return state.evolve(status=target, **common)

    if definition.cooldown_days > 0:
        target = S.COOLDOWN
        next_eligible_at = now + timedelta(days=definition.cooldown_days)
    else:
        target = initial_status(definition, now)
        next_eligible_at = None
    assert_transition(definition.code, state.status, target)

    # новый цикл: progress с нуля
    return state.evolve(
        status=target,
        progress={},
        streak_counter=0,
        started_at=None,
        next_eligible_at=next_eligible_at,
        **common,
    )
