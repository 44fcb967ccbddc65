import asyncio
from datetime import timedelta

import pytest

from missions.errors import ConcurrentWriteConflict, InvalidTransition, UnknownMission
from missions.events import MISSION_CLAIMED, MISSION_STARTED
from missions.models import MissionState, MissionStatus

from conftest import PROFILE_ID, at, make_event

S = MissionStatus


def claimable(repo, code, **kwargs):
    kwargs.setdefault("version", 2)
    return repo.put(MissionState(
        profile_id=PROFILE_ID,
        mission_code=code,
        status=S.CLAIMABLE,
        **kwargs,
    ))


# -----------------------------------------
# ▶️ start
# -----------------------------------------
@pytest.mark.asyncio
async def test_start_fresh_mission(service, repo):
    now = at(2025, 3, 1)
    state = await service.start(PROFILE_ID, "six_pillars", now=now)

    assert state.status == S.IN_PROGRESS
    assert state.started_at == now
    assert state.version == 1
    assert repo.events_for("SIX_PILLARS")[0].event_type == MISSION_STARTED


@pytest.mark.asyncio
async def test_start_twice_is_rejected(service):
    await service.start(PROFILE_ID, "SIX_PILLARS", now=at(2025, 3, 1))

    with pytest.raises(InvalidTransition) as exc:
        await service.start(PROFILE_ID, "SIX_PILLARS", now=at(2025, 3, 2))
    assert exc.value.reason == InvalidTransition.NOT_AVAILABLE


@pytest.mark.asyncio
async def test_start_out_of_season_is_rejected(service, repo):
    with pytest.raises(InvalidTransition) as exc:
        await service.start(PROFILE_ID, "STEP_INTO_BOOTS", now=at(2025, 6, 1))

    assert exc.value.reason == InvalidTransition.NOT_AVAILABLE
    assert repo.states == {}


@pytest.mark.asyncio
async def test_unknown_mission_code(service):
    with pytest.raises(UnknownMission):
        await service.start(PROFILE_ID, "NOPE", now=at(2025, 3, 1))
    with pytest.raises(UnknownMission):
        await service.claim(PROFILE_ID, "NOPE", now=at(2025, 3, 1))


# -----------------------------------------
# 🏆 claim
# -----------------------------------------
@pytest.mark.asyncio
async def test_claim_non_claimable_has_no_effect(service, repo, ledger):
    await service.start(PROFILE_ID, "SIX_PILLARS", now=at(2025, 3, 1))
    before = dict(repo.states)
    events = len(repo.events)

    with pytest.raises(InvalidTransition) as exc:
        await service.claim(PROFILE_ID, "SIX_PILLARS", now=at(2025, 3, 2))

    assert exc.value.reason == InvalidTransition.NOT_CLAIMABLE
    assert repo.states == before
    assert len(repo.events) == events
    assert ledger.grants == []


@pytest.mark.asyncio
async def test_claim_non_repeatable_then_already_claimed(service, repo, ledger):
    claimable(repo, "ROZRUCH_7_7", progress={"streak": 7}, streak_counter=7)

    result = await service.claim(PROFILE_ID, "ROZRUCH_7_7", now=at(2025, 3, 8))

    assert result.state.status == S.COMPLETED
    assert result.state.attempts == 1
    assert result.rewards.xp == 100
    assert ledger.grants == [(PROFILE_ID, "ROZRUCH_7_7", 1)]

    audit = repo.events_for("ROZRUCH_7_7")[-1]
    assert audit.event_type == MISSION_CLAIMED
    assert audit.payload["xp_reward"] == 100
    assert audit.payload["attempt"] == 1

    with pytest.raises(InvalidTransition) as exc:
        await service.claim(PROFILE_ID, "ROZRUCH_7_7", now=at(2025, 3, 9))
    assert exc.value.reason == InvalidTransition.ALREADY_CLAIMED
    assert len(ledger.grants) == 1


@pytest.mark.asyncio
async def test_cooldown_round_trip(service, repo, reads, ledger):
    now = at(2025, 1, 10)
    claimable(repo, "SIX_PILLARS", progress={"missing": []})

    result = await service.claim(PROFILE_ID, "SIX_PILLARS", now=now)
    assert result.state.status == S.COOLDOWN
    assert result.state.next_eligible_at == now + timedelta(days=90)
    assert result.state.progress == {}

    with pytest.raises(InvalidTransition) as exc:
        await service.claim(PROFILE_ID, "SIX_PILLARS", now=now + timedelta(days=30))
    assert exc.value.reason == InvalidTransition.IN_COOLDOWN
    assert exc.value.next_eligible_at == now + timedelta(days=90)

    later = now + timedelta(days=90)
    by_code = {d.code: s for d, s in await service.get_missions(PROFILE_ID, now=later)}
    assert by_code["SIX_PILLARS"].status == S.AVAILABLE

    # новый цикл: событие снова двигает миссию
    reads.garments = ["outerwear", "tops", "bottoms", "headwear", "accessories", "footwear"]
    await service.process_event(make_event("ITEM_CREATED", later, fieldCount=3), now=later)
    assert repo.state("SIX_PILLARS").status == S.CLAIMABLE

    second = await service.claim(PROFILE_ID, "SIX_PILLARS", now=later)
    assert second.state.attempts == 2
    assert ledger.grants == [(PROFILE_ID, "SIX_PILLARS", 1), (PROFILE_ID, "SIX_PILLARS", 2)]


@pytest.mark.asyncio
async def test_concurrent_claims_grant_once(service, repo, ledger):
    claimable(repo, "ROZRUCH_7_7", progress={"streak": 7})
    now = at(2025, 3, 8)

    results = await asyncio.gather(
        service.claim(PROFILE_ID, "ROZRUCH_7_7", now=now),
        service.claim(PROFILE_ID, "ROZRUCH_7_7", now=now),
        return_exceptions=True,
    )

    wins = [r for r in results if not isinstance(r, Exception)]
    losses = [r for r in results if isinstance(r, Exception)]
    assert len(wins) == 1
    assert len(losses) == 1
    assert isinstance(losses[0], InvalidTransition)
    assert losses[0].reason == InvalidTransition.ALREADY_CLAIMED
    assert ledger.grants == [(PROFILE_ID, "ROZRUCH_7_7", 1)]
    assert repo.state("ROZRUCH_7_7").attempts == 1


@pytest.mark.asyncio
async def test_failed_grant_rolls_back_claim(service, repo, ledger):
    claimable(repo, "SECRET_HELPER")
    # попытка 1 уже оплачена: журнал откажет, состояние должно откатиться
    ledger.grants.append((PROFILE_ID, "SECRET_HELPER", 1))

    with pytest.raises(ConcurrentWriteConflict):
        await service.claim(PROFILE_ID, "SECRET_HELPER", now=at(2025, 3, 1))

    state = repo.state("SECRET_HELPER")
    assert state.status == S.CLAIMABLE
    assert state.version == 2
    assert repo.events_for("SECRET_HELPER") == []


@pytest.mark.asyncio
async def test_get_missions_lists_whole_catalog(service, catalog):
    items = await service.get_missions(PROFILE_ID, now=at(2025, 6, 1))

    assert len(items) == len(catalog)
    by_code = {d.code: s for d, s in items}
    assert by_code["STEP_INTO_BOOTS"].status == S.HIDDEN
    assert by_code["ROZRUCH_7_7"].status == S.AVAILABLE
