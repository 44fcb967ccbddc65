import pytest

from missions.catalog import MissionCatalog, SeasonalWindow, build_definition
from missions.conditions import in_season
from missions.definitions import MISSIONS
from missions.errors import UnknownEventType, UnknownMission
from missions.events import EventType


def test_catalog_loads_every_mission(catalog):
    assert len(catalog) == len(MISSIONS) == 30
    assert "ROZRUCH_7_7" in catalog
    assert catalog.version


def test_catalog_is_read_only(catalog):
    with pytest.raises(TypeError):
        catalog.definitions["NEW"] = None


def test_require_is_case_insensitive(catalog):
    assert catalog.require("rozruch_7_7").code == "ROZRUCH_7_7"
    with pytest.raises(UnknownMission):
        catalog.require("MISSING")


def test_for_event_filters_by_trigger(catalog):
    codes = {d.code for d in catalog.for_event(EventType.STREAK_UPDATED)}
    assert "STREAK_RESCUER" in codes
    assert "ROZRUCH_7_7" not in codes


def test_reward_schedule(catalog):
    rescuer = catalog.require("STREAK_RESCUER")
    assert rescuer.rewards.freeze_tokens == 1
    assert rescuer.rewards.xp == 0
    assert rescuer.cooldown_days == 30
    assert catalog.require("ROZRUCH_7_7").rewards.as_dict()["badges"] == ["ROZGRZANY"]


def test_seasonal_definition(catalog):
    boots = catalog.require("STEP_INTO_BOOTS")
    assert boots.is_seasonal
    assert boots.season == SeasonalWindow(11, 2)
    assert not catalog.require("SIX_PILLARS").is_seasonal


@pytest.mark.parametrize("month,expected", [(12, True), (1, True), (6, False), (11, True), (3, False)])
def test_in_season_wraps(month, expected):
    assert in_season(11, 2, month) is expected


def test_bad_definitions_are_rejected():
    base = dict(MISSIONS["SIX_PILLARS"])

    with pytest.raises(ValueError):
        build_definition("X", {**base, "season": {"start_month": 13, "end_month": 2}})
    with pytest.raises(ValueError):
        build_definition("X", {**base, "cooldown_days": -1})
    with pytest.raises(UnknownEventType):
        build_definition("X", {**base, "triggers": ["ITEM_EXPLODED"]})


def test_custom_catalog_version():
    catalog = MissionCatalog.load({"SIX_PILLARS": MISSIONS["SIX_PILLARS"]}, version="test")
    assert catalog.version == "test"
    assert len(catalog) == 1
