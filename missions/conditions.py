# missions/conditions.py

from datetime import date, datetime

import pytz


def gte(value, target):
    return value is not None and value >= target


def is_qualifying_item(payload: dict) -> bool:
    # ≥3 ключевых поля или одно критическое
    return gte(payload.get("field_count") or 0, 3) or bool(payload.get("critical_field_completed"))


def utc_day(moment: datetime) -> date:
    """Календарный день в UTC, а не локальный и не по часам."""
    if moment.tzinfo is None:
        moment = pytz.utc.localize(moment)
    return moment.astimezone(pytz.utc).date()


def day_gap(previous: date, current: date) -> int:
    return (current - previous).days


def in_season(start_month: int, end_month: int, month: int) -> bool:
    # окно 11..2 переходит через Новый год
    if start_month <= end_month:
        return start_month <= month <= end_month
    return month >= start_month or month <= end_month
