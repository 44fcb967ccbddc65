# XP → уровень профиля
LEVEL_THRESHOLDS = [
    (1, 0),
    (2, 150),
    (3, 400),
    (4, 800),
    (5, 1400),
    (6, 2200),
    (7, 3200),
    (8, 4400),
    (9, 5800),
    (10, 7400),
]


def get_level_for_xp(total_xp: int) -> int:
    current_level = 1
    for level, xp in LEVEL_THRESHOLDS:
        if total_xp >= xp:
            current_level = level
        else:
            break
    return current_level


def get_next_level_threshold(current_level: int):
    for level, xp in LEVEL_THRESHOLDS:
        if level == current_level + 1:
            return level, xp
    return None


def get_level_progress(total_xp: int) -> dict:
    """Уровень, пол текущего уровня, порог следующего и доля пути (0..1)."""
    level = get_level_for_xp(total_xp)
    floor = dict(LEVEL_THRESHOLDS)[level]
    next_threshold = get_next_level_threshold(level)
    next_xp = next_threshold[1] if next_threshold else None

    progress_to_next = 1.0
    if next_xp is not None:
        span = next_xp - floor
        progress_to_next = min(1.0, max(0.0, (total_xp - floor) / span)) if span > 0 else 1.0

    return {
        "level": level,
        "current_xp": total_xp,
        "current_level_floor": floor,
        "next_level_xp": next_xp,
        "progress_to_next": progress_to_next,
    }
