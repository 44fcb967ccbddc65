# missions/errors.py


class MissionError(Exception):
    """Базовая ошибка движка миссий."""


class UnknownEventType(MissionError):
    def __init__(self, event_type):
        self.event_type = event_type
        super().__init__(f"Unknown mission event type: {event_type!r}")


class UnknownMission(MissionError):
    def __init__(self, code: str):
        self.code = code
        super().__init__(f"Unknown mission code: {code!r}")


class EvaluatorError(MissionError):
    """Исключение внутри evaluator'а одной миссии. Соседей не трогает."""

    def __init__(self, code: str, cause: Exception):
        self.code = code
        self.cause = cause
        super().__init__(f"Evaluator for {code} failed: {cause}")


class AuxiliaryReadFailure(MissionError):
    """Чужая таблица не прочиталась (таймаут, ошибка запроса)."""

    def __init__(self, source: str, cause: Exception):
        self.source = source
        self.cause = cause
        super().__init__(f"Auxiliary read {source} failed: {cause}")


class ConcurrentWriteConflict(MissionError):
    def __init__(self, profile_id, code: str):
        self.profile_id = profile_id
        self.code = code
        super().__init__(f"Concurrent write on {code} for profile {profile_id}")


class InvalidTransition(MissionError):
    """
    Недопустимый start/claim.
    reason: машинный код, чтобы UI мог показать разный текст:
    NOT_AVAILABLE, NOT_CLAIMABLE, ALREADY_CLAIMED, IN_COOLDOWN.
    """

    NOT_AVAILABLE = "NOT_AVAILABLE"
    NOT_CLAIMABLE = "NOT_CLAIMABLE"
    ALREADY_CLAIMED = "ALREADY_CLAIMED"
    IN_COOLDOWN = "IN_COOLDOWN"

    def __init__(self, code: str, status, reason: str, next_eligible_at=None):
        self.code = code
        self.status = status
        self.reason = reason
        self.next_eligible_at = next_eligible_at
        message = f"{code}: {reason} (status={status})"
        if next_eligible_at is not None:
            message += f", eligible at {next_eligible_at.isoformat()}"
        super().__init__(message)
