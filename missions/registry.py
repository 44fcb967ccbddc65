# missions/registry.py

EVALUATORS = {}


def register(code: str):
    """Регистрирует evaluator под кодом миссии. Диспетчер код не знает."""

    def decorator(func):
        if code in EVALUATORS:
            raise ValueError(f"Evaluator for {code} is already registered")
        EVALUATORS[code] = func
        return func

    return decorator
