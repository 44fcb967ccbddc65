from . import evaluators  # noqa: F401  регистрация evaluator'ов
from .catalog import MissionCatalog
from .dispatcher import DispatchReport, EventDispatcher
from .errors import InvalidTransition, MissionError, UnknownEventType, UnknownMission
from .events import DomainEvent, EventType
from .models import MissionState, MissionStatus
from .reads import AuxiliaryReads
from .repository import MissionRepository
from .service import ClaimResult, MissionService
from config import MISSIONS_READ_TIMEOUT
from database import get_pool


async def setup_missions(ledger=None, catalog=None):
    from services.reward_ledger import RewardLedger

    pool = await get_pool()
    repo = MissionRepository(pool)
    reads = AuxiliaryReads(pool, timeout=MISSIONS_READ_TIMEOUT)

    return MissionService(
        repository=repo,
        reads=reads,
        ledger=ledger or RewardLedger(),
        catalog=catalog,
    )
