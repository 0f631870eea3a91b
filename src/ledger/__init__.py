"""Ledger: учёт долгов группы с инкрементальным упрощением графа долгов.

Pipeline record_debt:
- Direct netting пары должник / кредитор
- Chain simplification и indirect-connection shortcut на максимальном долге
- Pruning нулевых рёбер
"""

from .config import LedgerConfig
from .errors import DuplicateParticipant, LedgerError, UnknownParticipant
from .ledger import Ledger, SettlementReport
from .netting import NettingResult, NettingStep
from .pruning import PruningResult, PruningStep
from .simplification import (
    ChainSimplifier,
    IndirectConnectionSimplifier,
    ShortcutResult,
    find_largest_debtor_of,
    find_max_debt,
)

__all__ = [
    "Ledger",
    "LedgerConfig",
    "SettlementReport",
    "LedgerError",
    "DuplicateParticipant",
    "UnknownParticipant",
    "NettingStep",
    "NettingResult",
    "ChainSimplifier",
    "IndirectConnectionSimplifier",
    "ShortcutResult",
    "find_max_debt",
    "find_largest_debtor_of",
    "PruningStep",
    "PruningResult",
]
