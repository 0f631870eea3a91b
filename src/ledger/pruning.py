"""Pruning: удаление рёбер с нулевой (или неположительной) суммой.

Последний шаг pipeline record_debt: выполняется безусловно и один раз,
после всех мутаций netting / simplification. Повторный запуск ничего не меняет.
"""

import logging
from dataclasses import dataclass
from typing import Mapping

from src.core.domain.money import Money
from src.core.domain.participant import Participant

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class PruningResult:
    """Результат pruning."""

    removed_count: int


class PruningStep:
    """Удаление всех рёбер с amount <= 0 во всём ledger."""

    def __init__(self, zero: Money):
        self.zero = zero

    def apply(self, participants: Mapping[str, Participant]) -> PruningResult:
        removed = 0
        for participant in participants.values():
            removed += participant.remove_debts_not_above(self.zero)

        if removed:
            logger.debug("pruned %d settled debt(s)", removed)
        return PruningResult(removed_count=removed)
