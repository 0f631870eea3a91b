"""Netting: слияние и взаимозачёт долгов между двумя участниками.

Шаг 1 pipeline record_debt:
1. Новый долг D → C сливается с существующим ребром D → C (или создаёт его)
2. Если существуют оба направления D → C и C → D, они взаимозачитываются:
   - D→C > C→D: D→C = D→C - C→D, C→D = 0
   - D→C < C→D: C→D = C→D - D→C, D→C = 0
   - равны: оба = 0

После шага между парой остаётся не более одного ненулевого направления.
Нулевые рёбра удаляются позже (pruning).
"""

import logging
from dataclasses import dataclass
from typing import Optional

from src.core.domain.money import Money
from src.core.domain.participant import Participant

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class NettingResult:
    """Результат взаимозачёта пары участников."""

    debtor: str
    creditor: str

    # True если оба направления существовали и был выполнен зачёт
    offset_applied: bool

    # Суммы после шага (None если ребра нет)
    debtor_owes: Optional[Money]
    creditor_owes: Optional[Money]

    details: str


class NettingStep:
    """Direct netting между двумя участниками.

    Stateless: работает только с переданными участниками.
    """

    def __init__(self, zero: Money):
        """
        Args:
            zero: нулевая сумма в валюте ledger
        """
        self.zero = zero

    def apply(self, amount: Money, debtor: Participant, creditor: Participant) -> NettingResult:
        """Запись нового долга debtor → creditor и взаимозачёт пары.

        Args:
            amount: сумма нового долга
            debtor: должник
            creditor: кредитор

        Returns:
            NettingResult с суммами обоих направлений после зачёта
        """
        debtor.add_debt(creditor.id, amount)
        return self.net_pair(debtor, creditor)

    def net_pair(self, debtor: Participant, creditor: Participant) -> NettingResult:
        """Взаимозачёт встречных рёбер debtor → creditor и creditor → debtor.

        Используется также после каждого reroute в simplification,
        чтобы новое ребро не сосуществовало со встречным.
        """
        borrowed = debtor.debt_to(creditor.id)
        lent = creditor.debt_to(debtor.id)

        if borrowed is None or lent is None:
            return NettingResult(
                debtor=debtor.id,
                creditor=creditor.id,
                offset_applied=False,
                debtor_owes=borrowed.amount if borrowed else None,
                creditor_owes=lent.amount if lent else None,
                details="no opposite debt",
            )

        bd = borrowed.amount
        cd = lent.amount

        if bd.is_greater_than(cd):
            debtor.set_debt(creditor.id, bd.minus(cd))
            creditor.set_debt(debtor.id, self.zero)
        elif bd.is_less_than(cd):
            creditor.set_debt(debtor.id, cd.minus(bd))
            debtor.set_debt(creditor.id, self.zero)
        else:
            debtor.set_debt(creditor.id, self.zero)
            creditor.set_debt(debtor.id, self.zero)

        debtor_owes = debtor.debt_to(creditor.id).amount
        creditor_owes = creditor.debt_to(debtor.id).amount

        logger.debug(
            "netted %s<->%s: %s owes %s, %s owes %s",
            debtor.id, creditor.id, debtor.id, debtor_owes, creditor.id, creditor_owes,
        )

        return NettingResult(
            debtor=debtor.id,
            creditor=creditor.id,
            offset_applied=True,
            debtor_owes=debtor_owes,
            creditor_owes=creditor_owes,
            details=f"offset {bd} against {cd}",
        )
