"""Simplification: сокращение цепочек долгов через посредника.

Без этого шага цепочка A → B, B → C накапливается вместо схлопывания в A → C.

Два прохода, оба работают только с текущим глобально максимальным ребром M → K
и выполняют не более одного shortcut за вызов record_debt:

ChainSimplifier (посредник K):
    M → K → X  ⇒  M → X (kx) + M → K (maxDebt - kx), K → X = 0
    только если maxDebt >= kx

IndirectConnectionSimplifier (посредник M):
    U → M → K  ⇒  U → K (um) + M → K (maxDebt - um), U → M = 0
    только если maxDebt >= um

Оба прохода сохраняют net balance каждого участника.
Это жадная эвристика, не глобальный оптимизатор: ledger сходится к
упрощённому состоянию постепенно, от вызова к вызову.
"""

import logging
from dataclasses import dataclass
from typing import Mapping, Optional, Tuple

from src.core.domain.debt import DebtEdge
from src.core.domain.money import Money
from src.core.domain.participant import Participant
from src.ledger.netting import NettingStep

logger = logging.getLogger(__name__)


# =============================================================================
# RESULT
# =============================================================================


@dataclass(frozen=True)
class ShortcutResult:
    """Результат одного прохода simplification."""

    applied: bool
    skip_reason: str

    # Участники shortcut: debtor → intermediary → creditor
    debtor: Optional[str] = None
    intermediary: Optional[str] = None
    creditor: Optional[str] = None

    # Сумма, перенаправленная мимо посредника
    amount: Optional[Money] = None

    details: str = ""


def _skipped(reason: str, details: str = "") -> ShortcutResult:
    return ShortcutResult(applied=False, skip_reason=reason, details=details)


# =============================================================================
# ПОИСК МАКСИМАЛЬНОГО ДОЛГА
# =============================================================================


def find_max_debt(
    participants: Mapping[str, Participant],
) -> Optional[Tuple[Participant, DebtEdge]]:
    """Участник с наибольшим положительным ребром во всём ledger.

    Tie-break детерминирован: первый участник в порядке регистрации,
    затем первое ребро в порядке вставки.

    Returns:
        (participant, edge) или None если положительных рёбер нет
    """
    best: Optional[Tuple[Participant, DebtEdge]] = None
    for participant in participants.values():
        edge = participant.largest_debt()
        if edge is None:
            continue
        if best is None or edge.amount.is_greater_than(best[1].amount):
            best = (participant, edge)
    return best


def find_largest_debtor_of(
    participants: Mapping[str, Participant],
    creditor_id: str,
    exclude: Tuple[str, ...] = (),
) -> Optional[Tuple[Participant, DebtEdge]]:
    """Участник с наибольшим положительным долгом перед creditor_id.

    Tie-break: первый в порядке регистрации.
    """
    best: Optional[Tuple[Participant, DebtEdge]] = None
    for participant in participants.values():
        if participant.id == creditor_id or participant.id in exclude:
            continue
        edge = participant.debt_to(creditor_id)
        if edge is None or not edge.is_outstanding():
            continue
        if best is None or edge.amount.is_greater_than(best[1].amount):
            best = (participant, edge)
    return best


# =============================================================================
# CHAIN SIMPLIFIER (посредник = кредитор максимального долга)
# =============================================================================


class ChainSimplifier:
    """Shortcut M → K → X в M → X.

    Порядок проверок:
    1. Нет положительных рёбер → skip
    2. У K нет положительных исходящих рёбер → skip
    3. X == M (цикл) → skip
    4. maxDebt < kx → skip (проход никогда не удлиняет цепочки)
    5. Перенос kx на M → X, K → X = 0, M → K = maxDebt - kx, зачёт пары (M, X)
    """

    def __init__(self, netting: NettingStep):
        self.netting = netting
        self.zero = netting.zero

    def apply(self, participants: Mapping[str, Participant]) -> ShortcutResult:
        found = find_max_debt(participants)
        if found is None:
            return _skipped("no_outstanding_debts")

        max_debtor, max_debt = found
        intermediary = participants[max_debt.counterparty]

        creditor_debt = intermediary.largest_debt()
        if creditor_debt is None:
            return _skipped(
                "creditor_has_no_debts",
                f"{intermediary.id} owes nobody",
            )

        if creditor_debt.counterparty == max_debtor.id:
            return _skipped(
                "cycle",
                f"{intermediary.id} owes {max_debtor.id} back",
            )

        kx = creditor_debt.amount
        diff = max_debt.amount.minus(kx)
        if diff.is_less_than(self.zero):
            return _skipped(
                "creditor_debt_exceeds_max_debt",
                f"{max_debt.amount} < {kx}",
            )

        creditor = participants[creditor_debt.counterparty]

        max_debtor.add_debt(creditor.id, kx)
        intermediary.set_debt(creditor.id, self.zero)
        max_debtor.set_debt(intermediary.id, diff)
        self.netting.net_pair(max_debtor, creditor)

        logger.debug(
            "chain shortcut %s -> %s -> %s: rerouted %s",
            max_debtor.id, intermediary.id, creditor.id, kx,
        )

        return ShortcutResult(
            applied=True,
            skip_reason="",
            debtor=max_debtor.id,
            intermediary=intermediary.id,
            creditor=creditor.id,
            amount=kx,
            details=f"{max_debtor.id} -> {intermediary.id} reduced to {diff}",
        )


# =============================================================================
# INDIRECT CONNECTION SIMPLIFIER (посредник = должник максимального долга)
# =============================================================================


class IndirectConnectionSimplifier:
    """Shortcut U → M → K в U → K.

    Схлопывает цепочки, которые заканчиваются только что записанным ребром,
    даже если их первое звено ещё не глобальный максимум
    (John → Ben, затем Ben → Mike ⇒ John → Mike).

    Порядок проверок:
    1. Нет положительных рёбер → skip
    2. Никто (кроме K) не должен M → skip
    3. U → M > maxDebt → skip
    4. Перенос um на U → K, U → M = 0, M → K = maxDebt - um, зачёт пары (U, K)
    """

    def __init__(self, netting: NettingStep):
        self.netting = netting
        self.zero = netting.zero

    def apply(self, participants: Mapping[str, Participant]) -> ShortcutResult:
        found = find_max_debt(participants)
        if found is None:
            return _skipped("no_outstanding_debts")

        intermediary, max_debt = found
        creditor = participants[max_debt.counterparty]

        upstream = find_largest_debtor_of(
            participants, intermediary.id, exclude=(creditor.id,)
        )
        if upstream is None:
            return _skipped(
                "no_upstream_debtor",
                f"nobody owes {intermediary.id}",
            )

        debtor, upstream_debt = upstream
        um = upstream_debt.amount
        diff = max_debt.amount.minus(um)
        if diff.is_less_than(self.zero):
            return _skipped(
                "upstream_debt_exceeds_max_debt",
                f"{max_debt.amount} < {um}",
            )

        debtor.add_debt(creditor.id, um)
        debtor.set_debt(intermediary.id, self.zero)
        intermediary.set_debt(creditor.id, diff)
        self.netting.net_pair(debtor, creditor)

        logger.debug(
            "indirect shortcut %s -> %s -> %s: rerouted %s",
            debtor.id, intermediary.id, creditor.id, um,
        )

        return ShortcutResult(
            applied=True,
            skip_reason="",
            debtor=debtor.id,
            intermediary=intermediary.id,
            creditor=creditor.id,
            amount=um,
            details=f"{intermediary.id} -> {creditor.id} reduced to {diff}",
        )
