"""
Participant: Участник группы и его исходящие долги

Participant: внутренняя изменяемая структура, принадлежащая Ledger:
- outgoing: counterparty id → DebtEdge (порядок вставки сохраняется)
- ровно одно ребро на пару (participant, counterparty) структурно
- рёбра заменяются целиком, никогда не разделяются между участниками

Наружу отдаются только immutable снапшоты (ParticipantSnapshot, LedgerSnapshot).
"""

from typing import Dict, Iterator, Optional, Tuple

from pydantic import BaseModel, Field

from .debt import DebtEdge, DebtSnapshot
from .money import Money


# =============================================================================
# PARTICIPANT (internal, mutable)
# =============================================================================


class Participant:
    """
    Участник с набором исходящих долгов.

    Мутируется только шагами алгоритма (netting / simplification / pruning).
    """

    def __init__(self, participant_id: str):
        self.id = participant_id
        self._outgoing: Dict[str, DebtEdge] = {}

    def __repr__(self) -> str:
        return f"Participant(id={self.id!r}, debts={len(self._outgoing)})"

    # -------------------------------------------------------------------------
    # Чтение
    # -------------------------------------------------------------------------

    def debt_to(self, counterparty: str) -> Optional[DebtEdge]:
        """Ребро self → counterparty, если существует (включая нулевое)."""
        return self._outgoing.get(counterparty)

    def has_debt_to(self, counterparty: str) -> bool:
        return counterparty in self._outgoing

    def iter_debts(self) -> Iterator[DebtEdge]:
        """Все исходящие рёбра в порядке вставки."""
        return iter(tuple(self._outgoing.values()))

    def has_outstanding_debts(self) -> bool:
        return any(edge.is_outstanding() for edge in self._outgoing.values())

    def largest_debt(self) -> Optional[DebtEdge]:
        """
        Наибольшее строго положительное исходящее ребро.

        Tie-break: первое в порядке вставки. Нулевые рёбра (транзитные,
        ещё не удалённые pruning) не рассматриваются.
        """
        best: Optional[DebtEdge] = None
        for edge in self._outgoing.values():
            if not edge.is_outstanding():
                continue
            if best is None or edge.amount.is_greater_than(best.amount):
                best = edge
        return best

    # -------------------------------------------------------------------------
    # Мутации
    # -------------------------------------------------------------------------

    def add_debt(self, counterparty: str, amount: Money) -> DebtEdge:
        """
        Слияние долга: существующее ребро увеличивается, иначе создаётся новое.

        Raises:
            ValueError: Если counterparty совпадает с самим участником
        """
        if counterparty == self.id:
            raise ValueError(f"Participant {self.id!r} cannot owe itself")

        existing = self._outgoing.get(counterparty)
        if existing is None:
            edge = DebtEdge(amount=amount, counterparty=counterparty)
        else:
            edge = existing.with_amount(existing.amount.plus(amount))
        self._outgoing[counterparty] = edge
        return edge

    def set_debt(self, counterparty: str, amount: Money) -> DebtEdge:
        """Установка суммы ребра (создаёт ребро при отсутствии)."""
        if counterparty == self.id:
            raise ValueError(f"Participant {self.id!r} cannot owe itself")

        edge = DebtEdge(amount=amount, counterparty=counterparty)
        self._outgoing[counterparty] = edge
        return edge

    def remove_debts_not_above(self, threshold: Money) -> int:
        """
        Удаление всех рёбер с amount <= threshold.

        Returns:
            Количество удалённых рёбер
        """
        stale = [
            counterparty
            for counterparty, edge in self._outgoing.items()
            if not edge.amount.is_greater_than(threshold)
        ]
        for counterparty in stale:
            del self._outgoing[counterparty]
        return len(stale)

    # -------------------------------------------------------------------------
    # Снапшоты
    # -------------------------------------------------------------------------

    def snapshot(self) -> "ParticipantSnapshot":
        """Immutable копия участника для внешних потребителей."""
        return ParticipantSnapshot(
            id=self.id,
            debts=tuple(
                DebtSnapshot(amount=edge.amount, owed_to=edge.counterparty)
                for edge in self._outgoing.values()
            ),
        )


# =============================================================================
# SNAPSHOTS (external, immutable)
# =============================================================================


class ParticipantSnapshot(BaseModel):
    """Снапшот участника: id и исходящие долги в порядке вставки."""

    id: str = Field(..., min_length=1, description="Participant id (case-sensitive)")
    debts: Tuple[DebtSnapshot, ...] = Field(default_factory=tuple)

    model_config = {"frozen": True}

    def owes(self, counterparty: str) -> Optional[Money]:
        """Сумма долга перед counterparty или None."""
        for debt in self.debts:
            if debt.owed_to == counterparty:
                return debt.amount
        return None

    def debts_by_creditor(self) -> Dict[str, Money]:
        return {debt.owed_to: debt.amount for debt in self.debts}


class LedgerSnapshot(BaseModel):
    """Снапшот всего ledger: валюта и участники в порядке регистрации."""

    currency: str = Field(..., pattern=r"^[A-Z]{3}$")
    participants: Tuple[ParticipantSnapshot, ...] = Field(default_factory=tuple)

    model_config = {"frozen": True}

    def participant(self, participant_id: str) -> Optional[ParticipantSnapshot]:
        for p in self.participants:
            if p.id == participant_id:
                return p
        return None

    def edge_count(self) -> int:
        return sum(len(p.debts) for p in self.participants)
