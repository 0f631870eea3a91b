"""Ledger: реестр участников группы и их взаимных долгов.

Единственная публичная поверхность системы. После каждого нового долга
выполняется pipeline (фиксированный порядок):
1. Direct netting между должником и кредитором
2. Chain simplification (shortcut через кредитора максимального долга)
3. Indirect-connection simplification (shortcut через должника максимального долга)
4. Pruning всех рёбер с amount <= 0

Валидация входа завершается до любой мутации: record_debt либо выполняется
полностью, либо не меняет ledger.

Ledger не синхронизирован: вызовы register_participant / record_debt
должны сериализоваться вызывающей стороной.
"""

import logging
from dataclasses import dataclass
from typing import Any, Dict, Optional, Tuple

from src.core.contracts import validate_ledger_snapshot
from src.core.domain.debt import CreditSnapshot
from src.core.domain.money import Money
from src.core.domain.participant import LedgerSnapshot, Participant, ParticipantSnapshot
from src.ledger.config import LedgerConfig
from src.ledger.errors import DuplicateParticipant, UnknownParticipant
from src.ledger.netting import NettingResult, NettingStep
from src.ledger.pruning import PruningResult, PruningStep
from src.ledger.simplification import (
    ChainSimplifier,
    IndirectConnectionSimplifier,
    ShortcutResult,
)

logger = logging.getLogger(__name__)

# Версия JSON контракта снапшота (contracts/schema/ledger_snapshot.json)
SNAPSHOT_SCHEMA_VERSION = "1"


@dataclass(frozen=True)
class SettlementReport:
    """Диагностика одного вызова record_debt."""

    netting: NettingResult
    chain: Optional[ShortcutResult]
    indirect: Optional[ShortcutResult]
    pruning: PruningResult

    @property
    def shortcuts_applied(self) -> int:
        return sum(1 for r in (self.chain, self.indirect) if r is not None and r.applied)


class Ledger:
    """Shared-expense ledger с инкрементальным упрощением долгов.

    Пример:
        ledger = Ledger()
        ledger.register_participant("Ben")
        ledger.register_participant("John")
        ledger.record_debt(ledger.money.of(1000), "Ben", "John")
    """

    def __init__(self, config: Optional[LedgerConfig] = None):
        """
        Args:
            config: конфигурация ledger (валюта, включённые шаги)
        """
        self.config = config or LedgerConfig()
        self.money = self.config.money_context()

        # Порядок вставки = порядок регистрации
        self._participants: Dict[str, Participant] = {}

        zero = self.money.zero
        self._netting = NettingStep(zero)
        self._chain = ChainSimplifier(self._netting)
        self._indirect = IndirectConnectionSimplifier(self._netting)
        self._pruning = PruningStep(zero)

    def __len__(self) -> int:
        return len(self._participants)

    def __contains__(self, participant_id: object) -> bool:
        return participant_id in self._participants

    def __repr__(self) -> str:
        return f"Ledger(currency={self.money.currency!r}, participants={len(self)})"

    @property
    def participant_ids(self) -> Tuple[str, ...]:
        return tuple(self._participants)

    # -------------------------------------------------------------------------
    # Запись
    # -------------------------------------------------------------------------

    def register_participant(self, participant_id: str) -> None:
        """Регистрация участника без долгов.

        Raises:
            DuplicateParticipant: если id уже зарегистрирован
            ValueError: если id пустой или не строка
        """
        if not isinstance(participant_id, str) or not participant_id:
            raise ValueError(f"Participant id must be a non-empty string, got {participant_id!r}")
        if participant_id in self._participants:
            raise DuplicateParticipant(participant_id)

        self._participants[participant_id] = Participant(participant_id)
        logger.info("registered participant %s", participant_id)

    def record_debt(self, amount: Money, debtor_id: str, creditor_id: str) -> SettlementReport:
        """Запись долга debtor → creditor и упрощение графа долгов.

        Нулевая сумма допустима: проходит pipeline и удаляется pruning.

        Args:
            amount: сумма долга в валюте ledger (>= 0)
            debtor_id: должник
            creditor_id: кредитор

        Returns:
            SettlementReport с результатами каждого шага

        Raises:
            UnknownParticipant: если должник и/или кредитор не зарегистрированы
            ValueError: отрицательная сумма, чужая валюта или долг самому себе
        """
        missing = tuple(
            pid for pid in dict.fromkeys((debtor_id, creditor_id))
            if pid not in self._participants
        )
        if missing:
            raise UnknownParticipant(*missing)

        if debtor_id == creditor_id:
            raise ValueError(f"Participant {debtor_id!r} cannot owe itself")
        if not self.money.accepts(amount):
            raise ValueError(
                f"Amount currency {amount.currency} does not match ledger currency "
                f"{self.money.currency}"
            )
        if amount.is_negative():
            raise ValueError(f"Debt amount must be non-negative, got {amount}")

        debtor = self._participants[debtor_id]
        creditor = self._participants[creditor_id]

        netting = self._netting.apply(amount, debtor, creditor)

        chain = None
        if self.config.simplify_chains:
            chain = self._chain.apply(self._participants)

        indirect = None
        if self.config.reroute_indirect_connections:
            indirect = self._indirect.apply(self._participants)

        pruning = self._pruning.apply(self._participants)

        report = SettlementReport(
            netting=netting,
            chain=chain,
            indirect=indirect,
            pruning=pruning,
        )
        logger.info(
            "recorded debt %s -> %s: %s (shortcuts=%d, pruned=%d)",
            debtor_id, creditor_id, amount, report.shortcuts_applied, pruning.removed_count,
        )
        return report

    # -------------------------------------------------------------------------
    # Чтение (только снапшоты)
    # -------------------------------------------------------------------------

    def _get(self, participant_id: str) -> Participant:
        try:
            return self._participants[participant_id]
        except KeyError:
            raise UnknownParticipant(participant_id) from None

    def get_participants(self) -> Tuple[ParticipantSnapshot, ...]:
        """Снапшоты всех участников в порядке регистрации."""
        return tuple(p.snapshot() for p in self._participants.values())

    def get_participant(self, participant_id: str) -> ParticipantSnapshot:
        return self._get(participant_id).snapshot()

    def lent_to(self, participant_id: str) -> Tuple[CreditSnapshot, ...]:
        """Кто должен участнику: производное представление исходящих рёбер остальных."""
        self._get(participant_id)
        credits = []
        for other in self._participants.values():
            edge = other.debt_to(participant_id)
            if edge is not None and edge.is_outstanding():
                credits.append(CreditSnapshot(amount=edge.amount, owed_by=other.id))
        return tuple(credits)

    def net_balance(self, participant_id: str) -> Money:
        """Net balance: сколько должны участнику минус сколько должен он.

        Положительный: участник кредитор, отрицательный: должник.
        """
        participant = self._get(participant_id)
        balance = self.money.zero
        for credit in self.lent_to(participant_id):
            balance = balance.plus(credit.amount)
        for edge in participant.iter_debts():
            balance = balance.minus(edge.amount)
        return balance

    def total_outstanding(self) -> Money:
        """Сумма всех долгов в ledger."""
        total = self.money.zero
        for participant in self._participants.values():
            for edge in participant.iter_debts():
                total = total.plus(edge.amount)
        return total

    def snapshot(self) -> LedgerSnapshot:
        return LedgerSnapshot(currency=self.money.currency, participants=self.get_participants())

    def to_contract(self) -> Dict[str, Any]:
        """JSON-совместимый снапшот, проверенный по схеме ledger_snapshot.

        Суммы сериализуются строками, чтобы не терять точность Decimal.

        Raises:
            jsonschema.ValidationError: если снапшот нарушает контракт
        """
        data = {
            "schema_version": SNAPSHOT_SCHEMA_VERSION,
            "currency": self.money.currency,
            "participants": [
                {
                    "id": p.id,
                    "debts": [
                        {"owed_to": d.owed_to, "amount": format(d.amount.amount, "f")}
                        for d in p.debts
                    ],
                }
                for p in self.get_participants()
            ],
        }
        validate_ledger_snapshot(data)
        return data
