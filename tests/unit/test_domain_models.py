"""
Тесты для базовых доменных моделей: DebtEdge, Participant, снапшоты

Проверяет:
1. Слияние долгов (одно ребро на пару)
2. Запрет долга самому себе
3. Выбор наибольшего долга (tie-break, нулевые рёбра)
4. Удаление нулевых рёбер
5. Immutability снапшотов
"""

from decimal import Decimal

import pytest
from pydantic import ValidationError

from src.core.domain import (
    DebtEdge,
    LedgerSnapshot,
    MoneyContext,
    Participant,
    ParticipantSnapshot,
)


@pytest.fixture
def usd() -> MoneyContext:
    return MoneyContext("USD")


# =============================================================================
# DEBT EDGE TESTS
# =============================================================================


class TestDebtEdge:
    """Тесты для модели DebtEdge"""

    def test_with_amount_creates_new_edge(self, usd):
        edge = DebtEdge(amount=usd.of(100), counterparty="Ben")
        updated = edge.with_amount(usd.of(40))

        assert edge.amount == usd.of(100)
        assert updated.amount == usd.of(40)
        assert updated.counterparty == "Ben"

    def test_outstanding(self, usd):
        assert DebtEdge(amount=usd.of(1), counterparty="Ben").is_outstanding()
        assert not DebtEdge(amount=usd.zero, counterparty="Ben").is_outstanding()

    def test_empty_counterparty_rejected(self, usd):
        with pytest.raises(ValidationError):
            DebtEdge(amount=usd.of(1), counterparty="")


# =============================================================================
# PARTICIPANT TESTS
# =============================================================================


class TestParticipant:
    """Тесты для Participant"""

    def test_add_debt_merges_same_direction(self, usd):
        ben = Participant("Ben")
        ben.add_debt("John", usd.of(100))
        ben.add_debt("John", usd.of(140))

        debts = list(ben.iter_debts())
        assert len(debts) == 1
        assert debts[0].amount == usd.of(240)

    def test_set_debt_overwrites(self, usd):
        ben = Participant("Ben")
        ben.add_debt("John", usd.of(100))
        ben.set_debt("John", usd.zero)

        assert ben.debt_to("John").amount.is_zero()
        assert ben.has_debt_to("John")
        assert not ben.has_outstanding_debts()

    def test_self_debt_rejected(self, usd):
        ben = Participant("Ben")
        with pytest.raises(ValueError, match="cannot owe itself"):
            ben.add_debt("Ben", usd.of(1))
        with pytest.raises(ValueError):
            ben.set_debt("Ben", usd.of(1))

    def test_largest_debt_tie_break_first_inserted(self, usd):
        ben = Participant("Ben")
        ben.add_debt("John", usd.of(50))
        ben.add_debt("Mike", usd.of(120))
        ben.add_debt("Greg", usd.of(120))

        assert ben.largest_debt().counterparty == "Mike"

    def test_largest_debt_ignores_zero_edges(self, usd):
        ben = Participant("Ben")
        ben.set_debt("John", usd.zero)
        assert ben.largest_debt() is None

    def test_remove_debts_not_above_zero(self, usd):
        ben = Participant("Ben")
        ben.add_debt("John", usd.of(10))
        ben.set_debt("Mike", usd.zero)
        ben.set_debt("Greg", usd.of(-5))

        assert ben.remove_debts_not_above(usd.zero) == 2
        assert [e.counterparty for e in ben.iter_debts()] == ["John"]
        assert ben.remove_debts_not_above(usd.zero) == 0

    def test_lookup_is_case_sensitive(self, usd):
        ben = Participant("Ben")
        ben.add_debt("john", usd.of(10))
        assert ben.debt_to("John") is None


# =============================================================================
# SNAPSHOT TESTS
# =============================================================================


class TestSnapshots:
    """Тесты для ParticipantSnapshot / LedgerSnapshot"""

    @pytest.fixture
    def ben(self, usd) -> Participant:
        ben = Participant("Ben")
        ben.add_debt("John", usd.of(200))
        return ben

    def test_snapshot_is_copy(self, ben, usd):
        snap = ben.snapshot()
        ben.add_debt("John", usd.of(100))

        assert snap.owes("John") == usd.of(200)
        assert ben.snapshot().owes("John") == usd.of(300)

    def test_snapshot_frozen(self, ben):
        snap = ben.snapshot()
        with pytest.raises(ValidationError):
            snap.id = "Other"

    def test_owes_and_debts_by_creditor(self, ben, usd):
        snap = ben.snapshot()
        assert snap.owes("Mike") is None
        assert snap.debts_by_creditor() == {"John": usd.of(200)}

    def test_ledger_snapshot_lookup(self, ben):
        snapshot = LedgerSnapshot(
            currency="USD",
            participants=(ben.snapshot(), ParticipantSnapshot(id="John")),
        )
        assert snapshot.participant("John").debts == ()
        assert snapshot.participant("Mike") is None
        assert snapshot.edge_count() == 1

    def test_json_roundtrip_keeps_decimal(self, ben):
        snap = ben.snapshot()
        restored = ParticipantSnapshot.model_validate_json(snap.model_dump_json())
        assert restored.owes("John").amount == Decimal("200")
