"""Тесты для Direct netting.

Coverage:
- Слияние долга в одном направлении
- Взаимозачёт встречных долгов (больше / меньше / равны)
- net_pair без встречного долга
"""

import pytest

from src.core.domain import MoneyContext, Participant
from src.ledger import NettingStep


@pytest.fixture
def usd() -> MoneyContext:
    return MoneyContext("USD")


@pytest.fixture
def netting(usd) -> NettingStep:
    return NettingStep(usd.zero)


class TestNettingStep:
    """Тесты NettingStep."""

    def test_new_debt_creates_edge(self, netting, usd):
        ben, john = Participant("Ben"), Participant("John")

        result = netting.apply(usd.of(1000), ben, john)

        assert not result.offset_applied
        assert result.debtor_owes == usd.of(1000)
        assert result.creditor_owes is None
        assert ben.debt_to("John").amount == usd.of(1000)

    def test_same_direction_merged(self, netting, usd):
        ben, john = Participant("Ben"), Participant("John")

        netting.apply(usd.of(100), ben, john)
        netting.apply(usd.of(140), ben, john)

        assert len(list(ben.iter_debts())) == 1
        assert ben.debt_to("John").amount == usd.of(240)

    def test_debtor_side_survives(self, netting, usd):
        """Ben→John 1000 против John→Ben 300 → Ben→John 700."""
        ben, john = Participant("Ben"), Participant("John")
        john.add_debt("Ben", usd.of(300))

        result = netting.apply(usd.of(1000), ben, john)

        assert result.offset_applied
        assert ben.debt_to("John").amount == usd.of(700)
        assert john.debt_to("Ben").amount.is_zero()
        assert result.creditor_owes == usd.zero

    def test_creditor_side_survives(self, netting, usd):
        """Ben→John 1000, затем John→Ben 1200 → John→Ben 200."""
        ben, john = Participant("Ben"), Participant("John")
        ben.add_debt("John", usd.of(1000))

        result = netting.apply(usd.of(1200), john, ben)

        assert result.offset_applied
        assert john.debt_to("Ben").amount == usd.of(200)
        assert ben.debt_to("John").amount.is_zero()

    def test_equal_debts_cancel(self, netting, usd):
        ben, john = Participant("Ben"), Participant("John")
        john.add_debt("Ben", usd.of(500))

        netting.apply(usd.of(500), ben, john)

        assert ben.debt_to("John").amount.is_zero()
        assert john.debt_to("Ben").amount.is_zero()

    def test_net_pair_without_opposite_is_noop(self, netting, usd):
        ben, john = Participant("Ben"), Participant("John")
        ben.add_debt("John", usd.of(10))

        result = netting.net_pair(ben, john)

        assert not result.offset_applied
        assert result.details == "no opposite debt"
        assert ben.debt_to("John").amount == usd.of(10)
