"""
Domain models and value objects.

Contains fundamental domain entities like Money, DebtEdge, Participant.
"""

from src.core.domain.debt import CreditSnapshot, DebtEdge, DebtSnapshot
from src.core.domain.money import (
    DEFAULT_CURRENCY,
    CurrencyMismatch,
    Money,
    MoneyContext,
    to_decimal,
)
from src.core.domain.participant import (
    LedgerSnapshot,
    Participant,
    ParticipantSnapshot,
)

__all__ = [
    # Money module
    "DEFAULT_CURRENCY",
    "CurrencyMismatch",
    "Money",
    "MoneyContext",
    "to_decimal",
    # Debt model
    "DebtEdge",
    "DebtSnapshot",
    "CreditSnapshot",
    # Participant model
    "Participant",
    "ParticipantSnapshot",
    "LedgerSnapshot",
]
