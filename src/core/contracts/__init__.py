"""
Contract Validation Module

Модуль для валидации JSON контрактов ledger.
"""

from .validators import (
    ContractValidator,
    LedgerSnapshotValidator,
    SchemaLoader,
    validate_ledger_snapshot,
)

__all__ = [
    # Classes
    "SchemaLoader",
    "ContractValidator",
    "LedgerSnapshotValidator",
    # Functions
    "validate_ledger_snapshot",
]
