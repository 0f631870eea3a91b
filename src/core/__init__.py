"""
Core domain models and contracts.

This module contains the foundational building blocks of the ledger that are
independent of the simplification algorithm (money, debts, participants,
snapshot contracts).
"""
