"""
Test suite for debt-ledger

Contains:
- tests/unit/          : Unit tests for domain models, algorithm steps and Ledger
"""
