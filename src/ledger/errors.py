"""
Ledger Errors: Ошибки валидации публичных операций Ledger

Обе ошибки локальные, синхронные и не подлежат повтору.
Возникают до любой мутации: ledger остаётся в прежнем состоянии.
"""

from typing import Tuple


class LedgerError(Exception):
    """Базовая ошибка доменной валидации ledger."""

    pass


class DuplicateParticipant(LedgerError):
    """Участник с таким id уже зарегистрирован."""

    def __init__(self, participant_id: str):
        self.participant_id = participant_id
        super().__init__(f"Participant {participant_id!r} already exists")


class UnknownParticipant(LedgerError):
    """
    Один или несколько участников не зарегистрированы.

    participant_ids содержит все отсутствующие id (в порядке аргументов).
    """

    def __init__(self, *participant_ids: str):
        self.participant_ids: Tuple[str, ...] = participant_ids
        missing = ", ".join(repr(pid) for pid in participant_ids)
        super().__init__(f"Unknown participant(s): {missing}")
