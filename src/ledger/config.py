"""Конфигурация Ledger."""

from dataclasses import dataclass

from src.core.domain.money import DEFAULT_CURRENCY, MoneyContext


@dataclass(frozen=True)
class LedgerConfig:
    """Конфигурация ledger.

    - currency: фиксированная валюта всех долгов ledger
    - simplify_chains: шаг chain simplification (global-max shortcut)
    - reroute_indirect_connections: шаг indirect-connection shortcut

    Шаги simplification отключаются только для диагностики; netting и
    pruning выполняются всегда.
    """
    currency: str = DEFAULT_CURRENCY
    simplify_chains: bool = True
    reroute_indirect_connections: bool = True

    def money_context(self) -> MoneyContext:
        return MoneyContext(currency=self.currency)
