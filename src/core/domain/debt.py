"""
DebtEdge: Модель долгового обязательства

Одно направленное обязательство: владелец исходящего набора должен
counterparty сумму amount. Направление задаётся местом хранения
(outgoing участника-должника), поэтому в модели нет поля debtor.

Immutable модель: изменение суммы создаёт новый экземпляр через with_amount(),
ребро никогда не разделяется между двумя участниками.
"""

from pydantic import BaseModel, Field

from .money import Money


class DebtEdge(BaseModel):
    """Исходящий долг участника перед counterparty."""

    amount: Money = Field(..., description="Сумма долга")
    counterparty: str = Field(..., min_length=1, description="Кредитор (participant id)")

    model_config = {"frozen": True}

    def with_amount(self, amount: Money) -> "DebtEdge":
        """Новое ребро к тому же counterparty с другой суммой."""
        return DebtEdge(amount=amount, counterparty=self.counterparty)

    def is_outstanding(self) -> bool:
        """True если долг строго положителен (переживает pruning)."""
        return self.amount.is_positive()


class DebtSnapshot(BaseModel):
    """Снапшот исходящего долга: владелец снапшота должен owed_to сумму amount."""

    amount: Money
    owed_to: str = Field(..., min_length=1)

    model_config = {"frozen": True}


class CreditSnapshot(BaseModel):
    """
    Снапшот входящего долга: owed_by должен владельцу снапшота сумму amount.

    Производное представление (зеркало DebtEdge другого участника),
    отдельно не хранится.
    """

    amount: Money
    owed_by: str = Field(..., min_length=1)

    model_config = {"frozen": True}
