"""
JSON Schema Contract Validators

Модуль для валидации JSON снапшотов ledger согласно формальным JSON Schema контрактам.
Использует библиотеку jsonschema для проверки соответствия данных схемам.

Схемы:
- ledger_snapshot.json (экспорт Ledger.to_contract)

Инварианты графа, которые JSON Schema не выражает (уникальные id участников,
не более одного ребра на пару, отсутствие долга самому себе, ссылки только на
зарегистрированных участников), проверяются LedgerSnapshotValidator поверх схемы.
"""

import json
from pathlib import Path
from typing import Any, Dict, Iterator

import jsonschema
from jsonschema import Draft202012Validator, ValidationError


# =============================================================================
# SCHEMA LOADER
# =============================================================================


class SchemaLoader:
    """
    Загрузчик JSON Schema файлов.

    Автоматически находит схемы в contracts/schema/ относительно корня проекта.
    """

    def __init__(self):
        # Определяем корень проекта (4 уровня вверх от этого файла)
        self._schema_dir = Path(__file__).parent.parent.parent.parent / "contracts" / "schema"
        if not self._schema_dir.exists():
            raise RuntimeError(f"Schema directory not found: {self._schema_dir}")

        # Кэш загруженных схем
        self._schemas: Dict[str, Dict[str, Any]] = {}

    @property
    def schema_dir(self) -> Path:
        return self._schema_dir

    def load_schema(self, schema_name: str) -> Dict[str, Any]:
        """
        Загрузка JSON Schema файла.

        Args:
            schema_name: Имя схемы без расширения (например, 'ledger_snapshot')

        Returns:
            Загруженная схема как dict

        Raises:
            FileNotFoundError: Если файл схемы не найден
            ValueError: Если файл не является валидной JSON Schema
        """
        if schema_name in self._schemas:
            return self._schemas[schema_name]

        schema_path = self._schema_dir / f"{schema_name}.json"
        if not schema_path.exists():
            raise FileNotFoundError(f"Schema not found: {schema_path}")

        with open(schema_path, "r", encoding="utf-8") as f:
            schema = json.load(f)

        # Валидируем саму схему (meta-validation)
        try:
            Draft202012Validator.check_schema(schema)
        except jsonschema.SchemaError as e:
            raise ValueError(f"Invalid JSON Schema in {schema_name}.json: {e}")

        self._schemas[schema_name] = schema
        return schema


# Глобальный экземпляр загрузчика
_SCHEMA_LOADER = SchemaLoader()


# =============================================================================
# CONTRACT VALIDATORS
# =============================================================================


class ContractValidator:
    """
    Базовый класс для валидаторов контрактов.

    Инкапсулирует логику валидации данных против JSON Schema.
    """

    def __init__(self, schema_name: str):
        self.schema_name = schema_name
        self.schema = _SCHEMA_LOADER.load_schema(schema_name)
        self.validator = Draft202012Validator(self.schema)

    def validate(self, data: Dict[str, Any]) -> None:
        """
        Валидация данных против схемы.

        Raises:
            ValidationError: Если данные не соответствуют схеме
        """
        self.validator.validate(data)

    def is_valid(self, data: Dict[str, Any]) -> bool:
        """Проверка валидности данных без exception."""
        try:
            self.validate(data)
        except ValidationError:
            return False
        return True

    def iter_errors(self, data: Dict[str, Any]) -> Iterator[ValidationError]:
        """Итератор по всем ошибкам валидации схемы."""
        return self.validator.iter_errors(data)


class LedgerSnapshotValidator(ContractValidator):
    """
    Валидатор для ledger_snapshot контракта.

    Порядок проверок:
    1. JSON Schema (форма, типы, суммы > 0)
    2. Уникальность id участников
    3. Не более одного ребра на пару и отсутствие долга самому себе
    4. Кредиторы: только зарегистрированные участники
    """

    def __init__(self):
        super().__init__("ledger_snapshot")

    def validate(self, data: Dict[str, Any]) -> None:
        super().validate(data)

        ids = [p["id"] for p in data["participants"]]
        known = set(ids)
        if len(known) != len(ids):
            raise ValidationError("Duplicate participant id in snapshot")

        for participant in data["participants"]:
            creditors = [d["owed_to"] for d in participant["debts"]]
            if len(set(creditors)) != len(creditors):
                raise ValidationError(
                    f"Participant {participant['id']!r} has more than one debt to the same creditor"
                )
            if participant["id"] in creditors:
                raise ValidationError(f"Participant {participant['id']!r} owes itself")
            unknown = [c for c in creditors if c not in known]
            if unknown:
                raise ValidationError(
                    f"Participant {participant['id']!r} owes unknown participant(s): {unknown}"
                )


# =============================================================================
# CONVENIENCE FUNCTIONS
# =============================================================================


def validate_ledger_snapshot(data: Dict[str, Any]) -> None:
    """
    Валидация ledger_snapshot данных.

    Args:
        data: Данные для валидации

    Raises:
        ValidationError: Если данные не соответствуют контракту
    """
    LedgerSnapshotValidator().validate(data)
