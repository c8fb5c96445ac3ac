"""
JSON Schema Contract Validators

Модуль для валидации записей storage collaborator согласно формальным JSON
Schema контрактам. Использует библиотеку jsonschema (Draft 2020-12).

Схемы:
- launchpad_config.json
- project_state.json
- bundle_tracker.json
- wallet_relationship.json
"""

import json
from functools import lru_cache
from pathlib import Path
from typing import Any, Dict, List, Type

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

    def __init__(self, schema_dir: Path | None = None):
        # Корень проекта: 4 уровня вверх от этого файла
        self._schema_dir = schema_dir or (
            Path(__file__).parent.parent.parent.parent / "contracts" / "schema"
        )
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
            schema_name: Имя схемы без расширения (например, 'project_state')

        Returns:
            Загруженная схема как dict

        Raises:
            FileNotFoundError: Если файл схемы не найден
            ValueError: Если схема не проходит meta-validation
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
            raise ValueError(f"Invalid JSON Schema in {schema_name}.json: {e}") from e

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
        return self.validator.is_valid(data)

    def iter_errors(self, data: Dict[str, Any]):
        """Итератор по всем ошибкам валидации."""
        return self.validator.iter_errors(data)

    def describe_errors(self, data: Dict[str, Any]) -> List[str]:
        """
        Все нарушения контракта в виде "path: message", отсортированные по пути.

        Пустой список означает, что запись соответствует контракту.

        Examples:
            >>> ProjectStateValidator().describe_errors({**state, "supply": -1})  # doctest: +SKIP
            ['supply: -1 is less than the minimum of 0']
        """
        messages = []
        for error in self.validator.iter_errors(data):
            path = ".".join(str(p) for p in error.absolute_path) or "<root>"
            messages.append(f"{path}: {error.message}")
        return sorted(messages)


class LaunchpadConfigValidator(ContractValidator):
    """Контракт launchpad_config (единственная запись на launchpad)."""

    def __init__(self):
        super().__init__("launchpad_config")


class ProjectStateValidator(ContractValidator):
    """Контракт project_state (запись на mint)."""

    def __init__(self):
        super().__init__("project_state")


class BundleTrackerValidator(ContractValidator):
    """Контракт bundle_tracker (запись на mint, wallet)."""

    def __init__(self):
        super().__init__("bundle_tracker")


class WalletRelationshipValidator(ContractValidator):
    """Контракт wallet_relationship (запись на mint, wallet_a, wallet_b)."""

    def __init__(self):
        super().__init__("wallet_relationship")


# =============================================================================
# CONVENIENCE FUNCTIONS
# =============================================================================


@lru_cache(maxsize=None)
def _validator(validator_cls: Type[ContractValidator]) -> ContractValidator:
    # Storage проверяет каждую запись commit: один compiled validator на контракт
    return validator_cls()


def validate_launchpad_config(data: Dict[str, Any]) -> None:
    """
    Валидация launchpad_config данных.

    Raises:
        ValidationError: Если данные не соответствуют схеме
    """
    _validator(LaunchpadConfigValidator).validate(data)


def validate_project_state(data: Dict[str, Any]) -> None:
    """Валидация project_state данных (ValidationError при нарушении)."""
    _validator(ProjectStateValidator).validate(data)


def validate_bundle_tracker(data: Dict[str, Any]) -> None:
    """Валидация bundle_tracker данных (ValidationError при нарушении)."""
    _validator(BundleTrackerValidator).validate(data)


def validate_wallet_relationship(data: Dict[str, Any]) -> None:
    """Валидация wallet_relationship данных (ValidationError при нарушении)."""
    _validator(WalletRelationshipValidator).validate(data)


__all__ = [
    "ValidationError",
    "SchemaLoader",
    "ContractValidator",
    "LaunchpadConfigValidator",
    "ProjectStateValidator",
    "BundleTrackerValidator",
    "WalletRelationshipValidator",
    "validate_launchpad_config",
    "validate_project_state",
    "validate_bundle_tracker",
    "validate_wallet_relationship",
]
