"""
Account Storage — keyed records collaborator

Core не выполняет I/O сам: записи (LaunchpadConfig, ProjectState,
BundleTracker, WalletRelationship) он получает и возвращает по значению
через AccountStore. Деривация адресов и формат хранения — ответственность
реализации store.

Записи:
- config: единственная на launchpad
- project: по mint
- bundle tracker: по (mint, wallet)
- wallet relationship: по (mint, wallet_a, wallet_b)

commit() записывает набор записей атомарно: сначала все проходят валидацию,
затем все сохраняются.
"""

from typing import Dict, Iterable, Optional, Protocol, Tuple, Union

from src.core.contracts import (
    validate_bundle_tracker,
    validate_launchpad_config,
    validate_project_state,
    validate_wallet_relationship,
)
from src.core.domain.bundle import BundleTracker, WalletRelationship
from src.core.domain.launchpad_config import LaunchpadConfig
from src.core.domain.project_state import ProjectState

Record = Union[LaunchpadConfig, ProjectState, BundleTracker, WalletRelationship]


class AccountStore(Protocol):
    """Интерфейс storage collaborator."""

    def get_config(self) -> Optional[LaunchpadConfig]:
        ...

    def get_project(self, mint: str) -> Optional[ProjectState]:
        ...

    def get_tracker(self, mint: str, wallet: str) -> Optional[BundleTracker]:
        ...

    def get_relationship(
        self, mint: str, wallet_a: str, wallet_b: str
    ) -> Optional[WalletRelationship]:
        ...

    def commit(self, records: Iterable[Record]) -> None:
        ...


class InMemoryAccountStore:
    """
    Dict-backed реализация AccountStore.

    Args:
        validate_contracts: Проверять каждую запись против JSON Schema
            контракта перед сохранением
    """

    def __init__(self, validate_contracts: bool = False):
        self.validate_contracts = validate_contracts

        self._config: Optional[LaunchpadConfig] = None
        self._projects: Dict[str, ProjectState] = {}
        self._trackers: Dict[Tuple[str, str], BundleTracker] = {}
        self._relationships: Dict[Tuple[str, str, str], WalletRelationship] = {}

    # -------------------------------------------------------------------------
    # Чтение
    # -------------------------------------------------------------------------

    def get_config(self) -> Optional[LaunchpadConfig]:
        return self._config

    def get_project(self, mint: str) -> Optional[ProjectState]:
        return self._projects.get(mint)

    def get_tracker(self, mint: str, wallet: str) -> Optional[BundleTracker]:
        return self._trackers.get((mint, wallet))

    def get_relationship(
        self, mint: str, wallet_a: str, wallet_b: str
    ) -> Optional[WalletRelationship]:
        return self._relationships.get((mint, wallet_a, wallet_b))

    # -------------------------------------------------------------------------
    # Запись
    # -------------------------------------------------------------------------

    def commit(self, records: Iterable[Record]) -> None:
        """
        Атомарная запись набора записей.

        Raises:
            TypeError: Если запись неизвестного типа
            jsonschema.ValidationError: Если validate_contracts и запись
                не соответствует контракту (ничего не записано)
        """
        batch = list(records)

        for record in batch:
            self._check(record)

        for record in batch:
            if isinstance(record, LaunchpadConfig):
                self._config = record
            elif isinstance(record, ProjectState):
                self._projects[record.mint] = record
            elif isinstance(record, BundleTracker):
                self._trackers[record.key] = record
            else:
                self._relationships[record.key] = record

    def _check(self, record: Record) -> None:
        if isinstance(record, LaunchpadConfig):
            validator = validate_launchpad_config
        elif isinstance(record, ProjectState):
            validator = validate_project_state
        elif isinstance(record, BundleTracker):
            validator = validate_bundle_tracker
        elif isinstance(record, WalletRelationship):
            validator = validate_wallet_relationship
        else:
            raise TypeError(f"Unsupported record type: {type(record).__name__}")

        if self.validate_contracts:
            validator(record.model_dump(mode="json"))

    # -------------------------------------------------------------------------
    # Диагностика
    # -------------------------------------------------------------------------

    def project_count(self) -> int:
        return len(self._projects)

    def trackers_for_mint(self, mint: str) -> list[BundleTracker]:
        return [t for (m, _), t in self._trackers.items() if m == mint]
