"""
Contract Validation Module

Модуль для валидации JSON записей launchpad core (storage boundary).
"""

from .validators import (
    BundleTrackerValidator,
    ContractValidator,
    LaunchpadConfigValidator,
    ProjectStateValidator,
    SchemaLoader,
    WalletRelationshipValidator,
    validate_bundle_tracker,
    validate_launchpad_config,
    validate_project_state,
    validate_wallet_relationship,
)

__all__ = [
    # Classes
    "SchemaLoader",
    "ContractValidator",
    "LaunchpadConfigValidator",
    "ProjectStateValidator",
    "BundleTrackerValidator",
    "WalletRelationshipValidator",
    # Functions
    "validate_launchpad_config",
    "validate_project_state",
    "validate_bundle_tracker",
    "validate_wallet_relationship",
]
