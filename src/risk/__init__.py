"""Risk — защита кривой от bundling.

- Relationship Tracker: сила связи кошельков
- Bundle Risk Evaluator: доля supply у bundle и вердикт is_bundling
- Transfer Policy Gate: блокировка transfer от bundling кошельков
"""

from .bundle import (
    BundleUpdate,
    aggregate_bundle_balance,
    is_wallet_bundling,
    new_tracker,
    percentage_bps,
    update,
)
from .relationships import RelationshipTracker, is_related
from .transfer_policy import TransferDecision, TransferPolicyConfig, TransferPolicyGate

__all__ = [
    "BundleUpdate",
    "aggregate_bundle_balance",
    "is_wallet_bundling",
    "new_tracker",
    "percentage_bps",
    "update",
    "RelationshipTracker",
    "is_related",
    "TransferDecision",
    "TransferPolicyConfig",
    "TransferPolicyGate",
]
