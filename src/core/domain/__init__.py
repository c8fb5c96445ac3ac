"""
Domain models and value objects.

Contains fundamental launchpad entities: CurveConfig, ProjectState, TradeQuote,
WalletRelationship, BundleTracker, LaunchpadConfig.
"""

from src.core.domain.bundle import BundleTracker, WalletRelationship
from src.core.domain.curve import CurveConfig, IntegrationMethod
from src.core.domain.launchpad_config import (
    DEFAULT_EXTERNAL_TRANSFER_FEE_BPS,
    DEFAULT_RELATIONSHIP_THRESHOLD,
    DEFAULT_TRADING_FEE_BPS,
    LaunchpadConfig,
    load_launchpad_config,
)
from src.core.domain.project_state import ProjectState
from src.core.domain.trade import TradeQuote, TradeSide

__all__ = [
    # Curve
    "CurveConfig",
    "IntegrationMethod",
    # Project state
    "ProjectState",
    # Trade
    "TradeQuote",
    "TradeSide",
    # Bundle records
    "BundleTracker",
    "WalletRelationship",
    # Launchpad config
    "DEFAULT_EXTERNAL_TRANSFER_FEE_BPS",
    "DEFAULT_RELATIONSHIP_THRESHOLD",
    "DEFAULT_TRADING_FEE_BPS",
    "LaunchpadConfig",
    "load_launchpad_config",
]
