"""Launchpad — orchestration pricing и risk движков поверх storage collaborator."""

from .engine import LaunchpadEngine, TradeOutcome

__all__ = [
    "LaunchpadEngine",
    "TradeOutcome",
]
