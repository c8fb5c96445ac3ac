"""Тесты для Bundle Risk Evaluator

Покрытие:
- percentage_bps: значения, нулевой supply, переполнение u16
- update: граница вердикта (строго больше), zero supply, sticky флаг
- is_wallet_bundling: отсутствующий / чужой / помеченный tracker
- aggregate_bundle_balance
"""

import pytest

from src.core.domain.bundle import BundleTracker
from src.core.errors import ArithmeticOverflow, DivisionByZero
from src.core.math.checked_arithmetic import U64_MAX
from src.risk.bundle import (
    aggregate_bundle_balance,
    is_wallet_bundling,
    new_tracker,
    percentage_bps,
    update,
)


@pytest.fixture
def tracker() -> BundleTracker:
    return new_tracker("MintA", "w1", timestamp=10)


# =============================================================================
# ТЕСТЫ: percentage_bps
# =============================================================================


@pytest.mark.parametrize(
    "balance,supply,expected",
    [
        (5000, 10000, 5000),
        (5001, 10000, 5001),
        (250_000, 1_000_000, 2500),
        (0, 1000, 0),
        (1, 3, 3333),
        (10, 10, 10000),
    ],
)
def test_percentage_bps(balance, supply, expected):
    assert percentage_bps(balance, supply) == expected


def test_percentage_bps_wide_intermediate():
    """balance * 10000 вне u64, но результат помещается в u16"""
    assert percentage_bps(U64_MAX, U64_MAX) == 10000


def test_percentage_bps_zero_supply():
    with pytest.raises(DivisionByZero):
        percentage_bps(1, 0)


def test_percentage_bps_exceeds_u16():
    """7 / 1 = 70000 bps > 65535"""
    with pytest.raises(ArithmeticOverflow):
        percentage_bps(7, 1)


# =============================================================================
# ТЕСТЫ: update
# =============================================================================


def test_update_at_threshold_not_bundling(tracker):
    """Ровно на пороге: 5000 > 5000 ложно"""
    updated = update(tracker, {"w2"}, 5000, threshold_bps=5000, total_supply=10000)
    assert not updated.is_bundling


def test_update_above_threshold_bundling(tracker):
    updated = update(tracker, {"w2"}, 5001, threshold_bps=5000, total_supply=10000)
    assert updated.is_bundling


def test_update_scenario_quarter_of_supply(tracker):
    """3 кошелька держат 250000 из 1000000 при пороге 20%"""
    updated = update(
        tracker,
        {"w2", "w3"},
        250_000,
        threshold_bps=2000,
        total_supply=1_000_000,
        timestamp=50,
    )

    assert updated.is_bundling
    assert updated.related_wallets == frozenset({"w2", "w3"})
    assert updated.total_bundle_balance == 250_000
    assert updated.last_updated == 50


def test_update_zero_supply_is_not_bundling(tracker):
    updated = update(tracker, {"w2"}, 999, threshold_bps=0, total_supply=0)
    assert not updated.is_bundling


def test_update_keeps_timestamp_when_omitted(tracker):
    updated = update(tracker, set(), 0, threshold_bps=5000, total_supply=100)
    assert updated.last_updated == 10


def test_update_clears_flag_with_lower_balance(tracker):
    flagged = update(tracker, {"w2"}, 9000, threshold_bps=5000, total_supply=10000)
    cleared = update(flagged, {"w2"}, 1000, threshold_bps=5000, total_supply=10000)

    assert flagged.is_bundling
    assert not cleared.is_bundling


def test_update_drops_self_from_related(tracker):
    """Кошелёк в собственном наборе связанных отбрасывается, вердикт считается"""
    updated = update(tracker, {"w1", "w2"}, 600, threshold_bps=5000, total_supply=1000)

    assert updated.related_wallets == frozenset({"w2"})
    assert updated.is_bundling


def test_update_overflow_aborts(tracker):
    with pytest.raises(ArithmeticOverflow):
        update(tracker, {"w2"}, 70, threshold_bps=5000, total_supply=10)


# =============================================================================
# ТЕСТЫ: is_wallet_bundling
# =============================================================================


def test_is_wallet_bundling_without_tracker():
    assert not is_wallet_bundling("w1", "MintA", None, 5000, 10000)


def test_is_wallet_bundling_foreign_tracker(tracker):
    flagged = update(tracker, {"w2"}, 9000, threshold_bps=5000, total_supply=10000)

    assert not is_wallet_bundling("w9", "MintA", flagged, 5000, 10000)
    assert not is_wallet_bundling("w1", "MintB", flagged, 5000, 10000)


def test_is_wallet_bundling_sticky(tracker):
    """Сохранённый флаг возвращается даже после роста supply"""
    flagged = update(tracker, {"w2"}, 9000, threshold_bps=5000, total_supply=10000)
    assert is_wallet_bundling("w1", "MintA", flagged, 5000, 10_000_000)


def test_is_wallet_bundling_zero_supply(tracker):
    assert not is_wallet_bundling("w1", "MintA", tracker, 5000, 0)


def test_is_wallet_bundling_recomputes_unflagged(tracker):
    """Непомеченный tracker пересчитывается против текущего supply"""
    stale = tracker.model_copy(update={"total_bundle_balance": 6000})

    assert is_wallet_bundling("w1", "MintA", stale, 5000, 10000)
    assert not is_wallet_bundling("w1", "MintA", stale, 5000, 20000)


# =============================================================================
# ТЕСТЫ: aggregate_bundle_balance
# =============================================================================


def test_aggregate_bundle_balance():
    balances = {"w1": 100, "w2": 250, "w3": 50}
    assert aggregate_bundle_balance(balances, "w1", {"w2", "w3", "w4"}) == 400


def test_aggregate_ignores_self_in_related():
    assert aggregate_bundle_balance({"w1": 100}, "w1", {"w1"}) == 100


def test_aggregate_overflow():
    with pytest.raises(ArithmeticOverflow):
        aggregate_bundle_balance({"w1": U64_MAX, "w2": 1}, "w1", {"w2"})
