"""Тесты для Transfer Policy Gate

Покрытие:
- Блокировка transfer от bundling кошелька
- Комиссия transfer не из launchpad (2%)
- Launchpad transfer без комиссии
- Валидация конфигурации
"""

import pytest

from src.core.errors import BundlingDetected, InvalidParameters
from src.risk.bundle import new_tracker, update
from src.risk.transfer_policy import TransferPolicyConfig, TransferPolicyGate


@pytest.fixture
def gate():
    return TransferPolicyGate()


@pytest.fixture
def bundling_tracker():
    """Tracker w1 с долей 90% при пороге 50%."""
    return update(new_tracker("MintA", "w1"), {"w2"}, 9000, threshold_bps=5000, total_supply=10000)


@pytest.fixture
def clean_tracker():
    return update(new_tracker("MintA", "w1"), {"w2"}, 100, threshold_bps=5000, total_supply=10000)


# =============================================================================
# ТЕСТЫ: блокировка
# =============================================================================


def test_bundling_wallet_blocked(gate, bundling_tracker):
    decision = gate.evaluate("MintA", "w1", 1000, bundling_tracker, is_launchpad_transfer=False)

    assert not decision.transfer_allowed
    assert decision.block_reason == "bundling_detected"
    assert decision.fee_amount == 1000
    assert decision.net_amount == 0


def test_bundling_blocks_launchpad_transfer_too(gate, bundling_tracker):
    decision = gate.evaluate("MintA", "w1", 1000, bundling_tracker, is_launchpad_transfer=True)
    assert not decision.transfer_allowed


def test_raise_for_block(gate, bundling_tracker):
    decision = gate.evaluate("MintA", "w1", 1000, bundling_tracker, is_launchpad_transfer=False)
    with pytest.raises(BundlingDetected):
        decision.raise_for_block()


def test_foreign_tracker_ignored(gate, bundling_tracker):
    """Tracker другого кошелька не влияет на transfer"""
    decision = gate.evaluate("MintA", "w7", 1000, bundling_tracker, is_launchpad_transfer=True)
    assert decision.transfer_allowed
    assert decision.fee_amount == 0


# =============================================================================
# ТЕСТЫ: комиссия
# =============================================================================


def test_external_transfer_fee(gate, clean_tracker):
    decision = gate.evaluate("MintA", "w1", 10_000, clean_tracker, is_launchpad_transfer=False)

    assert decision.transfer_allowed
    assert decision.fee_amount == 200
    assert decision.net_amount == 9800
    decision.raise_for_block()


def test_external_transfer_fee_truncates(gate):
    decision = gate.evaluate("MintA", "w1", 49, None, is_launchpad_transfer=False)
    assert decision.fee_amount == 0
    assert decision.net_amount == 49


def test_launchpad_transfer_no_fee(gate):
    decision = gate.evaluate("MintA", "w1", 10_000, None, is_launchpad_transfer=True)

    assert decision.transfer_allowed
    assert decision.fee_amount == 0
    assert decision.net_amount == 10_000
    assert decision.details == "PASS: launchpad transfer"


def test_custom_fee():
    gate = TransferPolicyGate(TransferPolicyConfig(external_transfer_fee_bps=500))
    decision = gate.evaluate("MintA", "w1", 10_000, None, is_launchpad_transfer=False)
    assert decision.fee_amount == 500


def test_invalid_fee_config():
    with pytest.raises(InvalidParameters):
        TransferPolicyGate(TransferPolicyConfig(external_transfer_fee_bps=10_001))


def test_negative_amount_rejected(gate):
    with pytest.raises(InvalidParameters):
        gate.evaluate("MintA", "w1", -1, None, is_launchpad_transfer=False)
