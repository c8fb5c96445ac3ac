"""Тесты для Graduation Evaluator

Покрытие:
- market_cap и is_eligible (граница >=)
- evaluate: без мутаций, уже graduated
- graduate: переход False → True, повторная проверка eligibility
"""

import pytest

from src.core.domain.curve import CurveConfig
from src.core.domain.project_state import ProjectState
from src.core.errors import ArithmeticOverflow, InvalidParameters, NotEligible
from src.core.math.checked_arithmetic import U64_MAX
from src.curve.graduation import GraduationEvaluator, is_eligible, market_cap


# =============================================================================
# FIXTURES
# =============================================================================


@pytest.fixture
def evaluator():
    return GraduationEvaluator()


def make_project(supply: int = 10, current_price: int = 1100) -> ProjectState:
    """Helper: проект после торговли до заданного supply."""
    project = ProjectState.launch(
        mint="MintG",
        creator="Creator",
        name="Gamma",
        symbol="GAM",
        curve=CurveConfig.from_rate(10100, 1000),
    )
    return project.model_copy(update={"supply": supply, "current_price": current_price})


# =============================================================================
# ТЕСТЫ: market_cap / is_eligible
# =============================================================================


def test_market_cap():
    assert market_cap(10, 1100) == 11000


def test_market_cap_overflow():
    with pytest.raises(ArithmeticOverflow):
        market_cap(U64_MAX, 2)


@pytest.mark.parametrize(
    "threshold,expected",
    [(10999, True), (11000, True), (11001, False), (0, True)],
)
def test_is_eligible_boundary(threshold, expected):
    assert is_eligible(10, 1100, threshold) is expected


# =============================================================================
# ТЕСТЫ: evaluate
# =============================================================================


def test_evaluate_eligible(evaluator):
    check = evaluator.evaluate(make_project(), 11000)

    assert check.eligible
    assert check.market_cap == 11000
    assert check.threshold == 11000
    assert not check.already_graduated
    assert "Eligible" in check.details


def test_evaluate_not_eligible(evaluator):
    check = evaluator.evaluate(make_project(), 20000)

    assert not check.eligible
    assert "Not eligible" in check.details


def test_evaluate_zero_supply(evaluator):
    """Свежий проект: market cap = 0"""
    check = evaluator.evaluate(make_project(supply=0, current_price=1000), 1)
    assert check.market_cap == 0
    assert not check.eligible


def test_evaluate_already_graduated(evaluator):
    graduated = evaluator.graduate(make_project(), 11000, "PoolX")
    check = evaluator.evaluate(graduated, 11000)

    assert not check.eligible
    assert check.already_graduated


# =============================================================================
# ТЕСТЫ: graduate
# =============================================================================


def test_graduate_sets_pool(evaluator):
    project = make_project()
    graduated = evaluator.graduate(project, 11000, "PoolX")

    assert graduated.is_graduated
    assert graduated.liquidity_pool == "PoolX"
    # supply/reserve не меняются
    assert graduated.supply == project.supply
    assert graduated.reserve_balance == project.reserve_balance
    assert not project.is_graduated


def test_graduate_below_threshold(evaluator):
    with pytest.raises(NotEligible, match="below graduation threshold"):
        evaluator.graduate(make_project(), 11001, "PoolX")


def test_graduate_twice(evaluator):
    graduated = evaluator.graduate(make_project(), 11000, "PoolX")
    with pytest.raises(NotEligible, match="already graduated"):
        evaluator.graduate(graduated, 11000, "PoolY")


def test_graduate_empty_pool(evaluator):
    with pytest.raises(InvalidParameters):
        evaluator.graduate(make_project(), 11000, "")
