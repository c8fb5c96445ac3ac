"""Curve — pricing engine bonding curve.

- Curve Integrator: стоимость buy / выручка sell
- Trade Settlement Calculator: комиссии и чистое движение reserve
- Graduation Evaluator: eligibility и переход на open market
"""

from .graduation import GraduationCheck, GraduationEvaluator, is_eligible, market_cap
from .integrator import buy_cost, current_price, sell_return
from .settlement import accrue_fees, settle

__all__ = [
    "buy_cost",
    "sell_return",
    "current_price",
    "settle",
    "accrue_fees",
    "market_cap",
    "is_eligible",
    "GraduationCheck",
    "GraduationEvaluator",
]
