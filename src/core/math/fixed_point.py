"""
Fixed-Point Power Evaluator — цена на кривой при заданном supply

Цена единицы токена:
    price(supply) = initial_price * (rate / 10000) ^ supply

Вычисляется только целочисленными checked умножениями и делениями на
фиксированный масштаб CURVE_SCALE = 10000 (4 десятичных знака).

Стратегии:
- rate == 10000 → плоская кривая, цена постоянна
- supply == 0 → initial_price
- supply <= 100 → прямая итерация: supply раз result = result * rate / 10000
- supply > 100 → бинарное возведение в степень, O(log supply) операций

КРИТИЧЕСКИЕ ИНВАРИАНТЫ:
1. Каждое умножение проверяется на u64, переполнение → ArithmeticOverflow
2. Деление усекающее (к нулю) на каждом шаге, результат bit-identical
3. Делитель — константа 10000, DivisionByZero здесь невозможен
"""

from typing import Final

from src.core.math.checked_arithmetic import (
    CURVE_SCALE,
    mul_div,
    validate_u64,
)

# Порог переключения прямой итерации на бинарное возведение в степень
DIRECT_ITERATION_MAX_SUPPLY: Final[int] = 100

# rate, при котором кривая плоская (множитель 1.0000)
FLAT_RATE: Final[int] = CURVE_SCALE


def price_at(initial_price: int, rate: int, supply: int) -> int:
    """
    Цена единицы токена при заданном supply.

    Args:
        initial_price: Цена при supply = 0 (u64)
        rate: Множитель на единицу supply в basis points (u64, 10000 = 1.0)
        supply: Circulating supply (u64)

    Returns:
        Цена (u64), детерминированно усечённая на каждом шаге

    Raises:
        InvalidParameters: Если аргументы вне u64
        ArithmeticOverflow: При переполнении любого промежуточного умножения

    Examples:
        >>> price_at(1000, 10000, 5000)
        1000
        >>> price_at(1000, 10100, 1)
        1010
        >>> price_at(1000, 10100, 10)
        1100
    """
    validate_u64(initial_price, "initial_price")
    validate_u64(rate, "rate")
    validate_u64(supply, "supply")

    if rate == FLAT_RATE:
        return initial_price

    if supply == 0:
        return initial_price

    if supply > DIRECT_ITERATION_MAX_SUPPLY:
        return _binary_power(initial_price, rate, supply)

    result = initial_price
    for _ in range(supply):
        result = mul_div(result, rate, CURVE_SCALE)
    return result


def _binary_power(initial_price: int, rate: int, supply: int) -> int:
    """
    Бинарное возведение в степень со scale-делением на каждом шаге.

    base_power возводится в квадрат на каждой итерации, включая последнюю,
    поэтому переполнение квадрата прерывает вычисление даже когда итоговый
    result поместился бы в u64.
    """
    result = initial_price
    base_power = rate
    exponent = supply

    while exponent > 0:
        if exponent & 1:
            result = mul_div(result, base_power, CURVE_SCALE)

        base_power = mul_div(base_power, base_power, CURVE_SCALE)
        exponent >>= 1

    return result
