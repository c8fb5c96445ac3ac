"""Curve Integrator — стоимость покупки и выручка продажи на bonding curve.

Интегрирование поединичной цены price_at по пройденному диапазону supply:
- BUY:  единицы S, S+1, ..., S+amount-1
- SELL: единицы S-amount, ..., S-1

Стратегии (IntegrationMethod, одна на deployment):
- DISCRETE (эталон): сумма price_at по каждой единице, строго по
  возрастанию supply. Точна для кусочной функции цены; отсюда
  sell_return(c, S, a) == buy_cost(c, S - a, a).
- AVERAGE_PRICE: amount * (price_at(lo) + price_at(hi)) / 2 по концам
  диапазона. O(1) вызовов price_at, но для rate > 10000 систематически
  завышает стоимость относительно DISCRETE (выпуклая кривая), что
  смещает экономику в пользу reserve.

Плоская кривая (CurveConfig.is_flat) для обеих стратегий: initial_price * amount.

Любое переполнение → ArithmeticOverflow, операция прерывается целиком.
"""

from src.core.domain.curve import CurveConfig, IntegrationMethod
from src.core.errors import InsufficientSupply
from src.core.math.checked_arithmetic import (
    CURVE_SCALE,
    checked_add,
    checked_div,
    checked_mul,
    checked_sub,
    mul_div,
    validate_u64,
)
from src.core.math.fixed_point import DIRECT_ITERATION_MAX_SUPPLY, price_at


def current_price(config: CurveConfig, supply: int) -> int:
    """Спот-цена при заданном supply.

    Raises:
        InvalidCurveParams: Если curve без rate/initial_price
        ArithmeticOverflow: При переполнении
    """
    rate, initial_price = config.validate_params()
    return price_at(initial_price, rate, supply)


def buy_cost(
    config: CurveConfig,
    current_supply: int,
    amount: int,
    method: IntegrationMethod = IntegrationMethod.DISCRETE,
) -> int:
    """Стоимость покупки amount токенов при текущем supply.

    Args:
        config: Параметры кривой
        current_supply: Текущий supply S (u64)
        amount: Количество токенов (u64)
        method: Стратегия интегрирования

    Returns:
        Полная стоимость (u64), до комиссий

    Raises:
        InvalidCurveParams: Если curve без rate/initial_price
        ArithmeticOverflow: Если S + amount или сумма цен вне u64
    """
    rate, initial_price = config.validate_params()
    validate_u64(current_supply, "current_supply")
    validate_u64(amount, "amount")

    end_supply = checked_add(current_supply, amount)
    if amount == 0:
        return 0
    if config.is_flat():
        return checked_mul(initial_price, amount)

    return _integrate(rate, initial_price, current_supply, end_supply, method)


def sell_return(
    config: CurveConfig,
    current_supply: int,
    amount: int,
    method: IntegrationMethod = IntegrationMethod.DISCRETE,
) -> int:
    """Выручка от продажи amount токенов обратно в кривую.

    Args:
        config: Параметры кривой
        current_supply: Текущий supply S (u64)
        amount: Количество токенов (u64)
        method: Стратегия интегрирования

    Returns:
        Полная выручка (u64), до комиссий

    Raises:
        InvalidCurveParams: Если curve без rate/initial_price
        InsufficientSupply: Если current_supply < amount
        ArithmeticOverflow: При переполнении суммы
    """
    rate, initial_price = config.validate_params()
    validate_u64(current_supply, "current_supply")
    validate_u64(amount, "amount")

    if current_supply < amount:
        raise InsufficientSupply(
            f"cannot sell {amount} tokens, current supply is {current_supply}"
        )
    if amount == 0:
        return 0
    if config.is_flat():
        return checked_mul(initial_price, amount)

    start_supply = checked_sub(current_supply, amount)
    return _integrate(rate, initial_price, start_supply, current_supply, method)


def _integrate(
    rate: int,
    initial_price: int,
    start_supply: int,
    end_supply: int,
    method: IntegrationMethod,
) -> int:
    amount = end_supply - start_supply

    if method == IntegrationMethod.AVERAGE_PRICE:
        price_lo = price_at(initial_price, rate, start_supply)
        price_hi = price_at(initial_price, rate, end_supply)
        average = checked_div(checked_add(price_lo, price_hi), 2)
        return checked_mul(average, amount)

    return _discrete_sum(rate, initial_price, start_supply, amount)


def _discrete_sum(rate: int, initial_price: int, start_supply: int, amount: int) -> int:
    """Сумма price_at(s) для s в [start_supply, start_supply + amount).

    В зоне прямой итерации (s <= 100) price_at(s) == price_at(s - 1) * rate / 10000,
    поэтому цена следующей единицы получается одним шагом от предыдущей.
    """
    total = 0
    price = None
    for supply in range(start_supply, start_supply + amount):
        if price is not None and supply <= DIRECT_ITERATION_MAX_SUPPLY:
            price = mul_div(price, rate, CURVE_SCALE)
        else:
            price = price_at(initial_price, rate, supply)
        total = checked_add(total, price)

    return total
