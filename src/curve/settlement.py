"""Trade Settlement Calculator — комиссия и чистое движение reserve.

Из gross_price (стоимость по кривой):
- total_fee = gross_price * fee_bps / 10000
- creator_fee = total_fee / 2 (floor)
- platform_fee = total_fee - creator_fee (нечётный остаток уходит платформе)
- net_amount = gross_price - total_fee

Начисление аккумуляторов комиссий выполняет вызывающая сторона через
accrue_fees; переполнение аккумулятора фатально для всей сделки.
"""

from src.core.domain.project_state import ProjectState
from src.core.domain.trade import TradeQuote, TradeSide
from src.core.math.checked_arithmetic import (
    BPS_DENOMINATOR,
    checked_add,
    checked_div,
    checked_sub,
    mul_div,
    validate_bps,
    validate_u64,
)


def settle(
    gross_price: int,
    fee_bps: int,
    side: TradeSide = TradeSide.BUY,
    amount: int = 0,
) -> TradeQuote:
    """Разбивка gross_price на комиссии и чистую сумму.

    Args:
        gross_price: Стоимость по кривой (u64)
        fee_bps: Торговая комиссия в bps (u16, <= 10000)
        side: Направление сделки
        amount: Количество токенов (для котировки)

    Returns:
        TradeQuote с total_fee, creator_fee, platform_fee, net_amount

    Raises:
        InvalidParameters: Если fee_bps > 10000 или аргументы вне u64
        ArithmeticOverflow: Если gross_price * fee_bps вне u64

    Examples:
        >>> settle(10450, 100).total_fee
        104
        >>> settle(3, 10000).platform_fee
        2
    """
    validate_u64(gross_price, "gross_price")
    validate_bps(fee_bps, "fee_bps")

    total_fee = mul_div(gross_price, fee_bps, BPS_DENOMINATOR)
    creator_fee = checked_div(total_fee, 2)
    platform_fee = checked_sub(total_fee, creator_fee)
    net_amount = checked_sub(gross_price, total_fee)

    return TradeQuote(
        side=side,
        amount=amount,
        gross_price=gross_price,
        total_fee=total_fee,
        creator_fee=creator_fee,
        platform_fee=platform_fee,
        net_amount=net_amount,
    )


def accrue_fees(project: ProjectState, quote: TradeQuote) -> ProjectState:
    """Начисление creator/platform комиссий в аккумуляторы проекта.

    Raises:
        ArithmeticOverflow: Если аккумулятор выходит за u64
    """
    return project.model_copy(
        update={
            "creator_fee_earned": checked_add(project.creator_fee_earned, quote.creator_fee),
            "platform_fee_earned": checked_add(project.platform_fee_earned, quote.platform_fee),
        }
    )
