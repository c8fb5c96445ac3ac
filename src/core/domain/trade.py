"""
TradeQuote — Котировка сделки на bonding curve

Immutable Pydantic модель. Вычисляется заново на каждый запрос и не
сохраняется в storage.

Для BUY:  net_amount = gross_price - total_fee (зачисляется в reserve)
Для SELL: net_amount = gross_price - total_fee (выплачивается продавцу)
"""

from enum import Enum

from pydantic import BaseModel, Field, field_validator

from src.core.math.checked_arithmetic import U64_MAX


# =============================================================================
# ENUMS
# =============================================================================


class TradeSide(str, Enum):
    """Направление сделки"""

    BUY = "buy"
    SELL = "sell"


# =============================================================================
# TRADE QUOTE
# =============================================================================


class TradeQuote(BaseModel):
    """
    Котировка сделки с разбивкой комиссии.

    Immutable модель (frozen=True).
    """

    side: TradeSide = Field(..., description="Направление сделки (buy/sell)")
    amount: int = Field(0, ge=0, le=U64_MAX, description="Количество токенов")

    gross_price: int = Field(..., ge=0, le=U64_MAX, description="Стоимость по кривой")
    total_fee: int = Field(..., ge=0, le=U64_MAX, description="Полная торговая комиссия")
    creator_fee: int = Field(..., ge=0, le=U64_MAX, description="Доля создателя (floor 50%)")
    platform_fee: int = Field(..., ge=0, le=U64_MAX, description="Доля платформы (остаток)")
    net_amount: int = Field(..., ge=0, le=U64_MAX, description="gross_price - total_fee")

    model_config = {"frozen": True}

    @field_validator("net_amount")
    @classmethod
    def validate_conservation(cls, v: int, info) -> int:
        """Проверка сохранения: creator + platform == total, net + total == gross"""
        data = info.data
        if {"gross_price", "total_fee", "creator_fee", "platform_fee"} <= data.keys():
            if data["creator_fee"] + data["platform_fee"] != data["total_fee"]:
                raise ValueError("creator_fee + platform_fee must equal total_fee")
            if v + data["total_fee"] != data["gross_price"]:
                raise ValueError("net_amount + total_fee must equal gross_price")
        return v

    def effective_unit_price(self) -> int:
        """Средняя цена единицы (усечённая), 0 при amount == 0."""
        if self.amount == 0:
            return 0
        return self.gross_price // self.amount
