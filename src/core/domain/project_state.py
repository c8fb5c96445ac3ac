"""
ProjectState — Модель состояния токен-проекта

Immutable Pydantic модель, одна на mint. Состояние меняется только через
buy/sell/graduate: каждая операция создаёт новый экземпляр через
model_copy(update=...), поэтому незавершённая операция не оставляет
частично изменённого состояния.

Инварианты:
- supply, reserve_balance >= 0 (u64)
- is_graduated: односторонний переход False → True
- creator_fee_earned / platform_fee_earned монотонно не убывают
- liquidity_pool задан только у graduated проекта
"""

from pydantic import BaseModel, Field, field_validator

from src.core.domain.curve import CurveConfig
from src.core.math.checked_arithmetic import U64_MAX


class ProjectState(BaseModel):
    """
    Снапшот состояния токен-проекта.

    Immutable модель (frozen=True).
    """

    # Идентификация
    mint: str = Field(..., min_length=1, description="Адрес mint токена")
    creator: str = Field(..., min_length=1, description="Кошелёк создателя проекта")
    name: str = Field(..., min_length=1, max_length=64, description="Имя токена")
    symbol: str = Field(..., min_length=1, max_length=16, description="Тикер токена")

    # Кривая
    curve: CurveConfig = Field(..., description="Параметры bonding curve")

    # Состояние кривой
    supply: int = Field(0, ge=0, le=U64_MAX, description="Circulating supply")
    current_price: int = Field(..., ge=0, le=U64_MAX, description="Цена при текущем supply")
    reserve_balance: int = Field(
        0, ge=0, le=U64_MAX, description="Сумма чистых притоков минус оттоки"
    )

    # Graduation
    is_graduated: bool = Field(False, description="Проект мигрировал на open market")
    liquidity_pool: str | None = Field(
        None, description="Назначение ликвидности после graduation"
    )

    # Аккумуляторы комиссий
    creator_fee_earned: int = Field(0, ge=0, le=U64_MAX, description="Начислено создателю")
    platform_fee_earned: int = Field(0, ge=0, le=U64_MAX, description="Начислено платформе")

    created_ts: int = Field(0, ge=0, description="Timestamp создания (от среды исполнения)")

    model_config = {"frozen": True}

    @field_validator("liquidity_pool")
    @classmethod
    def validate_pool_only_when_graduated(cls, v: str | None, info) -> str | None:
        """liquidity_pool допустим только для graduated проекта"""
        if v is not None and not info.data.get("is_graduated", False):
            raise ValueError("liquidity_pool can only be set on a graduated project")
        return v

    @classmethod
    def launch(
        cls,
        mint: str,
        creator: str,
        name: str,
        symbol: str,
        curve: CurveConfig,
        created_ts: int = 0,
    ) -> "ProjectState":
        """
        Начальное состояние проекта: supply=0, reserve=0, price=initial_price.

        Raises:
            InvalidCurveParams: Если curve без rate/initial_price
        """
        _, initial_price = curve.validate_params()
        return cls(
            mint=mint,
            creator=creator,
            name=name,
            symbol=symbol,
            curve=curve,
            supply=0,
            current_price=initial_price,
            reserve_balance=0,
            created_ts=created_ts,
        )
