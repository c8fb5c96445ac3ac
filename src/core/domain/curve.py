"""
CurveConfig — Параметры bonding curve

Immutable Pydantic модель, неизменная для каждого mint.

curve_params хранится списком, как он пришёл при создании проекта:
    curve_params[0] = rate (bps-множитель на единицу supply, 10000 = плоская кривая)
    curve_params[1] = initial_price (цена при supply = 0)

Короткий список допустим при конструировании: ошибка InvalidCurveParams
возникает в момент первой pricing-операции.
"""

from enum import Enum

from pydantic import BaseModel, Field, field_validator

from src.core.errors import InvalidCurveParams
from src.core.math.checked_arithmetic import U64_MAX
from src.core.math.fixed_point import FLAT_RATE


# =============================================================================
# ENUMS
# =============================================================================


class IntegrationMethod(str, Enum):
    """
    Стратегия интегрирования стоимости buy/sell.

    Выбирается один раз на deployment (LaunchpadConfig) и не смешивается.
    """

    DISCRETE = "discrete"  # Поединичная сумма цен (эталон)
    AVERAGE_PRICE = "average_price"  # amount * среднее цен на концах диапазона


# =============================================================================
# CURVE CONFIG
# =============================================================================


class CurveConfig(BaseModel):
    """
    Параметры кривой цены.

    Immutable модель (frozen=True).
    """

    curve_params: tuple[int, ...] = Field(
        ..., description="Параметры кривой: [rate, initial_price, ...] (u64)"
    )

    model_config = {"frozen": True}

    @field_validator("curve_params")
    @classmethod
    def validate_params_u64(cls, v: tuple[int, ...]) -> tuple[int, ...]:
        """Каждый параметр должен быть u64"""
        for i, param in enumerate(v):
            if param < 0 or param > U64_MAX:
                raise ValueError(f"curve_params[{i}]={param} out of u64 range")
        return v

    @classmethod
    def from_rate(cls, rate: int, initial_price: int) -> "CurveConfig":
        """Конструктор из именованных параметров."""
        return cls(curve_params=(rate, initial_price))

    def validate_params(self) -> tuple[int, int]:
        """
        Проверка наличия обязательных параметров.

        Returns:
            (rate, initial_price)

        Raises:
            InvalidCurveParams: Если параметров меньше двух
        """
        if len(self.curve_params) < 2:
            raise InvalidCurveParams(
                f"curve requires [rate, initial_price], got {len(self.curve_params)} param(s)"
            )
        return self.curve_params[0], self.curve_params[1]

    @property
    def rate(self) -> int:
        return self.validate_params()[0]

    @property
    def initial_price(self) -> int:
        return self.validate_params()[1]

    def is_flat(self) -> bool:
        """Плоская кривая: цена не зависит от supply."""
        return self.rate == FLAT_RATE
