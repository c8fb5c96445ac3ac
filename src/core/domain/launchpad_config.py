"""
LaunchpadConfig — Глобальная конфигурация launchpad

Immutable Pydantic модель, создаётся один раз при initialize_launchpad.
Может быть загружена из JSON файла (load_launchpad_config), предварительно
провалидированного против contracts/schema/launchpad_config.json.
"""

import json
from pathlib import Path

from pydantic import BaseModel, Field

from src.core.contracts import validate_launchpad_config
from src.core.domain.curve import IntegrationMethod
from src.core.math.checked_arithmetic import BPS_DENOMINATOR, U16_MAX, U64_MAX

# Торговая комиссия по умолчанию: 100 bps = 1%
DEFAULT_TRADING_FEE_BPS = 100

# Комиссия transfer вне launchpad: 200 bps = 2% (policy constant)
DEFAULT_EXTERNAL_TRANSFER_FEE_BPS = 200

# Порог силы связи кошельков по умолчанию
DEFAULT_RELATIONSHIP_THRESHOLD = 5_000


class LaunchpadConfig(BaseModel):
    """
    Конфигурация launchpad.

    Immutable модель (frozen=True).
    """

    authority: str = Field(..., min_length=1, description="Административный кошелёк")
    fee_recipient: str = Field(..., min_length=1, description="Получатель platform fee")

    trading_fee_bps: int = Field(
        DEFAULT_TRADING_FEE_BPS, ge=0, le=BPS_DENOMINATOR, description="Торговая комиссия (bps)"
    )
    bundle_threshold_bps: int = Field(
        ..., ge=0, le=BPS_DENOMINATOR, description="Порог доли bundle от supply (bps)"
    )
    graduation_market_cap: int = Field(
        ..., ge=0, le=U64_MAX, description="Порог market cap для graduation"
    )
    relationship_threshold: int = Field(
        DEFAULT_RELATIONSHIP_THRESHOLD,
        ge=0,
        le=U16_MAX,
        description="Минимальная сила связи для агрегации балансов",
    )
    external_transfer_fee_bps: int = Field(
        DEFAULT_EXTERNAL_TRANSFER_FEE_BPS,
        ge=0,
        le=BPS_DENOMINATOR,
        description="Комиссия transfer вне launchpad (bps)",
    )
    integration_method: IntegrationMethod = Field(
        IntegrationMethod.DISCRETE, description="Стратегия интегрирования кривой"
    )

    model_config = {"frozen": True}


def load_launchpad_config(path: str | Path) -> LaunchpadConfig:
    """
    Загрузка LaunchpadConfig из JSON файла.

    Сначала данные проверяются против JSON Schema контракта, затем строится
    Pydantic модель.

    Args:
        path: Путь к JSON файлу

    Returns:
        LaunchpadConfig

    Raises:
        FileNotFoundError: Если файл не найден
        jsonschema.ValidationError: Если данные не соответствуют контракту
        pydantic.ValidationError: Если данные не проходят валидацию модели
    """
    with open(path, "r", encoding="utf-8") as f:
        data = json.load(f)

    validate_launchpad_config(data)
    return LaunchpadConfig.model_validate(data)
