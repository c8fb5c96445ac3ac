"""
Bundle Records — WalletRelationship и BundleTracker

Immutable Pydantic модели записей risk engine:
- WalletRelationship: одна на (mint, wallet_a, wallet_b)
- BundleTracker: одна на (mint, wallet)

Записи ищутся по ключу и никогда не обходятся как граф: набор связанных
кошельков для агрегации передаёт вызывающая сторона.
"""

from pydantic import BaseModel, Field, field_serializer, field_validator

from src.core.math.checked_arithmetic import U16_MAX, U64_MAX


# =============================================================================
# WALLET RELATIONSHIP
# =============================================================================


class WalletRelationship(BaseModel):
    """
    Направленная связь двух кошельков в контексте mint.

    Immutable модель (frozen=True).
    """

    mint: str = Field(..., min_length=1, description="Адрес mint")
    wallet_a: str = Field(..., min_length=1, description="Первый кошелёк пары")
    wallet_b: str = Field(..., min_length=1, description="Второй кошелёк пары")

    strength: int = Field(..., ge=0, le=U16_MAX, description="Сила связи (0-65535)")
    last_interaction_time: int = Field(..., ge=0, description="Timestamp последней регистрации")
    interaction_count: int = Field(1, ge=1, le=U64_MAX, description="Число регистраций")

    model_config = {"frozen": True}

    @field_validator("wallet_b")
    @classmethod
    def validate_distinct_wallets(cls, v: str, info) -> str:
        """Кошелёк не может быть связан сам с собой"""
        if "wallet_a" in info.data and info.data["wallet_a"] == v:
            raise ValueError(f"wallet_a and wallet_b must differ, got {v}")
        return v

    @property
    def key(self) -> tuple[str, str, str]:
        return (self.mint, self.wallet_a, self.wallet_b)


# =============================================================================
# BUNDLE TRACKER
# =============================================================================


class BundleTracker(BaseModel):
    """
    Агрегированная позиция кошелька и связанных с ним кошельков.

    Immutable модель (frozen=True).

    is_bundling "липкий": сохраняется до явного пересчёта через update
    с меньшим балансом, автоматически не сбрасывается.
    """

    mint: str = Field(..., min_length=1, description="Адрес mint")
    wallet: str = Field(..., min_length=1, description="Отслеживаемый кошелёк")

    related_wallets: frozenset[str] = Field(
        default_factory=frozenset, description="Связанные кошельки (порядок не важен)"
    )
    total_bundle_balance: int = Field(
        0, ge=0, le=U64_MAX, description="Баланс кошелька и всех связанных"
    )
    is_bundling: bool = Field(False, description="Вердикт: доля bundle выше порога")
    last_updated: int = Field(0, ge=0, description="Timestamp последнего пересчёта")

    model_config = {"frozen": True}

    @field_serializer("related_wallets")
    def serialize_related_wallets(self, v: frozenset[str]) -> list[str]:
        # Детерминированный порядок для сериализации
        return sorted(v)

    @property
    def key(self) -> tuple[str, str]:
        return (self.mint, self.wallet)
