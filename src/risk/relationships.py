"""Relationship Tracker — сила связи между кошельками в контексте mint.

Записи WalletRelationship ищутся по ключу (mint, wallet_a, wallet_b).
Повторная регистрация перезаписывает strength и timestamp и увеличивает
interaction_count. Граф связей не обходится: набор кандидатов для
агрегации задаёт вызывающая сторона.
"""

from typing import Iterable, Optional

from src.core.domain.bundle import WalletRelationship
from src.core.errors import InvalidParameters
from src.core.math.checked_arithmetic import checked_add, validate_u16
from src.core.storage import AccountStore


def is_related(relationship: Optional[WalletRelationship], threshold: int) -> bool:
    """Вердикт связи: strength >= threshold.

    Отсутствие записи означает отсутствие связи.
    """
    if relationship is None:
        return False
    return relationship.strength >= threshold


class RelationshipTracker:
    """Регистрация и поиск связей кошельков."""

    def __init__(self, store: AccountStore):
        self.store = store

    def build(
        self,
        mint: str,
        wallet_a: str,
        wallet_b: str,
        strength: int,
        timestamp: int,
    ) -> WalletRelationship:
        """Новая версия записи без сохранения.

        Raises:
            InvalidParameters: Если strength вне u16 или wallet_a == wallet_b
            ArithmeticOverflow: Если interaction_count вне u64
        """
        validate_u16(strength, "strength")
        if wallet_a == wallet_b:
            raise InvalidParameters(f"wallet cannot be related to itself: {wallet_a}")
        if timestamp < 0:
            raise InvalidParameters(f"timestamp must be non-negative, got {timestamp}")

        existing = self.store.get_relationship(mint, wallet_a, wallet_b)
        count = 1 if existing is None else checked_add(existing.interaction_count, 1)

        return WalletRelationship(
            mint=mint,
            wallet_a=wallet_a,
            wallet_b=wallet_b,
            strength=strength,
            last_interaction_time=timestamp,
            interaction_count=count,
        )

    def register(
        self,
        mint: str,
        wallet_a: str,
        wallet_b: str,
        strength: int,
        timestamp: int,
    ) -> WalletRelationship:
        """Регистрация (или перерегистрация) связи с сохранением в store."""
        relationship = self.build(mint, wallet_a, wallet_b, strength, timestamp)
        self.store.commit([relationship])
        return relationship

    def lookup(self, mint: str, wallet: str, other: str) -> Optional[WalletRelationship]:
        """Связь в любом направлении; при наличии обеих берётся более сильная."""
        forward = self.store.get_relationship(mint, wallet, other)
        backward = self.store.get_relationship(mint, other, wallet)
        if forward is None:
            return backward
        if backward is None:
            return forward
        return forward if forward.strength >= backward.strength else backward

    def related_wallets(
        self,
        mint: str,
        wallet: str,
        candidates: Iterable[str],
        threshold: int,
    ) -> frozenset[str]:
        """Кандидаты, связанные с wallet не слабее threshold."""
        return frozenset(
            other
            for other in candidates
            if other != wallet and is_related(self.lookup(mint, wallet, other), threshold)
        )
