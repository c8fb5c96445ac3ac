"""Bundle Risk Evaluator — доля supply у кошелька и связанных с ним кошельков.

percentage_bps = bundle_balance * 10000 / total_supply, в 128-bit
промежуточном значении; результат обязан помещаться в u16.

Вердикт is_bundling = percentage_bps > threshold_bps (строго больше).
При total_supply == 0 вердикт определённо False (оценка невозможна).

Вердикт совещательный: он не блокирует сделку, вызвавшую пересчёт, а
блокирует только последующие transfer (см. transfer_policy).
"""

from dataclasses import dataclass, field
from typing import Iterable, Mapping, Optional

from src.core.domain.bundle import BundleTracker
from src.core.errors import ArithmeticOverflow, DivisionByZero
from src.core.math.checked_arithmetic import (
    BPS_DENOMINATOR,
    U16_MAX,
    checked_add,
    checked_div,
    checked_mul,
    validate_u16,
    validate_u64,
)


@dataclass(frozen=True)
class BundleUpdate:
    """Агрегированная позиция кошелька, подготовленная вызывающей стороной.

    Передаётся в buy/sell вместе со сделкой. None вместо BundleUpdate
    означает явный пропуск оценки bundle для этого вызова.
    """

    related_wallets: frozenset[str] = field(default_factory=frozenset)
    total_bundle_balance: int = 0


def percentage_bps(bundle_balance: int, total_supply: int) -> int:
    """Доля bundle от total supply в basis points.

    Args:
        bundle_balance: Суммарный баланс bundle (u64)
        total_supply: Total supply (u64)

    Returns:
        Доля в bps (u16)

    Raises:
        DivisionByZero: Если total_supply == 0
        ArithmeticOverflow: Если результат > 65535 (баланс > 6.5535 * supply)

    Examples:
        >>> percentage_bps(5000, 10000)
        5000
        >>> percentage_bps(250_000, 1_000_000)
        2500
    """
    validate_u64(bundle_balance, "bundle_balance")
    validate_u64(total_supply, "total_supply")

    if total_supply == 0:
        raise DivisionByZero("cannot compute bundle percentage against zero supply")

    widened = checked_mul(bundle_balance, BPS_DENOMINATOR, bits=128)
    percentage = checked_div(widened, total_supply)

    if percentage > U16_MAX:
        raise ArithmeticOverflow(
            f"bundle percentage {percentage} bps exceeds u16 "
            f"(balance={bundle_balance}, supply={total_supply})"
        )

    return percentage


def new_tracker(mint: str, wallet: str, timestamp: int = 0) -> BundleTracker:
    """Пустой tracker, создаваемый лениво при первой релевантной сделке."""
    return BundleTracker(mint=mint, wallet=wallet, last_updated=timestamp)


def update(
    tracker: BundleTracker,
    related_wallets: Iterable[str],
    total_bundle_balance: int,
    threshold_bps: int,
    total_supply: int,
    timestamp: Optional[int] = None,
) -> BundleTracker:
    """Явный пересчёт вердикта bundle.

    Перезаписывает related_wallets (без самого кошелька) и
    total_bundle_balance. Единственный путь, которым is_bundling может
    вернуться в False.

    Args:
        tracker: Текущий tracker (mint, wallet)
        related_wallets: Связанные кошельки
        total_bundle_balance: Баланс кошелька и всех связанных (u64)
        threshold_bps: Порог доли (u16)
        total_supply: Текущий total supply (u64)
        timestamp: Время пересчёта (по умолчанию сохраняется прежнее)

    Returns:
        Новый BundleTracker

    Raises:
        ArithmeticOverflow: Если доля не помещается в u16
    """
    validate_u64(total_bundle_balance, "total_bundle_balance")
    validate_u16(threshold_bps, "threshold_bps")
    validate_u64(total_supply, "total_supply")

    # Кошелёк не входит в собственный набор связанных
    wallets = frozenset(related_wallets) - {tracker.wallet}

    if total_supply == 0:
        is_bundling = False
    else:
        is_bundling = percentage_bps(total_bundle_balance, total_supply) > threshold_bps

    return tracker.model_copy(
        update={
            "related_wallets": wallets,
            "total_bundle_balance": total_bundle_balance,
            "is_bundling": is_bundling,
            "last_updated": tracker.last_updated if timestamp is None else timestamp,
        }
    )


def is_wallet_bundling(
    wallet: str,
    mint: str,
    tracker: Optional[BundleTracker],
    threshold_bps: int,
    total_supply: int,
) -> bool:
    """Чтение вердикта bundle для кошелька.

    - tracker отсутствует → оценка пропущена, False
    - tracker другого (mint, wallet) → нерелевантен, False
    - сохранённый is_bundling=True возвращается как есть
    - total_supply == 0 → False
    - иначе percentage_bps(total_bundle_balance) > threshold_bps
    """
    if tracker is None:
        return False

    if tracker.wallet != wallet or tracker.mint != mint:
        return False

    if tracker.is_bundling:
        return True

    if total_supply == 0:
        return False

    return percentage_bps(tracker.total_bundle_balance, total_supply) > threshold_bps


def aggregate_bundle_balance(
    balances: Mapping[str, int],
    wallet: str,
    related_wallets: Iterable[str],
) -> int:
    """Сумма баланса кошелька и связанных с ним (checked u64).

    Кошельки без записи в balances считаются с нулевым балансом.
    """
    total = validate_u64(balances.get(wallet, 0), f"balance[{wallet}]")
    for other in frozenset(related_wallets) - {wallet}:
        total = checked_add(total, validate_u64(balances.get(other, 0), f"balance[{other}]"))
    return total
