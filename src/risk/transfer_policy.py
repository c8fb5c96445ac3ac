"""Transfer Policy Gate — проверка token transfer против вердикта bundle.

Вызывается на каждом transfer независимо от торгового пути:
1. Сохранённый is_bundling=True у source wallet → transfer запрещён
   (100% punitive policy)
2. Transfer не из launchpad → фиксированная комиссия external_transfer_fee_bps
   (по умолчанию 200 bps = 2%)
3. Иначе → transfer без комиссии

Gate только вычисляет решение; движение токенов выполняет token ledger.
"""

from dataclasses import dataclass
from typing import Optional

from src.core.domain.bundle import BundleTracker
from src.core.domain.launchpad_config import DEFAULT_EXTERNAL_TRANSFER_FEE_BPS
from src.core.errors import BundlingDetected
from src.core.math.checked_arithmetic import (
    BPS_DENOMINATOR,
    checked_sub,
    mul_div,
    validate_bps,
    validate_u64,
)


@dataclass(frozen=True)
class TransferDecision:
    """Результат transfer policy gate."""

    transfer_allowed: bool
    block_reason: str

    # Суммы
    amount: int
    fee_amount: int
    net_amount: int

    # Входные параметры для диагностики
    source_wallet: str
    is_launchpad_transfer: bool

    # Детали
    details: str

    def raise_for_block(self) -> None:
        """Исключение BundlingDetected для заблокированного transfer."""
        if not self.transfer_allowed:
            raise BundlingDetected(self.details)


@dataclass(frozen=True)
class TransferPolicyConfig:
    """Конфигурация transfer policy."""

    external_transfer_fee_bps: int = DEFAULT_EXTERNAL_TRANSFER_FEE_BPS


class TransferPolicyGate:
    """Transfer policy: блокировка bundling + комиссия внешних transfer.

    Порядок проверок:
    1. Bundle tracker source wallet → блокировка
    2. Комиссия для transfer не из launchpad
    """

    def __init__(self, config: TransferPolicyConfig | None = None):
        self.config = config or TransferPolicyConfig()
        validate_bps(self.config.external_transfer_fee_bps, "external_transfer_fee_bps")

    def evaluate(
        self,
        mint: str,
        source_wallet: str,
        amount: int,
        tracker: Optional[BundleTracker],
        is_launchpad_transfer: bool,
    ) -> TransferDecision:
        """Решение по transfer.

        Args:
            mint: Адрес mint
            source_wallet: Кошелёк-отправитель
            amount: Сумма transfer (u64)
            tracker: Сохранённый BundleTracker source wallet (None → не отслеживается)
            is_launchpad_transfer: Transfer инициирован pricing engine

        Returns:
            TransferDecision

        Raises:
            InvalidParameters: Если amount вне u64
            ArithmeticOverflow: Если amount * fee_bps вне u64
        """
        validate_u64(amount, "amount")

        # 1. Bundling (persisted вердикт, без пересчёта)
        if (
            tracker is not None
            and tracker.mint == mint
            and tracker.wallet == source_wallet
            and tracker.is_bundling
        ):
            return TransferDecision(
                transfer_allowed=False,
                block_reason="bundling_detected",
                amount=amount,
                fee_amount=amount,
                net_amount=0,
                source_wallet=source_wallet,
                is_launchpad_transfer=is_launchpad_transfer,
                details=(
                    f"Bundling detected for {source_wallet}: "
                    f"bundle_balance={tracker.total_bundle_balance}, transfer not allowed"
                ),
            )

        # 2. Комиссия внешнего transfer
        if not is_launchpad_transfer:
            fee_amount = mul_div(amount, self.config.external_transfer_fee_bps, BPS_DENOMINATOR)
            return TransferDecision(
                transfer_allowed=True,
                block_reason="",
                amount=amount,
                fee_amount=fee_amount,
                net_amount=checked_sub(amount, fee_amount),
                source_wallet=source_wallet,
                is_launchpad_transfer=False,
                details=(
                    f"PASS: external transfer, fee={fee_amount} "
                    f"({self.config.external_transfer_fee_bps} bps)"
                ),
            )

        # 3. PASS
        return TransferDecision(
            transfer_allowed=True,
            block_reason="",
            amount=amount,
            fee_amount=0,
            net_amount=amount,
            source_wallet=source_wallet,
            is_launchpad_transfer=True,
            details="PASS: launchpad transfer",
        )
