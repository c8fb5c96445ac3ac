"""Launchpad Engine — orchestration торговых и административных операций.

Поток сделки:
    Curve Integrator → Trade Settlement → новое ProjectState
    → Graduation Evaluator → Bundle Risk Evaluator (опционально)

Каждая операция атомарна (compute-then-commit): вся арифметика и валидация
выполняются до единственного store.commit(). Ошибка на любом шаге
прерывает операцию без частичной записи.

Конкурентные операции над одним mint сериализует среда исполнения;
движок не выполняет внутренних блокировок.
"""

from dataclasses import dataclass
from typing import Iterable, Optional, Sequence

from pydantic import ValidationError

from src.core.domain.bundle import BundleTracker, WalletRelationship
from src.core.domain.curve import CurveConfig, IntegrationMethod
from src.core.domain.launchpad_config import (
    DEFAULT_EXTERNAL_TRANSFER_FEE_BPS,
    DEFAULT_RELATIONSHIP_THRESHOLD,
    DEFAULT_TRADING_FEE_BPS,
    LaunchpadConfig,
)
from src.core.domain.project_state import ProjectState
from src.core.domain.trade import TradeQuote, TradeSide
from src.core.errors import (
    InsufficientFunds,
    InvalidParameters,
    LaunchpadError,
    NotEligible,
    Unauthorized,
)
from src.core.logger import get_logger
from src.core.math.checked_arithmetic import checked_add, checked_sub, validate_u64
from src.core.storage import AccountStore
from src.curve.graduation import GraduationCheck, GraduationEvaluator
from src.curve.integrator import buy_cost, current_price, sell_return
from src.curve.settlement import accrue_fees, settle
from src.risk.bundle import BundleUpdate, is_wallet_bundling, new_tracker, update
from src.risk.relationships import RelationshipTracker
from src.risk.transfer_policy import TransferDecision, TransferPolicyConfig, TransferPolicyGate

logger = get_logger(__name__)


@dataclass(frozen=True)
class TradeOutcome:
    """Результат зафиксированной сделки."""

    quote: TradeQuote
    project: ProjectState
    graduation: GraduationCheck

    # None если оценка bundle пропущена
    bundle_tracker: Optional[BundleTracker]


class LaunchpadEngine:
    """Launchpad core: pricing, graduation, bundle risk.

    Args:
        store: Storage collaborator для keyed records
        graduation: Graduation evaluator (по умолчанию stateless экземпляр)
    """

    def __init__(self, store: AccountStore, graduation: GraduationEvaluator | None = None):
        self.store = store
        self.graduation = graduation or GraduationEvaluator()
        self.relationships = RelationshipTracker(store)

    # =========================================================================
    # АДМИНИСТРИРОВАНИЕ
    # =========================================================================

    def initialize_launchpad(
        self,
        authority: str,
        fee_recipient: str,
        bundle_threshold_bps: int,
        graduation_market_cap: int,
        trading_fee_bps: int = DEFAULT_TRADING_FEE_BPS,
        relationship_threshold: int = DEFAULT_RELATIONSHIP_THRESHOLD,
        external_transfer_fee_bps: int = DEFAULT_EXTERNAL_TRANSFER_FEE_BPS,
        integration_method: IntegrationMethod = IntegrationMethod.DISCRETE,
    ) -> LaunchpadConfig:
        """Создание глобальной конфигурации (однократно).

        Raises:
            InvalidParameters: Если launchpad уже инициализирован или параметры невалидны
        """
        if self.store.get_config() is not None:
            raise InvalidParameters("launchpad already initialized")

        try:
            config = LaunchpadConfig(
                authority=authority,
                fee_recipient=fee_recipient,
                trading_fee_bps=trading_fee_bps,
                bundle_threshold_bps=bundle_threshold_bps,
                graduation_market_cap=graduation_market_cap,
                relationship_threshold=relationship_threshold,
                external_transfer_fee_bps=external_transfer_fee_bps,
                integration_method=integration_method,
            )
        except ValidationError as e:
            raise InvalidParameters(f"invalid launchpad config: {e}") from e

        self.store.commit([config])
        logger.info(
            "launchpad_initialized",
            authority=authority,
            trading_fee_bps=config.trading_fee_bps,
            bundle_threshold_bps=config.bundle_threshold_bps,
            graduation_market_cap=config.graduation_market_cap,
            integration_method=config.integration_method.value,
        )
        return config

    def create_project(
        self,
        creator: str,
        mint: str,
        name: str,
        symbol: str,
        curve_params: Sequence[int],
        timestamp: int = 0,
    ) -> ProjectState:
        """Запуск токен-проекта: supply=0, reserve=0, price=initial_price.

        Raises:
            InvalidParameters: Если mint уже занят или поля невалидны
            InvalidCurveParams: Если curve_params короче [rate, initial_price]
        """
        self._require_config()

        if self.store.get_project(mint) is not None:
            raise InvalidParameters(f"project for mint {mint} already exists")

        try:
            curve = CurveConfig(curve_params=tuple(curve_params))
            project = ProjectState.launch(
                mint=mint,
                creator=creator,
                name=name,
                symbol=symbol,
                curve=curve,
                created_ts=timestamp,
            )
        except ValidationError as e:
            raise InvalidParameters(f"invalid project parameters: {e}") from e

        self.store.commit([project])
        logger.info(
            "project_created",
            mint=mint,
            creator=creator,
            symbol=symbol,
            rate=curve.rate,
            initial_price=curve.initial_price,
        )
        return project

    def graduate(self, authority: str, mint: str, liquidity_pool: str) -> ProjectState:
        """Graduation проекта с повторной проверкой eligibility.

        Raises:
            Unauthorized: Если вызывающий не authority
            NotEligible: Если market cap ниже порога или проект уже graduated
        """
        config = self._require_config()
        self._require_authority(config, authority, "graduate")
        project = self._require_project(mint)

        try:
            graduated = self.graduation.graduate(
                project, config.graduation_market_cap, liquidity_pool
            )
        except LaunchpadError as e:
            logger.warning("graduation_rejected", mint=mint, error=e.code, reason=e.message)
            raise

        self.store.commit([graduated])
        logger.info(
            "token_graduated",
            mint=mint,
            liquidity_pool=liquidity_pool,
            supply=graduated.supply,
            reserve_balance=graduated.reserve_balance,
        )
        return graduated

    def register_relationship(
        self,
        authority: str,
        mint: str,
        wallet_a: str,
        wallet_b: str,
        strength: int,
        timestamp: int,
    ) -> WalletRelationship:
        """Регистрация связи кошельков (только authority).

        Raises:
            Unauthorized: Если вызывающий не authority
            InvalidParameters: Если strength вне u16 или wallet_a == wallet_b
        """
        config = self._require_config()
        self._require_authority(config, authority, "register_relationship")

        relationship = self.relationships.register(mint, wallet_a, wallet_b, strength, timestamp)
        logger.info(
            "relationship_registered",
            mint=mint,
            wallet_a=wallet_a,
            wallet_b=wallet_b,
            strength=strength,
            interaction_count=relationship.interaction_count,
        )
        return relationship

    def update_bundle_status(
        self,
        authority: str,
        mint: str,
        wallet: str,
        related_wallets: Iterable[str],
        total_bundle_balance: int,
        timestamp: int,
    ) -> BundleTracker:
        """Явный пересчёт вердикта bundle против текущего supply проекта.

        Единственная точка входа, через которую is_bundling может быть снижен
        вне торгового пути.

        Raises:
            Unauthorized: Если вызывающий не authority
            ArithmeticOverflow: Если доля bundle не помещается в u16
        """
        config = self._require_config()
        self._require_authority(config, authority, "update_bundle_status")
        project = self._require_project(mint)

        tracker = self.store.get_tracker(mint, wallet) or new_tracker(mint, wallet, timestamp)
        updated = update(
            tracker,
            related_wallets,
            total_bundle_balance,
            config.bundle_threshold_bps,
            project.supply,
            timestamp,
        )

        self.store.commit([updated])
        self._log_bundle(updated, previous=tracker, total_supply=project.supply)
        return updated

    # =========================================================================
    # ТОРГОВЛЯ
    # =========================================================================

    def quote_buy(self, mint: str, amount: int) -> TradeQuote:
        """Котировка покупки без изменения состояния."""
        config = self._require_config()
        project = self._require_project(mint)
        gross = buy_cost(project.curve, project.supply, amount, config.integration_method)
        return settle(gross, config.trading_fee_bps, TradeSide.BUY, amount)

    def quote_sell(self, mint: str, amount: int) -> TradeQuote:
        """Котировка продажи без изменения состояния."""
        config = self._require_config()
        project = self._require_project(mint)
        gross = sell_return(project.curve, project.supply, amount, config.integration_method)
        return settle(gross, config.trading_fee_bps, TradeSide.SELL, amount)

    def buy(
        self,
        buyer: str,
        mint: str,
        amount: int,
        timestamp: int = 0,
        buyer_funds: Optional[int] = None,
        bundle: Optional[BundleUpdate] = None,
    ) -> TradeOutcome:
        """Покупка amount токенов по кривой.

        Args:
            buyer: Кошелёк покупателя
            mint: Адрес mint
            amount: Количество токенов (> 0)
            timestamp: Время от среды исполнения
            buyer_funds: Баланс покупателя (None → проверку выполняет ledger)
            bundle: Агрегированная позиция покупателя (None → пропуск оценки bundle)

        Raises:
            InvalidParameters: Если amount == 0
            NotEligible: Если проект уже graduated
            InsufficientFunds: Если buyer_funds < gross_price
            ArithmeticOverflow: При любом переполнении
        """
        config = self._require_config()
        try:
            project = self._require_tradable(mint, amount)
            quote = self.quote_buy(mint, amount)

            if buyer_funds is not None and validate_u64(buyer_funds, "buyer_funds") < quote.gross_price:
                raise InsufficientFunds(
                    f"buyer {buyer} has {buyer_funds}, needs {quote.gross_price}"
                )

            new_supply = checked_add(project.supply, amount)
            traded = project.model_copy(
                update={
                    "supply": new_supply,
                    "reserve_balance": checked_add(project.reserve_balance, quote.net_amount),
                    "current_price": current_price(project.curve, new_supply),
                }
            )
            return self._commit_trade(config, traded, quote, buyer, bundle, timestamp)
        except LaunchpadError as e:
            logger.warning(
                "trade_rejected", side="buy", mint=mint, trader=buyer, amount=amount,
                error=e.code, reason=e.message,
            )
            raise

    def sell(
        self,
        seller: str,
        mint: str,
        amount: int,
        timestamp: int = 0,
        bundle: Optional[BundleUpdate] = None,
    ) -> TradeOutcome:
        """Продажа amount токенов обратно в кривую.

        Из reserve уходит весь gross_price: net_amount продавцу, комиссии
        создателю и платформе.

        Raises:
            InvalidParameters: Если amount == 0
            NotEligible: Если проект уже graduated
            InsufficientSupply: Если amount > supply
            InsufficientFunds: Если reserve_balance < gross_price
            ArithmeticOverflow: При любом переполнении
        """
        config = self._require_config()
        try:
            project = self._require_tradable(mint, amount)
            quote = self.quote_sell(mint, amount)

            if project.reserve_balance < quote.gross_price:
                raise InsufficientFunds(
                    f"reserve {project.reserve_balance} cannot cover payout {quote.gross_price}"
                )

            new_supply = checked_sub(project.supply, amount)
            traded = project.model_copy(
                update={
                    "supply": new_supply,
                    "reserve_balance": checked_sub(project.reserve_balance, quote.gross_price),
                    "current_price": current_price(project.curve, new_supply),
                }
            )
            return self._commit_trade(config, traded, quote, seller, bundle, timestamp)
        except LaunchpadError as e:
            logger.warning(
                "trade_rejected", side="sell", mint=mint, trader=seller, amount=amount,
                error=e.code, reason=e.message,
            )
            raise

    # =========================================================================
    # RISK
    # =========================================================================

    def is_bundling(self, mint: str, wallet: str) -> bool:
        """Вердикт bundle для кошелька по сохранённому tracker."""
        config = self._require_config()
        project = self._require_project(mint)
        return is_wallet_bundling(
            wallet,
            mint,
            self.store.get_tracker(mint, wallet),
            config.bundle_threshold_bps,
            project.supply,
        )

    def related_wallets(self, mint: str, wallet: str, candidates: Iterable[str]) -> frozenset[str]:
        """Кандидаты, связанные с wallet не слабее relationship_threshold."""
        config = self._require_config()
        return self.relationships.related_wallets(
            mint, wallet, candidates, config.relationship_threshold
        )

    def evaluate_transfer(
        self,
        mint: str,
        source_wallet: str,
        amount: int,
        is_launchpad_transfer: bool = False,
    ) -> TransferDecision:
        """Transfer policy по сохранённому вердикту bundle source wallet."""
        config = self._require_config()
        gate = TransferPolicyGate(
            TransferPolicyConfig(external_transfer_fee_bps=config.external_transfer_fee_bps)
        )
        decision = gate.evaluate(
            mint,
            source_wallet,
            amount,
            self.store.get_tracker(mint, source_wallet),
            is_launchpad_transfer,
        )

        if not decision.transfer_allowed:
            logger.warning(
                "transfer_blocked",
                mint=mint,
                source_wallet=source_wallet,
                amount=amount,
                reason=decision.block_reason,
            )
        return decision

    # =========================================================================
    # ВНУТРЕННИЕ
    # =========================================================================

    def _commit_trade(
        self,
        config: LaunchpadConfig,
        traded: ProjectState,
        quote: TradeQuote,
        trader: str,
        bundle: Optional[BundleUpdate],
        timestamp: int,
    ) -> TradeOutcome:
        project = accrue_fees(traded, quote)
        graduation = self.graduation.evaluate(project, config.graduation_market_cap)

        previous_tracker = None
        tracker = None
        if bundle is not None:
            previous_tracker = self.store.get_tracker(project.mint, trader) or new_tracker(
                project.mint, trader, timestamp
            )
            tracker = update(
                previous_tracker,
                bundle.related_wallets,
                bundle.total_bundle_balance,
                config.bundle_threshold_bps,
                project.supply,
                timestamp,
            )

        self.store.commit([project] if tracker is None else [project, tracker])

        logger.info(
            "trade_committed",
            side=quote.side.value,
            mint=project.mint,
            trader=trader,
            amount=quote.amount,
            gross_price=quote.gross_price,
            total_fee=quote.total_fee,
            net_amount=quote.net_amount,
            supply=project.supply,
            current_price=project.current_price,
            reserve_balance=project.reserve_balance,
        )
        if graduation.eligible:
            logger.info(
                "graduation_eligible",
                mint=project.mint,
                market_cap=graduation.market_cap,
                threshold=graduation.threshold,
            )
        if tracker is not None:
            self._log_bundle(tracker, previous=previous_tracker, total_supply=project.supply)

        return TradeOutcome(
            quote=quote,
            project=project,
            graduation=graduation,
            bundle_tracker=tracker,
        )

    def _log_bundle(
        self,
        tracker: BundleTracker,
        previous: Optional[BundleTracker],
        total_supply: int,
    ) -> None:
        flipped = previous is not None and previous.is_bundling != tracker.is_bundling
        log = logger.warning if tracker.is_bundling and flipped else logger.info
        log(
            "bundle_status_updated",
            mint=tracker.mint,
            wallet=tracker.wallet,
            related_count=len(tracker.related_wallets),
            total_bundle_balance=tracker.total_bundle_balance,
            total_supply=total_supply,
            is_bundling=tracker.is_bundling,
            flipped=flipped,
        )

    def _require_config(self) -> LaunchpadConfig:
        config = self.store.get_config()
        if config is None:
            raise InvalidParameters("launchpad not initialized")
        return config

    def _require_project(self, mint: str) -> ProjectState:
        project = self.store.get_project(mint)
        if project is None:
            raise InvalidParameters(f"unknown mint {mint}")
        return project

    def _require_tradable(self, mint: str, amount: int) -> ProjectState:
        project = self._require_project(mint)
        validate_u64(amount, "amount")
        if amount == 0:
            raise InvalidParameters("trade amount must be positive")
        if project.is_graduated:
            raise NotEligible(f"project {mint} graduated, curve trading closed")
        return project

    @staticmethod
    def _require_authority(config: LaunchpadConfig, caller: str, action: str) -> None:
        if caller != config.authority:
            logger.warning("unauthorized_action", action=action, caller=caller)
            raise Unauthorized(f"{action} requires launchpad authority, got {caller}")
