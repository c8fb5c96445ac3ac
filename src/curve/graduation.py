"""Graduation Evaluator — миграция проекта с кривой на open market.

Состояния is_graduated:
- False: торговля по bonding curve
- True: ликвидность передана во внешний пул, переход необратим

Eligibility: market_cap = supply * current_price >= graduation_market_cap.

Переход False → True выполняется только явным graduate(), который заново
проверяет eligibility на момент исполнения (не доверяя устаревшей проверке
после предыдущей сделки) и фиксирует назначение ликвидности.
"""

from dataclasses import dataclass

from src.core.domain.project_state import ProjectState
from src.core.errors import InvalidParameters, NotEligible
from src.core.math.checked_arithmetic import checked_mul, validate_u64


def market_cap(supply: int, current_price: int) -> int:
    """Market cap = supply * current_price (checked u64).

    Raises:
        ArithmeticOverflow: Если произведение вне u64
    """
    validate_u64(supply, "supply")
    validate_u64(current_price, "current_price")
    return checked_mul(supply, current_price)


def is_eligible(supply: int, current_price: int, graduation_market_cap: int) -> bool:
    """True если market cap достиг порога graduation."""
    validate_u64(graduation_market_cap, "graduation_market_cap")
    return market_cap(supply, current_price) >= graduation_market_cap


@dataclass(frozen=True)
class GraduationCheck:
    """Результат проверки eligibility."""

    eligible: bool
    market_cap: int
    threshold: int
    already_graduated: bool

    # Детали
    details: str


class GraduationEvaluator:
    """Проверка и выполнение graduation.

    Stateless: всё состояние в ProjectState.
    """

    def evaluate(self, project: ProjectState, graduation_market_cap: int) -> GraduationCheck:
        """Проверка eligibility без мутаций (выполняется после каждой сделки).

        Args:
            project: Текущее состояние проекта
            graduation_market_cap: Порог market cap

        Returns:
            GraduationCheck

        Raises:
            ArithmeticOverflow: Если supply * current_price вне u64
        """
        cap = market_cap(project.supply, project.current_price)
        eligible = cap >= graduation_market_cap

        if project.is_graduated:
            details = f"Already graduated to {project.liquidity_pool}"
        elif eligible:
            details = f"Eligible: market_cap={cap} >= threshold={graduation_market_cap}"
        else:
            details = f"Not eligible: market_cap={cap} < threshold={graduation_market_cap}"

        return GraduationCheck(
            eligible=eligible and not project.is_graduated,
            market_cap=cap,
            threshold=graduation_market_cap,
            already_graduated=project.is_graduated,
            details=details,
        )

    def graduate(
        self,
        project: ProjectState,
        graduation_market_cap: int,
        liquidity_pool: str,
    ) -> ProjectState:
        """Переход is_graduated False → True.

        Args:
            project: Текущее состояние проекта
            graduation_market_cap: Порог market cap
            liquidity_pool: Назначение ликвидности (внешний пул)

        Returns:
            Новое состояние проекта с is_graduated=True

        Raises:
            InvalidParameters: Если liquidity_pool пуст
            NotEligible: Если проект уже graduated или market cap ниже порога
            ArithmeticOverflow: Если supply * current_price вне u64
        """
        if not liquidity_pool:
            raise InvalidParameters("liquidity_pool must be a non-empty address")

        check = self.evaluate(project, graduation_market_cap)

        if check.already_graduated:
            raise NotEligible(f"project {project.mint} already graduated")

        if not check.eligible:
            raise NotEligible(
                f"project {project.mint} market cap {check.market_cap} "
                f"below graduation threshold {graduation_market_cap}"
            )

        return project.model_copy(
            update={"is_graduated": True, "liquidity_pool": liquidity_pool}
        )
