"""
Errors — Таксономия ошибок launchpad core

Каждая ошибка прерывает всю операцию целиком: частичных мутаций состояния нет,
локальных retry нет. Вызывающая сторона решает, повторять ли операцию со
свежими входами.

Виды ошибок:
- InvalidParameters: некорректные параметры (curve config, u64/u16 диапазоны)
- ArithmeticOverflow: переполнение checked add/sub/mul/div
- DivisionByZero: деление на ноль вне явно обработанной zero-supply ветки
- InsufficientBalance: продажа больше supply или выплата больше reserve
- Unauthorized: административное действие не от authority
- NotEligible: graduation до достижения порога market cap
- BundlingDetected: transfer от кошелька с is_bundling=True
"""


class LaunchpadError(Exception):
    """
    Базовая ошибка launchpad core.

    Attributes:
        code: Машиночитаемый код ошибки (стабилен между версиями)
    """

    code: str = "launchpad_error"

    def __init__(self, message: str = ""):
        super().__init__(message or self.code)
        self.message = message or self.code


class InvalidParameters(LaunchpadError):
    """Некорректные входные параметры или конфигурация."""

    code = "invalid_parameters"


class InvalidCurveParams(InvalidParameters):
    """Curve config без обязательных параметров (rate, initial_price)."""

    code = "invalid_curve_params"


class ArithmeticOverflow(LaunchpadError):
    """Результат checked-операции вышел за пределы целевого диапазона."""

    code = "math_overflow"


class DivisionByZero(LaunchpadError):
    """Деление на ноль (например, percentage против нулевого supply)."""

    code = "division_by_zero"


class InsufficientBalance(LaunchpadError):
    """Недостаточно supply / reserve / средств для операции."""

    code = "insufficient_balance"


class InsufficientSupply(InsufficientBalance):
    """Продажа превышает текущий circulating supply."""

    code = "insufficient_supply"


class InsufficientFunds(InsufficientBalance):
    """Выплата превышает reserve или у покупателя недостаточно средств."""

    code = "insufficient_funds"


class Unauthorized(LaunchpadError):
    """Административное действие вызвано не назначенной authority."""

    code = "unauthorized"


class NotEligible(LaunchpadError):
    """Токен не удовлетворяет условиям graduation."""

    code = "not_eligible_for_graduation"


class BundlingDetected(LaunchpadError):
    """Transfer отклонён: source wallet помечен как bundling."""

    code = "bundling_detected"
