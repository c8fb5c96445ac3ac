"""
Checked Arithmetic — Safe Integer Primitives

Модуль обеспечивает детерминированную целочисленную арифметику для всех
вычислений pricing и risk движков:
- Checked add/sub/mul/div с явными границами беззнаковых типов (u16/u64/u128)
- Truncating division (округление к нулю) как нормативная семантика
- Валидация диапазонов u16/u64 и basis points

КРИТИЧЕСКИЕ ИНВАРИАНТЫ:
1. Переполнение никогда не "заворачивается": всегда ArithmeticOverflow
2. Деление на ноль никогда не происходит молча: всегда DivisionByZero
3. Float не участвует ни в одной операции
4. Все операции детерминированы и воспроизводимы на любой платформе
"""

from typing import Final

from src.core.errors import ArithmeticOverflow, DivisionByZero, InvalidParameters

# =============================================================================
# ГРАНИЦЫ ТИПОВ
# =============================================================================

U16_MAX: Final[int] = 2**16 - 1
U64_MAX: Final[int] = 2**64 - 1
U128_MAX: Final[int] = 2**128 - 1

# Basis points: 10000 bps = 100.00%
BPS_DENOMINATOR: Final[int] = 10_000

# Масштаб fixed-point кривой (4 десятичных знака)
CURVE_SCALE: Final[int] = 10_000

_SUPPORTED_BITS: Final[frozenset[int]] = frozenset({16, 64, 128})


def _upper_bound(bits: int) -> int:
    if bits not in _SUPPORTED_BITS:
        raise ValueError(f"bits must be one of {sorted(_SUPPORTED_BITS)}, got {bits}")
    return 2**bits - 1


def _check_range(value: int, bits: int, op: str) -> int:
    if value < 0 or value > _upper_bound(bits):
        raise ArithmeticOverflow(f"{op} result {value} out of u{bits} range")
    return value


# =============================================================================
# CHECKED ОПЕРАЦИИ
# =============================================================================


def checked_add(a: int, b: int, bits: int = 64) -> int:
    """
    Сложение с проверкой переполнения.

    Args:
        a: Первое слагаемое (unsigned)
        b: Второе слагаемое (unsigned)
        bits: Разрядность результата (16/64/128)

    Returns:
        a + b

    Raises:
        ArithmeticOverflow: Если результат > 2**bits - 1

    Examples:
        >>> checked_add(1, 2)
        3
        >>> checked_add(U64_MAX, 1)  # doctest: +SKIP
        Traceback (most recent call last):
            ...
        ArithmeticOverflow: ...
    """
    return _check_range(a + b, bits, "checked_add")


def checked_sub(a: int, b: int, bits: int = 64) -> int:
    """
    Вычитание с проверкой ухода в отрицательную область.

    Raises:
        ArithmeticOverflow: Если a < b (unsigned underflow)
    """
    return _check_range(a - b, bits, "checked_sub")


def checked_mul(a: int, b: int, bits: int = 64) -> int:
    """
    Умножение с проверкой переполнения.

    Raises:
        ArithmeticOverflow: Если результат > 2**bits - 1
    """
    return _check_range(a * b, bits, "checked_mul")


def checked_div(a: int, b: int) -> int:
    """
    Целочисленное деление с округлением к нулю.

    Для неотрицательных операндов совпадает с floor division.

    Args:
        a: Делимое (unsigned)
        b: Делитель (unsigned)

    Returns:
        a // b

    Raises:
        DivisionByZero: Если b == 0
    """
    if b == 0:
        raise DivisionByZero(f"checked_div: division of {a} by zero")
    if a < 0 or b < 0:
        raise ArithmeticOverflow(f"checked_div: unsigned operands required, got {a}, {b}")
    return a // b


def mul_div(a: int, b: int, denominator: int, bits: int = 64) -> int:
    """
    Checked (a * b) / denominator.

    Произведение проверяется на границу bits ДО деления, что в точности
    повторяет последовательность checked_mul → checked_div.

    Examples:
        >>> mul_div(1000, 10100, 10000)
        1010
        >>> mul_div(10450, 100, 10000)
        104
    """
    return checked_div(checked_mul(a, b, bits), denominator)


# =============================================================================
# ВАЛИДАЦИЯ ДИАПАЗОНОВ
# =============================================================================


def validate_u64(value: int, name: str) -> int:
    """
    Валидация, что значение — unsigned 64-bit integer.

    Raises:
        InvalidParameters: Если value не int, отрицательное или > U64_MAX
    """
    if isinstance(value, bool) or not isinstance(value, int):
        raise InvalidParameters(f"{name} must be an integer, got {type(value).__name__}")
    if value < 0 or value > U64_MAX:
        raise InvalidParameters(f"{name} must be in [0, {U64_MAX}], got {value}")
    return value


def validate_u16(value: int, name: str) -> int:
    """
    Валидация, что значение — unsigned 16-bit integer.

    Raises:
        InvalidParameters: Если value не int, отрицательное или > U16_MAX
    """
    if isinstance(value, bool) or not isinstance(value, int):
        raise InvalidParameters(f"{name} must be an integer, got {type(value).__name__}")
    if value < 0 or value > U16_MAX:
        raise InvalidParameters(f"{name} must be in [0, {U16_MAX}], got {value}")
    return value


def validate_bps(value: int, name: str) -> int:
    """
    Валидация basis points: u16 и не больше 10000 (100%).

    Raises:
        InvalidParameters: Если value вне [0, 10000]
    """
    validate_u16(value, name)
    if value > BPS_DENOMINATOR:
        raise InvalidParameters(f"{name} must be <= {BPS_DENOMINATOR} bps, got {value}")
    return value
