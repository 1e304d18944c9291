"""
Uint256 — Беззнаковая арифметика расчётного контракта

Модуль воспроизводит целочисленную арифметику EVM, в которой settlement
контракт вычисляет суммы Dutch-ордеров:
- Диапазоны uint256 / int256 и их валидация
- Checked сложение/вычитание (revert контракта → Uint256RangeError)
- mulDivDown: floor(x * y / d) с 512-битным промежуточным произведением
- bound: ограничение значения диапазоном [min, max]

КРИТИЧЕСКИЕ ИНВАРИАНТЫ:
1. Деление всегда floor на неотрицательных операндах (= усечение к нулю)
2. Результат вне uint256 никогда не возвращается (exception)
3. Все операции детерминированы и воспроизводимы
"""

from typing import Final

# =============================================================================
# ДИАПАЗОНЫ EVM
# =============================================================================

# Максимальное значение uint256 (type(uint256).max)
UINT256_MAX: Final[int] = 2**256 - 1

# Диапазон int256 (relativeAmounts хранятся в контракте как int256)
INT256_MIN: Final[int] = -(2**255)
INT256_MAX: Final[int] = 2**255 - 1


# =============================================================================
# EXCEPTIONS
# =============================================================================


class Uint256RangeError(ArithmeticError):
    """
    Результат арифметики вышел за пределы uint256.

    В контракте checked-арифметика в этой ситуации делает revert,
    поэтому off-chain предсказание не должно возвращать никакого значения.
    """

    pass


# =============================================================================
# ВАЛИДАЦИЯ
# =============================================================================


def _is_int(value: object) -> bool:
    # bool является подклассом int, но суммой не является
    return isinstance(value, int) and not isinstance(value, bool)


def is_uint256(value: object) -> bool:
    """
    Проверка, что значение — целое в диапазоне uint256.

    Examples:
        >>> is_uint256(0)
        True
        >>> is_uint256(2**256)
        False
        >>> is_uint256(-1)
        False
    """
    return _is_int(value) and 0 <= value <= UINT256_MAX


def validate_uint256(value: object, name: str = "value") -> int:
    """
    Валидация uint256.

    Args:
        value: Проверяемое значение
        name: Имя параметра для сообщения об ошибке

    Returns:
        value без изменений

    Raises:
        ValueError: Если value не int или вне [0, UINT256_MAX]
    """
    if not _is_int(value):
        raise ValueError(f"{name} must be an integer, got {type(value).__name__}")
    if not 0 <= value <= UINT256_MAX:
        raise ValueError(f"{name} {value} is outside the uint256 range")
    return value


def validate_int256(value: object, name: str = "value") -> int:
    """
    Валидация int256.

    Raises:
        ValueError: Если value не int или вне [INT256_MIN, INT256_MAX]
    """
    if not _is_int(value):
        raise ValueError(f"{name} must be an integer, got {type(value).__name__}")
    if not INT256_MIN <= value <= INT256_MAX:
        raise ValueError(f"{name} {value} is outside the int256 range")
    return value


# =============================================================================
# CHECKED АРИФМЕТИКА
# =============================================================================


def _checked(result: int, operation: str) -> int:
    if not 0 <= result <= UINT256_MAX:
        raise Uint256RangeError(f"{operation} = {result} is outside the uint256 range")
    return result


def add_uint256(a: int, b: int) -> int:
    """
    Сложение с проверкой переполнения.

    Второй операнд может быть отрицательным (сложение uint256 с int256).

    Raises:
        Uint256RangeError: Если результат вне uint256
    """
    return _checked(a + b, f"{a} + {b}")


def sub_uint256(a: int, b: int) -> int:
    """
    Вычитание с проверкой underflow.

    Второй операнд может быть отрицательным: startAmount - relativeAmount
    для растущего сегмента даёт сумму больше startAmount.

    Examples:
        >>> sub_uint256(1000, 10)
        990
        >>> sub_uint256(1000, -10)
        1010

    Raises:
        Uint256RangeError: Если результат вне uint256
    """
    return _checked(a - b, f"{a} - {b}")


def mul_div_down(x: int, y: int, denominator: int) -> int:
    """
    floor(x * y / denominator) — аналог FixedPointMathLib.mulDivDown.

    Произведение x * y вычисляется без переполнения (int Python имеет
    произвольную точность, контракт использует 512-битное произведение).
    На неотрицательных операндах floor совпадает с усечением к нулю.

    Args:
        x: Множитель (uint256)
        y: Множитель (uint256)
        denominator: Делитель (uint256, > 0)

    Returns:
        Частное, округлённое вниз

    Raises:
        ValueError: Если операнд отрицательный
        ZeroDivisionError: Если denominator == 0
        Uint256RangeError: Если частное не помещается в uint256

    Examples:
        >>> mul_div_down(10, 50, 100)
        5
        >>> mul_div_down(15, 50, 100)
        7
    """
    if x < 0 or y < 0 or denominator < 0:
        raise ValueError(
            f"mul_div_down operands must be non-negative: x={x}, y={y}, d={denominator}"
        )
    if denominator == 0:
        raise ZeroDivisionError("mul_div_down denominator is zero")

    return _checked((x * y) // denominator, f"{x} * {y} / {denominator}")


def bound(value: int, min_value: int, max_value: int) -> int:
    """
    Ограничение value диапазоном [min_value, max_value].

    Raises:
        ValueError: Если min_value > max_value
    """
    if min_value > max_value:
        raise ValueError(f"min_value {min_value} must be <= max_value {max_value}")
    return max(min_value, min(value, max_value))
