"""
Numerical Safeguards — Epsilon Guards for Closed-Form Solvers

Модуль обеспечивает численную устойчивость аналитических (closed-form) решателей:
- Порог snapping дискриминанта
- Snapping малых значений к точному нулю (подавление cancellation error)
- Проверка конечности (NaN/Inf)
- Clamp аргументов трансцендентных функций в их область определения

КРИТИЧЕСКИЕ ИНВАРИАНТЫ:
1. Snapping возвращает ровно 0.0, а не "малое" значение
2. Все операции детерминированы и воспроизводимы
"""

import math
from typing import Final

# =============================================================================
# ПОРОГИ
# =============================================================================

# Порог snapping дискриминанта к нулю.
# Эвристика против cancellation error в b² − 4ac и q³ + r²: без неё кратные
# вещественные корни получают паразитные мнимые части порядка 1e-8.
# Настраиваемая константа, а не гарантированная граница ошибки.
DISCRIMINANT_SNAP_THRESHOLD: Final[float] = 1e-4


# =============================================================================
# ПРОВЕРКИ
# =============================================================================


def is_valid_float(value: float) -> bool:
    """True если значение конечное (не NaN, не Inf)."""
    return math.isfinite(value)


# =============================================================================
# SNAPPING И CLAMP
# =============================================================================


def snap_to_zero(value: float, threshold: float = DISCRIMINANT_SNAP_THRESHOLD) -> float:
    """
    Snapping значения к точному нулю.

    Используется для дискриминантов: значения, отличающиеся от нуля только
    шумом округления, считаются нулевыми, чтобы выбрать ветку кратного корня.

    Args:
        value: Исходное значение
        threshold: Порог (строгое сравнение |value| < threshold)

    Returns:
        0.0 если |value| < threshold, иначе value без изменений

    Examples:
        >>> snap_to_zero(5e-5)
        0.0
        >>> snap_to_zero(-5e-5)
        0.0
        >>> snap_to_zero(1e-4)
        0.0001
        >>> snap_to_zero(1e-5, threshold=0.0)
        1e-05
    """
    if abs(value) < threshold:
        return 0.0
    return value


def clamp(
    value: float,
    min_value: float | None = None,
    max_value: float | None = None,
) -> float:
    """
    Ограничение значения в заданном диапазоне.

    Examples:
        >>> clamp(1.0000000002, -1.0, 1.0)
        1.0
        >>> clamp(-3.0, -1.0, 1.0)
        -1.0
        >>> clamp(0.5, -1.0, 1.0)
        0.5
    """
    result = value

    if min_value is not None:
        result = max(result, min_value)

    if max_value is not None:
        result = min(result, max_value)

    return result

