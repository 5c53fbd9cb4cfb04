"""
Polynomial Roots — Closed-Form Solvers for Degree 1..3

Модуль находит все корни (вещественные и комплексные) полиномов степени 1, 2, 3
в замкнутой форме:
- solve_linear:    a·x + b = 0
- solve_quadratic: a·x² + b·x + c = 0 (дискриминант d = b² − 4ac)
- solve_cubic:     a·x³ + b·x² + c·x + d = 0 (метод Кардано + тригонометрическая форма)
- solve_polynomial: диспетчер по числу коэффициентов, возвращает PolynomialSolution

КРИТИЧЕСКИЕ ИНВАРИАНТЫ:
1. Вырожденные входы не вызывают исключений: при нулевом старшем коэффициенте
   решатель деградирует к решателю меньшей степени (cubic → quadratic → linear),
   линейный решатель при a == 0 возвращает пустой список
2. Дискриминант с |D| < threshold заменяется на ровно 0.0
3. На вещественных ветках мнимая часть корня равна ровно 0.0
4. Чистые функции без состояния: одинаковые входы → одинаковые выходы
5. NaN/Inf во входах → PolynomialDomainError (нарушение предусловия)
6. Переполнение промежуточных величин не приводит к NaN: дискриминант
   пересчитывается в масштабе 2^k; корень вне диапазона float → PolynomialDomainError

ФОРМУЛЫ (кубическое уравнение, после нормализации на a):
    B = b/a, C = c/a, D = d/a
    q = (3C − B²) / 9
    r = (9BC − 27D − 2B³) / 54
    Δ = q³ + r²

    Δ > 0:  s = ∛(r + √Δ), t = ∛(r − √Δ)
            x1 = −B/3 + (s + t)
            x2,3 = −B/3 − (s + t)/2 ± i·(√3/2)·(s − t)
    Δ ≤ 0:  θ = arccos(r / √(−q³))
            x_k = 2√(−q)·cos((θ + 2πk)/3) − B/3,  k = 0, 1, 2
"""

import logging
import math
from dataclasses import dataclass
from typing import Final, List, Optional, Sequence, Tuple

from src.core.domain.complex_value import ComplexValue
from src.core.domain.polynomial import (
    MAX_SUPPORTED_DEGREE,
    Polynomial,
    PolynomialSolution,
)
from src.core.math.numerical_safeguards import (
    DISCRIMINANT_SNAP_THRESHOLD,
    clamp,
    is_valid_float,
    snap_to_zero,
)

logger = logging.getLogger(__name__)

# Фазовые сдвиги тригонометрической формы: 0, 2π/3, 4π/3
_TWO_PI: Final[float] = 2.0 * math.pi

# Множитель мнимой части комплексно-сопряжённой пары в форме Кардано
_HALF_SQRT3: Final[float] = math.sqrt(3.0) / 2.0


# =============================================================================
# EXCEPTIONS
# =============================================================================


class PolynomialDomainError(ValueError):
    """
    Нарушение предусловия решателя.

    Возникает для NaN/Inf коэффициентов, отрицательного или неконечного
    порога snapping, неподдерживаемого числа коэффициентов. Вырожденные,
    но конечные входы (нулевой старший коэффициент) это исключение НЕ вызывают.
    """

    pass


# =============================================================================
# CONFIGURATION
# =============================================================================


@dataclass(frozen=True)
class RootSolverConfig:
    """Конфигурация аналитических решателей.

    discriminant_threshold: порог snapping дискриминанта к нулю.
    Эвристика, а не гарантированная граница ошибки; 0.0 отключает snapping.
    """

    discriminant_threshold: float = DISCRIMINANT_SNAP_THRESHOLD

    def __post_init__(self) -> None:
        _validate_threshold(self.discriminant_threshold)


# =============================================================================
# ВАЛИДАЦИЯ ВХОДОВ
# =============================================================================


def _validate_coefficients(*coefficients: float) -> None:
    for index, value in enumerate(coefficients):
        if not is_valid_float(value):
            raise PolynomialDomainError(
                f"Coefficient #{index} must be a finite float (not NaN/Inf), got {value}"
            )


def _validate_threshold(threshold: float) -> None:
    if not is_valid_float(threshold) or threshold < 0:
        raise PolynomialDomainError(
            f"threshold must be a finite non-negative float, got {threshold}"
        )


def _real_cbrt(x: float) -> float:
    """Вещественный кубический корень с сохранением знака."""
    if x == 0.0:
        return 0.0
    return math.copysign(abs(x) ** (1.0 / 3.0), x)


def _root(re: float, im: float = 0.0) -> ComplexValue:
    """
    ComplexValue из компонент корня.

    Raises:
        PolynomialDomainError: Корень не представим конечным float
            (например, −b/a при |a| ≪ |b| даёт inf)
    """
    if not (is_valid_float(re) and is_valid_float(im)):
        raise PolynomialDomainError(f"Root ({re}, {im}) is outside float range")
    return ComplexValue(re=re, im=im)


# =============================================================================
# МАСШТАБИРОВАНИЕ ПРИ ПЕРЕПОЛНЕНИИ
# =============================================================================
# Используется только когда прямой расчёт дискриминанта дал inf/NaN.
# Масштаб всегда степень двойки: деление на 2^k точное, без потери разрядов.


def _binary_exponent(value: float) -> int:
    """e такое, что |value| ∈ [2^(e−1), 2^e)."""
    return math.frexp(value)[1]


def _unscale(value: float, exponent: int) -> float:
    """value·2^exponent; переполнение → PolynomialDomainError."""
    try:
        return math.ldexp(value, exponent)
    except OverflowError as e:
        raise PolynomialDomainError(
            f"Root {value}·2^{exponent} is outside float range"
        ) from e


def _cubic_scale_exponent(a: float, b: float, c: float, d: float) -> int:
    """
    Показатель k подстановки x = 2^k·y для кубического уравнения.

    k = max(⌈log2|b/a|⌉, ⌈log2|c/a| / 2⌉, ⌈log2|d/a| / 3⌉): после подстановки
    коэффициенты монического уравнения по y имеют порядок единицы.
    Считается по двоичным порядкам, без деления b/a (оно само может переполниться).
    """
    ea = _binary_exponent(a)
    candidates = [0]
    for power, value in ((1, b), (2, c), (3, d)):
        if value != 0.0:
            candidates.append(-((ea - _binary_exponent(value)) // power))
    return max(candidates)


def _scaled_ratio(value: float, a: float, power: int, exponent: int) -> float:
    """value / (a·2^(power·exponent)) через мантиссы и порядки."""
    mv, ev = math.frexp(value)
    ma, ea = math.frexp(a)
    return math.ldexp(mv / ma, ev - ea - power * exponent)


def _cardano_terms(B: float, C: float, D: float) -> Tuple[float, float, float]:
    """(q, r, Δ) для монического x³ + B·x² + C·x + D."""
    q = (3.0 * C - B * B) / 9.0
    r = (9.0 * B * C - 27.0 * D - 2.0 * B * B * B) / 54.0
    return q, r, q * q * q + r * r


# =============================================================================
# SOLVERS
# =============================================================================


def solve_linear(a: float, b: float) -> List[ComplexValue]:
    """
    Решение a·x + b = 0.

    Args:
        a: Коэффициент при x
        b: Свободный член

    Returns:
        [] если a == 0 (нет единственного решения), иначе [−b/a]

    Raises:
        PolynomialDomainError: NaN/Inf во входах или −b/a вне диапазона float

    Examples:
        >>> [str(x) for x in solve_linear(2.0, -4.0)]
        ['2']
        >>> solve_linear(0.0, 5.0)
        []
    """
    _validate_coefficients(a, b)

    if a == 0:
        logger.debug("solve_linear: a == 0, no unique root (b=%r)", b)
        return []

    return [_root(-b / a)]


def solve_quadratic(
    a: float,
    b: float,
    c: float,
    threshold: float = DISCRIMINANT_SNAP_THRESHOLD,
) -> List[ComplexValue]:
    """
    Решение a·x² + b·x + c = 0.

    При a == 0 деградирует к solve_linear(b, c).

    Ветки по дискриминанту d = b² − 4ac (после snapping):
    - d > 0: два различных вещественных корня (−b ± √d) / (2a), сначала "+"
    - d == 0: кратный вещественный корень −b/(2a), возвращается дважды
    - d < 0: комплексно-сопряжённая пара −b/(2a) ± i·√(−d)/(2a),
      сначала корень с "+"

    Если b² или 4ac переполняют float, коэффициенты делятся на общий
    множитель 2^k (корни при этом не меняются), а порог snapping
    пересчитывается в тот же масштаб.

    Args:
        a, b, c: Коэффициенты
        threshold: Порог snapping дискриминанта (default: 1e-4)

    Returns:
        Список из 2 корней (или результат solve_linear)

    Raises:
        PolynomialDomainError: NaN/Inf во входах, threshold < 0,
            корень вне диапазона float

    Examples:
        >>> [str(x) for x in solve_quadratic(1.0, -3.0, 2.0)]
        ['2', '1']
        >>> [str(x) for x in solve_quadratic(1.0, 2.0, 5.0)]
        ['-1 + 2i', '-1 - 2i']
    """
    _validate_coefficients(a, b, c)
    _validate_threshold(threshold)

    if a == 0:
        logger.debug("solve_quadratic: a == 0, degrading to linear")
        return solve_linear(b, c)

    # d_true = raw_d · 2^exponent
    exponent = 0
    raw_d = b * b - 4.0 * a * c
    if not is_valid_float(raw_d):
        k = _binary_exponent(max(abs(a), abs(b), abs(c)))
        logger.debug("solve_quadratic: discriminant overflow, scaling by 2^-%d", k)
        a, b, c = math.ldexp(a, -k), math.ldexp(b, -k), math.ldexp(c, -k)
        if a == 0:
            raise PolynomialDomainError(
                f"Roots are outside float range: |a| is below 2^-1074 after scaling by 2^-{k}"
            )
        raw_d = b * b - 4.0 * a * c
        exponent = 2 * k

    d = snap_to_zero(raw_d, math.ldexp(threshold, -exponent))
    if d == 0.0 and raw_d != 0.0:
        logger.debug("solve_quadratic: discriminant %r·2^%d snapped to 0", raw_d, exponent)

    two_a = 2.0 * a

    if d > 0:
        sqrt_d = math.sqrt(d)
        return [
            _root((-b + sqrt_d) / two_a),
            _root((-b - sqrt_d) / two_a),
        ]

    if d == 0:
        root = _root(-b / two_a)
        return [root, root]

    re = -b / two_a
    im = math.sqrt(-d) / two_a
    return [_root(re, im), _root(re, -im)]


def solve_cubic(
    a: float,
    b: float,
    c: float,
    d: float,
    threshold: float = DISCRIMINANT_SNAP_THRESHOLD,
) -> List[ComplexValue]:
    """
    Решение a·x³ + b·x² + c·x + d = 0 методом Кардано.

    При a == 0 деградирует к solve_quadratic(b, c, d, threshold).

    Ветки по дискриминанту Δ = q³ + r² (после snapping):
    - Δ > 0: один вещественный корень (сумма двух вещественных кубических
      корней) и комплексно-сопряжённая пара
    - Δ ≤ 0: три вещественных корня (возможно кратных) в тригонометрической
      форме с фазами 0, 2π/3, 4π/3

    Если q, r или Δ переполняют float, уравнение решается для y = x / 2^k
    (k из _cubic_scale_exponent), порог пересчитывается как threshold / 2^(6k),
    корни возвращаются умноженными на 2^k.

    Ограничение: порог абсолютный. Шум округления Δ растёт как шестая степень
    масштаба корней, поэтому при большом разбросе коэффициентов кратный
    корень может не попасть под snapping. Пример: для (1, 1e6, 0, 0) с
    корнями 0, 0, −1e6 шум Δ порядка 1e17, и вместо двойного нуля
    возвращается пара порядка ±3e−3·i.

    Args:
        a, b, c, d: Коэффициенты
        threshold: Порог snapping дискриминанта (default: 1e-4)

    Returns:
        Список из 3 корней (или результат solve_quadratic)

    Raises:
        PolynomialDomainError: NaN/Inf во входах, threshold < 0,
            корень вне диапазона float
    """
    _validate_coefficients(a, b, c, d)
    _validate_threshold(threshold)

    if a == 0:
        logger.debug("solve_cubic: a == 0, degrading to quadratic")
        return solve_quadratic(b, c, d, threshold)

    # Нормализация: x³ + B·x² + C·x + D = 0
    B = b / a
    C = c / a
    D = d / a
    q, r, raw_disc = _cardano_terms(B, C, D)

    # x = y · 2^exponent
    exponent = 0
    if not (is_valid_float(q) and is_valid_float(r) and is_valid_float(raw_disc)):
        exponent = _cubic_scale_exponent(a, b, c, d)
        logger.debug("solve_cubic: intermediate overflow, solving for x / 2^%d", exponent)
        B = _scaled_ratio(b, a, 1, exponent)
        C = _scaled_ratio(c, a, 2, exponent)
        D = _scaled_ratio(d, a, 3, exponent)
        q, r, raw_disc = _cardano_terms(B, C, D)
        if not (is_valid_float(q) and is_valid_float(r) and is_valid_float(raw_disc)):
            raise PolynomialDomainError(
                f"Cubic ({a}, {b}, {c}, {d}) is outside float range after scaling by 2^-{exponent}"
            )

    shift = B / 3.0

    disc = snap_to_zero(raw_disc, math.ldexp(threshold, -6 * exponent))
    if disc == 0.0 and raw_disc != 0.0:
        logger.debug("solve_cubic: discriminant %r snapped to 0", raw_disc)

    if disc > 0:
        sqrt_disc = math.sqrt(disc)
        s = _real_cbrt(r + sqrt_disc)
        t = _real_cbrt(r - sqrt_disc)

        re = _unscale(-shift - (s + t) / 2.0, exponent)
        im = _unscale(_HALF_SQRT3 * (s - t), exponent)
        return [
            _root(_unscale(-shift + s + t, exponent)),
            _root(re, im),
            _root(re, -im),
        ]

    neg_q_cubed = -q * q * q
    if neg_q_cubed <= 0:
        # Δ == 0 после snapping при q ≥ 0: √(−q³) не определён,
        # вырожденная форма Кардано s == t == ∛r
        s = _real_cbrt(r)
        return [
            _root(_unscale(-shift + 2.0 * s, exponent)),
            _root(_unscale(-shift - s, exponent)),
            _root(_unscale(-shift - s, exponent)),
        ]

    # Snapping может вывести аргумент arccos за [−1, 1] на величину порядка ulp
    cos_arg = clamp(r / math.sqrt(neg_q_cubed), -1.0, 1.0)
    theta = math.acos(cos_arg)
    amplitude = 2.0 * math.sqrt(-q)

    return [
        _root(_unscale(amplitude * math.cos((theta + k * _TWO_PI) / 3.0) - shift, exponent))
        for k in range(3)
    ]


# =============================================================================
# =============================================================================


def evaluate_polynomial(coefficients: Sequence[float], z: complex) -> complex:
    """
    Значение полинома по схеме Горнера.

    Args:
        coefficients: [a_n, ..., a_0] в порядке убывания степени
        z: Точка (float или complex)

    Returns:
        p(z)

    Examples:
        >>> evaluate_polynomial([1.0, -3.0, 2.0], 2.0)
        0.0
        >>> evaluate_polynomial([1.0, 0.0, 1.0], 1j)
        0j
    """
    acc: complex = 0.0
    for a in coefficients:
        acc = acc * z + a
    return acc


def max_residual(coefficients: Sequence[float], roots: Sequence[ComplexValue]) -> float:
    """Максимум |p(z)| по корням; 0.0 для пустого списка."""
    return max(
        (abs(evaluate_polynomial(coefficients, root.to_complex())) for root in roots),
        default=0.0,
    )


# =============================================================================
# DISPATCHER
# =============================================================================


def solve_polynomial(
    coefficients: Sequence[float],
    config: Optional[RootSolverConfig] = None,
) -> PolynomialSolution:
    """
    Решение полинома степени 1..3 по коэффициентам [a_n, ..., a_0].

    Число коэффициентов выбирает решатель (2 → linear, 3 → quadratic,
    4 → cubic). Нулевые старшие коэффициенты обрабатываются деградацией
    внутри решателей.

    Args:
        coefficients: Коэффициенты в порядке убывания степени
        config: Конфигурация решателя (default: RootSolverConfig())

    Returns:
        PolynomialSolution с корнями и эффективной степенью

    Raises:
        PolynomialDomainError: Неподдерживаемое число коэффициентов или NaN/Inf

    Examples:
        >>> solve_polynomial([1.0, -6.0, 11.0, -6.0]).effective_degree
        3
    """
    config = config or RootSolverConfig()
    coeffs = [float(value) for value in coefficients]

    if not 2 <= len(coeffs) <= MAX_SUPPORTED_DEGREE + 1:
        raise PolynomialDomainError(
            f"Expected 2..{MAX_SUPPORTED_DEGREE + 1} coefficients, got {len(coeffs)}"
        )
    _validate_coefficients(*coeffs)

    threshold = config.discriminant_threshold
    if len(coeffs) == 2:
        roots = solve_linear(*coeffs)
    elif len(coeffs) == 3:
        roots = solve_quadratic(*coeffs, threshold=threshold)
    else:
        roots = solve_cubic(*coeffs, threshold=threshold)

    polynomial = Polynomial(coefficients=tuple(coeffs))

    return PolynomialSolution(
        coefficients=polynomial.coefficients,
        effective_degree=polynomial.effective_degree,
        threshold=threshold,
        roots=tuple(roots),
    )
