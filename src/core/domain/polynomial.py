"""
Polynomial — Модели полинома и результата решения

Immutable Pydantic модели:
- Polynomial: коэффициенты в порядке убывания степени [a_n, ..., a_0], n ≤ 3
- PolynomialSolution: коэффициенты, эффективная степень, порог snapping, корни

Сериализация PolynomialSolution.to_contract() соответствует
contracts/schema/polynomial_solution.json.
"""

import math
from typing import Any, Dict, Final, Tuple

from pydantic import BaseModel, Field, field_validator

from src.core.domain.complex_value import ComplexValue

# Максимальная степень, поддерживаемая аналитическими решателями
MAX_SUPPORTED_DEGREE: Final[int] = 3


def _check_finite(values: Tuple[float, ...]) -> Tuple[float, ...]:
    for value in values:
        if not math.isfinite(value):
            raise ValueError(f"coefficients must be finite, got {value}")
    return values


class Polynomial(BaseModel):
    """
    Полином степени ≤ 3 с вещественными коэффициентами.

    Коэффициенты хранятся в порядке убывания степени: (a_n, ..., a_1, a_0).
    """

    coefficients: Tuple[float, ...] = Field(
        ...,
        min_length=1,
        max_length=MAX_SUPPORTED_DEGREE + 1,
        description="Коэффициенты [a_n, ..., a_0]",
    )

    model_config = {"frozen": True}

    @field_validator("coefficients")
    @classmethod
    def validate_coefficients(cls, v: Tuple[float, ...]) -> Tuple[float, ...]:
        """NaN/Inf запрещены"""
        return _check_finite(v)

    @property
    def degree(self) -> int:
        """Номинальная степень (по числу коэффициентов)."""
        return len(self.coefficients) - 1

    @property
    def effective_degree(self) -> int:
        """
        Степень после отбрасывания нулевых старших коэффициентов.

        Сравнение с нулём точное, как и в решателях. Для константы 0.
        """
        for index, value in enumerate(self.coefficients):
            if value != 0.0:
                return self.degree - index
        return 0


class PolynomialSolution(BaseModel):
    """
    Результат решения полинома.

    Корни упорядочены так, как их возвращает соответствующий решатель;
    кратные корни повторяются.
    """

    coefficients: Tuple[float, ...] = Field(
        ..., min_length=1, max_length=MAX_SUPPORTED_DEGREE + 1
    )
    effective_degree: int = Field(..., ge=0, le=MAX_SUPPORTED_DEGREE)
    threshold: float = Field(..., ge=0, allow_inf_nan=False)
    roots: Tuple[ComplexValue, ...] = Field(default_factory=tuple)

    model_config = {"frozen": True}

    @field_validator("coefficients")
    @classmethod
    def validate_coefficients(cls, v: Tuple[float, ...]) -> Tuple[float, ...]:
        return _check_finite(v)

    @property
    def real_roots(self) -> Tuple[float, ...]:
        """Вещественные части корней с im == 0.0."""
        return tuple(root.re for root in self.roots if root.is_real)

    @property
    def has_complex_roots(self) -> bool:
        return any(not root.is_real for root in self.roots)

    def to_contract(self) -> Dict[str, Any]:
        """
        JSON-совместимое представление для контракта polynomial_solution.

        Returns:
            dict с ключами coefficients, effective_degree, threshold, roots
        """
        return {
            "coefficients": list(self.coefficients),
            "effective_degree": self.effective_degree,
            "threshold": self.threshold,
            "roots": [
                {"re": root.re, "im": root.im, "is_real": root.is_real}
                for root in self.roots
            ],
        }
