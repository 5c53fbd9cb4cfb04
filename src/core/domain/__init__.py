"""
Domain models and value objects.

Contains ComplexValue, Polynomial and PolynomialSolution.
"""

from src.core.domain.complex_value import ComplexValue
from src.core.domain.polynomial import (
    MAX_SUPPORTED_DEGREE,
    Polynomial,
    PolynomialSolution,
)

__all__ = [
    "ComplexValue",
    "MAX_SUPPORTED_DEGREE",
    "Polynomial",
    "PolynomialSolution",
]
