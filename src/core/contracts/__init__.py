"""
Contract Validation Module

Модуль для валидации JSON контрактов сериализованных решений полиномов.
"""

from .validators import (
    ContractValidator,
    PolynomialSolutionValidator,
    SchemaLoader,
    validate_polynomial_solution,
)

__all__ = [
    # Classes
    "SchemaLoader",
    "ContractValidator",
    "PolynomialSolutionValidator",
    # Functions
    "validate_polynomial_solution",
]
