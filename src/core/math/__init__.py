"""
Core math modules

Аналитические решатели полиномов и численные примитивы с гарантией стабильности.
"""

# Numerical Safeguards
from src.core.math.numerical_safeguards import (
    DISCRIMINANT_SNAP_THRESHOLD,
    clamp,
    is_valid_float,
    snap_to_zero,
)

# Polynomial Roots
from src.core.math.polynomial_roots import (
    PolynomialDomainError,
    RootSolverConfig,
    evaluate_polynomial,
    max_residual,
    solve_cubic,
    solve_linear,
    solve_polynomial,
    solve_quadratic,
)

__all__ = [
    # Numerical Safeguards — Constants
    "DISCRIMINANT_SNAP_THRESHOLD",
    # Numerical Safeguards — Functions
    "clamp",
    "is_valid_float",
    "snap_to_zero",
    # Polynomial Roots — Exceptions
    "PolynomialDomainError",
    # Polynomial Roots — Config
    "RootSolverConfig",
    # Polynomial Roots — Functions
    "evaluate_polynomial",
    "max_residual",
    "solve_cubic",
    "solve_linear",
    "solve_polynomial",
    "solve_quadratic",
]
