"""
ComplexValue — Корень полинома как пара (re, im)

Immutable Pydantic модель. Значение считается вещественным тогда и только
тогда, когда мнимая часть равна ровно 0.0 (без толерантности): решатели
возвращают точный ноль на всех вещественных ветках.
"""

from pydantic import BaseModel, Field


class ComplexValue(BaseModel):
    """
    Комплексное значение с конечными компонентами.

    Создаётся решателями полиномов; после создания не изменяется.
    """

    re: float = Field(..., allow_inf_nan=False, description="Вещественная часть")
    im: float = Field(0.0, allow_inf_nan=False, description="Мнимая часть")

    model_config = {"frozen": True}

    # =========================================================================
    # FACTORIES
    # =========================================================================

    @classmethod
    def real(cls, value: float) -> "ComplexValue":
        """Вещественное значение (im = 0.0)."""
        return cls(re=value, im=0.0)

    @classmethod
    def from_complex(cls, z: complex) -> "ComplexValue":
        return cls(re=z.real, im=z.imag)

    # =========================================================================
    # PROPERTIES
    # =========================================================================

    @property
    def is_real(self) -> bool:
        """True iff im == 0.0 ровно."""
        return self.im == 0.0

    def to_complex(self) -> complex:
        return complex(self.re, self.im)

    def conjugate(self) -> "ComplexValue":
        return ComplexValue(re=self.re, im=-self.im)

    def __abs__(self) -> float:
        return abs(self.to_complex())

    def __str__(self) -> str:
        """
        Человекочитаемое представление.

        Examples:
            "2", "-1 + 2i", "-1 - 2i", "3i"
        """
        if self.is_real:
            return f"{self.re:.12g}"
        if self.re == 0.0:
            return f"{self.im:.12g}i"
        sign = "+" if self.im > 0 else "-"
        return f"{self.re:.12g} {sign} {abs(self.im):.12g}i"
