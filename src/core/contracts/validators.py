"""
Polynomial Solution Contract

Проверка сериализованного PolynomialSolution (to_contract()) против
contracts/schema/polynomial_solution.json через jsonschema (Draft 2020-12).

Схема читается один раз на загрузчик; валидатор решения по умолчанию
создаётся лениво при первом вызове validate_polynomial_solution().
"""

import json
from pathlib import Path
from typing import Any, Dict, Iterator, Optional

import jsonschema
from jsonschema import Draft202012Validator, ValidationError

# contracts/schema/ в корне репозитория (src/core/contracts/ → ../../..)
_DEFAULT_SCHEMA_DIR = Path(__file__).resolve().parents[3] / "contracts" / "schema"


# =============================================================================
# SCHEMA LOADER
# =============================================================================


class SchemaLoader:
    """Чтение и meta-валидация *.json схем из одного каталога."""

    def __init__(self, schema_dir: Optional[Path] = None):
        self._schema_dir = schema_dir or _DEFAULT_SCHEMA_DIR
        if not self._schema_dir.exists():
            raise RuntimeError(f"Schema directory not found: {self._schema_dir}")
        self._schemas: Dict[str, Dict[str, Any]] = {}

    def load_schema(self, schema_name: str) -> Dict[str, Any]:
        """
        Схема `<schema_dir>/<schema_name>.json` как dict.

        Raises:
            FileNotFoundError: Файла нет
            ValueError: Документ не является схемой Draft 2020-12
        """
        cached = self._schemas.get(schema_name)
        if cached is not None:
            return cached

        schema_path = self._schema_dir / f"{schema_name}.json"
        if not schema_path.exists():
            raise FileNotFoundError(f"Schema not found: {schema_path}")

        schema = json.loads(schema_path.read_text(encoding="utf-8"))
        try:
            Draft202012Validator.check_schema(schema)
        except jsonschema.SchemaError as e:
            raise ValueError(f"Invalid JSON Schema in {schema_name}.json: {e}") from e

        self._schemas[schema_name] = schema
        return schema


# =============================================================================
# VALIDATORS
# =============================================================================


class ContractValidator:
    """Валидатор данных против одной именованной схемы."""

    def __init__(self, schema_name: str, loader: Optional[SchemaLoader] = None):
        self.schema_name = schema_name
        self.validator = Draft202012Validator(
            (loader or SchemaLoader()).load_schema(schema_name)
        )

    def validate(self, data: Dict[str, Any]) -> None:
        """Raises: ValidationError при первом нарушении схемы."""
        self.validator.validate(data)

    def is_valid(self, data: Dict[str, Any]) -> bool:
        return self.validator.is_valid(data)

    def iter_errors(self, data: Dict[str, Any]) -> Iterator[ValidationError]:
        """Все нарушения схемы, а не только первое."""
        return self.validator.iter_errors(data)


class PolynomialSolutionValidator(ContractValidator):
    """Контракт polynomial_solution: coefficients, effective_degree, threshold, roots."""

    def __init__(self, loader: Optional[SchemaLoader] = None):
        super().__init__("polynomial_solution", loader)


_DEFAULT_SOLUTION_VALIDATOR: Optional[PolynomialSolutionValidator] = None


def validate_polynomial_solution(data: Dict[str, Any]) -> None:
    """
    Проверка результата PolynomialSolution.to_contract() (или того же dict
    после json.dumps / json.loads).

    Raises:
        ValidationError: Данные не соответствуют схеме
    """
    global _DEFAULT_SOLUTION_VALIDATOR
    if _DEFAULT_SOLUTION_VALIDATOR is None:
        _DEFAULT_SOLUTION_VALIDATOR = PolynomialSolutionValidator()
    _DEFAULT_SOLUTION_VALIDATOR.validate(data)
