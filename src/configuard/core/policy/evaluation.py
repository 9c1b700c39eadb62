"""Avaliação de tipo e de restrições de um valor resolvido.

Toda restrição aplicável é avaliada: violações são acumuladas, nunca
interrompidas na primeira. As restrições só rodam sobre um valor presente
cujo tipo já confere com o declarado.
"""

from __future__ import annotations

import re
from typing import Any, List

from configuard.core.contract.models import KeyConstraints
from configuard.core.hashing import canonical_json

from .models import (
    CONSTRAINT_ENUM,
    CONSTRAINT_MAX_ITEMS,
    CONSTRAINT_MAX_LENGTH,
    CONSTRAINT_MAXIMUM,
    CONSTRAINT_MIN_ITEMS,
    CONSTRAINT_MIN_LENGTH,
    CONSTRAINT_MINIMUM,
    CONSTRAINT_PATTERN,
    CONSTRAINT_PATTERN_INVALID,
    ValidationIssue,
)


KIND_STRING = "string"
KIND_NUMBER = "number"
KIND_BOOL = "bool"
KIND_OBJECT = "object"
KIND_ARRAY = "array"
KIND_NULL = "null"


def value_kind(value: Any) -> str:
    """Tipo estrutural JSON de um valor (bool antes de número)."""
    if value is None:
        return KIND_NULL
    if isinstance(value, bool):
        return KIND_BOOL
    if isinstance(value, (int, float)):
        return KIND_NUMBER
    if isinstance(value, str):
        return KIND_STRING
    if isinstance(value, dict):
        return KIND_OBJECT
    if isinstance(value, list):
        return KIND_ARRAY
    raise TypeError(f"unsupported value type: {type(value).__name__}")


def matches_type(expected_type: str, value: Any) -> bool:
    kind = value_kind(value)
    expected = expected_type.strip().lower()
    if expected == "int":
        # 1.0 é número, mas não é int
        return kind == KIND_NUMBER and isinstance(value, int)
    return kind == expected


def _fmt_number(x: Any) -> str:
    if isinstance(x, float) and x.is_integer():
        return str(int(x))
    return str(x)


def _enum_equal(value: Any, allowed: Any) -> bool:
    kind = value_kind(value)
    if kind != value_kind(allowed):
        return False
    if kind == KIND_NUMBER:
        return float(value) == float(allowed)
    if kind in (KIND_STRING, KIND_BOOL, KIND_NULL):
        return value == allowed
    return canonical_json(value) == canonical_json(allowed)


def evaluate_constraints(
    environment: str,
    path: str,
    value: Any,
    constraints: KeyConstraints,
) -> List[ValidationIssue]:
    issues: List[ValidationIssue] = []

    def add(code: str, message: str) -> None:
        issues.append(ValidationIssue(environment=environment, path=path, code=code, message=message))

    if constraints.enum is not None and not any(_enum_equal(value, a) for a in constraints.enum):
        add(CONSTRAINT_ENUM, "Value is not in allowed enum list.")

    kind = value_kind(value)

    if kind == KIND_STRING:
        length = len(value)
        if constraints.min_length is not None and length < constraints.min_length:
            add(CONSTRAINT_MIN_LENGTH, f"String length is {length}, minimum is {constraints.min_length}.")
        if constraints.max_length is not None and length > constraints.max_length:
            add(CONSTRAINT_MAX_LENGTH, f"String length is {length}, maximum is {constraints.max_length}.")
        if constraints.pattern is not None:
            try:
                matched = re.search(constraints.pattern, value) is not None
            except re.error:
                add(CONSTRAINT_PATTERN_INVALID, f"Regex pattern is invalid: '{constraints.pattern}'.")
            else:
                if not matched:
                    add(CONSTRAINT_PATTERN, f"Value does not match regex pattern '{constraints.pattern}'.")

    elif kind == KIND_NUMBER:
        if constraints.minimum is not None and value < constraints.minimum:
            add(
                CONSTRAINT_MINIMUM,
                f"Numeric value is {_fmt_number(value)}, minimum is {_fmt_number(constraints.minimum)}.",
            )
        if constraints.maximum is not None and value > constraints.maximum:
            add(
                CONSTRAINT_MAXIMUM,
                f"Numeric value is {_fmt_number(value)}, maximum is {_fmt_number(constraints.maximum)}.",
            )

    elif kind == KIND_ARRAY:
        count = len(value)
        if constraints.min_items is not None and count < constraints.min_items:
            add(CONSTRAINT_MIN_ITEMS, f"Array item count is {count}, minimum is {constraints.min_items}.")
        if constraints.max_items is not None and count > constraints.max_items:
            add(CONSTRAINT_MAX_ITEMS, f"Array item count is {count}, maximum is {constraints.max_items}.")

    return issues
