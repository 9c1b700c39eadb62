"""Configuard — políticas sobre o contrato: validate, diff, explain."""

from .diff import diff  # noqa: F401
from .evaluation import evaluate_constraints, matches_type, value_kind  # noqa: F401
from .explain import find_rule, explain  # noqa: F401
from .models import (  # noqa: F401
    DiffIssue,
    DiffKind,
    DiffResult,
    ExplainResult,
    ValidationIssue,
    ValidationResult,
    ValidationWarning,
)
from .resolution import Resolution, candidate_paths, effective_source_order, resolve_rule  # noqa: F401
from .validate import collect_contract_warnings, evaluate_rule, validate  # noqa: F401
