"""
Tipos canônicos de resultado das políticas (validate, diff, explain).

Estes três formatos são toda a fronteira vista pelos colaboradores externos
(CLI, formatadores de saída). São imutáveis ou acumulados apenas durante a
execução do comando, e serializáveis via `to_dict()`.

Invariantes:
    - Issues e warnings preservam a ordem de avaliação (ambiente, regra, restrição)
    - Warnings nunca alteram o veredito
    - Códigos de issue são estáveis e legíveis por máquina
"""

from __future__ import annotations

from dataclasses import asdict, dataclass, field
from enum import Enum
from typing import Any, Dict, List, Optional, Tuple


# ---------------------------------------------------------------------------
# Códigos estáveis
# ---------------------------------------------------------------------------

MISSING_REQUIRED = "missing_required"
FORBIDDEN_PRESENT = "forbidden_present"
TYPE_MISMATCH = "type_mismatch"
CONSTRAINT_ENUM = "constraint_enum"
CONSTRAINT_MIN_LENGTH = "constraint_minLength"
CONSTRAINT_MAX_LENGTH = "constraint_maxLength"
CONSTRAINT_PATTERN = "constraint_pattern"
CONSTRAINT_PATTERN_INVALID = "constraint_pattern_invalid"
CONSTRAINT_MINIMUM = "constraint_minimum"
CONSTRAINT_MAXIMUM = "constraint_maximum"
CONSTRAINT_MIN_ITEMS = "constraint_minItems"
CONSTRAINT_MAX_ITEMS = "constraint_maxItems"

UNKNOWN_SOURCE_PREFERENCE = "unknown_source_preference"

# vereditos do explain que não são issues
OPTIONAL_MISSING = "optional_missing"
PASS = "pass"


# ---------------------------------------------------------------------------
# validate
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class ValidationIssue:
    environment: str
    path: str
    code: str
    message: str

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)


@dataclass(frozen=True)
class ValidationWarning:
    path: str
    code: str
    message: str

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)


@dataclass
class ValidationResult:
    """Issues e warnings ordenados de uma validação. PASS sse não há issues."""

    issues: List[ValidationIssue] = field(default_factory=list)
    warnings: List[ValidationWarning] = field(default_factory=list)

    @property
    def is_success(self) -> bool:
        return not self.issues

    def to_dict(self) -> Dict[str, Any]:
        return {
            "result": "pass" if self.is_success else "fail",
            "issues": [i.to_dict() for i in self.issues],
            "warnings": [w.to_dict() for w in self.warnings],
        }


# ---------------------------------------------------------------------------
# diff
# ---------------------------------------------------------------------------

class DiffKind(str, Enum):
    MISSING = "missing"
    TYPE_CHANGED = "typeChanged"
    CHANGED = "changed"


@dataclass(frozen=True)
class DiffIssue:
    path: str
    kind: DiffKind
    left_environment: str
    right_environment: str
    message: str

    def to_dict(self) -> Dict[str, Any]:
        return {
            "path": self.path,
            "kind": self.kind.value,
            "leftEnvironment": self.left_environment,
            "rightEnvironment": self.right_environment,
            "message": self.message,
        }


@dataclass
class DiffResult:
    left_environment: str
    right_environment: str
    issues: List[DiffIssue] = field(default_factory=list)

    @property
    def is_clean(self) -> bool:
        return not self.issues

    def to_dict(self) -> Dict[str, Any]:
        return {
            "left": self.left_environment,
            "right": self.right_environment,
            "result": "clean" if self.is_clean else "drift",
            "issues": [i.to_dict() for i in self.issues],
        }


# ---------------------------------------------------------------------------
# explain
# ---------------------------------------------------------------------------

MATCHED_BY_ALIAS = "alias"
MATCHED_BY_PATH = "path"


@dataclass(frozen=True)
class ExplainResult:
    """Veredito único de uma chave em um ambiente, com diagnóstico.

    `matched_rule_by`, `source_order_used` e `candidate_paths` são destinados
    apenas ao nível de verbosidade detalhado. `detailed` registra esse nível
    no momento do explain e é o padrão de `to_dict()`.
    """

    environment: str
    requested_key: str
    rule_path: str
    rule_type: str
    is_pass: bool
    decision_code: str
    decision_message: str
    resolved_path: Optional[str] = None
    resolved_source: Optional[str] = None
    resolved_from: Optional[str] = None
    resolved_value_display: Optional[str] = None
    matched_rule_by: str = MATCHED_BY_PATH
    source_order_used: Tuple[str, ...] = ()
    candidate_paths: Tuple[str, ...] = ()
    detailed: bool = False

    def to_dict(self, *, detailed: Optional[bool] = None) -> Dict[str, Any]:
        if detailed is None:
            detailed = self.detailed
        out: Dict[str, Any] = {
            "environment": self.environment,
            "requestedKey": self.requested_key,
            "rule": {"path": self.rule_path, "type": self.rule_type},
            "decision": {
                "pass": self.is_pass,
                "code": self.decision_code,
                "message": self.decision_message,
            },
            "resolution": {
                "resolvedPath": self.resolved_path,
                "resolvedSource": self.resolved_source,
                "resolvedFrom": self.resolved_from,
                "resolvedValue": self.resolved_value_display,
            },
        }
        if detailed:
            out["diagnostics"] = {
                "matchedRuleBy": self.matched_rule_by,
                "sourceOrderUsed": list(self.source_order_used),
                "candidatePaths": list(self.candidate_paths),
            }
        return out
