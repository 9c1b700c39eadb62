"""Modelo imutável do contrato (v1).

Um `ContractDocument` é carregado uma vez por invocação e nunca mais muda.
Dados derivados de cada regra (caminhos candidatos e ordem efetiva de stores)
são calculados na construção da regra e guardados junto dela.
"""

from __future__ import annotations

import re
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, List, Optional, Tuple

from .hashing import compute_contract_hash

from .paths import environment_key, normalize_path


ENV_PLACEHOLDER = "{env}"
_ENV_PLACEHOLDER_RE = re.compile(re.escape(ENV_PLACEHOLDER), re.IGNORECASE)

SUPPORTED_VERSION = "1"
SUPPORTED_TYPES = ("string", "int", "number", "bool", "object", "array")


class SourceKind(str, Enum):
    """Tipos de store reconhecidos. O valor textual é estável e canônico."""

    APPSETTINGS = "appsettings"
    DOTENV = "dotenv"
    ENV_SNAPSHOT = "envsnapshot"

    @classmethod
    def parse(cls, value: Any) -> Optional["SourceKind"]:
        if not isinstance(value, str):
            return None
        normalized = value.strip().lower()
        for kind in cls:
            if kind.value == normalized:
                return kind
        return None


# store mais efêmero / mais provável de sobrescrever vem primeiro
DEFAULT_SOURCE_ORDER: Tuple[SourceKind, ...] = (
    SourceKind.ENV_SNAPSHOT,
    SourceKind.DOTENV,
    SourceKind.APPSETTINGS,
)


def has_env_placeholder(pattern: str) -> bool:
    return bool(_ENV_PLACEHOLDER_RE.search(pattern))


def expand_env_pattern(pattern: str, environment: str) -> str:
    return _ENV_PLACEHOLDER_RE.sub(lambda _m: environment, pattern)


# ---------------------------------------------------------------------------
# Stores
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class AppSettingsSource:
    base: str
    environment_pattern: str

    def environment_file(self, environment: str) -> str:
        return expand_env_pattern(self.environment_pattern, environment)


@dataclass(frozen=True)
class DotEnvSource:
    base: str
    environment_pattern: str
    optional: bool = False

    def environment_file(self, environment: str) -> str:
        return expand_env_pattern(self.environment_pattern, environment)


@dataclass(frozen=True)
class EnvSnapshotSource:
    environment_pattern: str
    optional: bool = False

    def environment_file(self, environment: str) -> str:
        return expand_env_pattern(self.environment_pattern, environment)


@dataclass(frozen=True)
class ContractSources:
    appsettings: AppSettingsSource
    dotenv: Optional[DotEnvSource] = None
    env_snapshot: Optional[EnvSnapshotSource] = None


# ---------------------------------------------------------------------------
# Regras de chave
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class KeyConstraints:
    """Conjunto explícito de restrições; `None` significa "não declarada"."""

    min_length: Optional[int] = None
    max_length: Optional[int] = None
    pattern: Optional[str] = None
    minimum: Optional[float] = None
    maximum: Optional[float] = None
    min_items: Optional[int] = None
    max_items: Optional[int] = None
    enum: Optional[Tuple[Any, ...]] = None

    @property
    def is_empty(self) -> bool:
        return all(
            v is None
            for v in (
                self.min_length,
                self.max_length,
                self.pattern,
                self.minimum,
                self.maximum,
                self.min_items,
                self.max_items,
                self.enum,
            )
        )


def _build_candidate_paths(path: str, aliases: Tuple[str, ...]) -> Tuple[str, ...]:
    return tuple(normalize_path(p).strip() for p in (path,) + aliases)


def _build_source_order(source_preference: Tuple[str, ...]) -> Tuple[SourceKind, ...]:
    order: List[SourceKind] = []
    for entry in source_preference:
        kind = SourceKind.parse(entry)
        if kind is not None and kind not in order:
            order.append(kind)
    return tuple(order) if order else DEFAULT_SOURCE_ORDER


@dataclass(frozen=True)
class KeyRule:
    """Regra de uma chave de configuração.

    `candidate_paths` e `source_order` dependem apenas da própria regra e são
    calculados uma única vez em `__post_init__`.
    """

    path: str
    aliases: Tuple[str, ...] = ()
    type: str = "string"
    required_in: Tuple[str, ...] = ()
    forbidden_in: Tuple[str, ...] = ()
    sensitive: bool = False
    source_preference: Tuple[str, ...] = ()
    constraints: KeyConstraints = field(default_factory=KeyConstraints)

    candidate_paths: Tuple[str, ...] = field(init=False, repr=False, compare=False)
    source_order: Tuple[SourceKind, ...] = field(init=False, repr=False, compare=False)

    def __post_init__(self) -> None:
        for name in ("aliases", "required_in", "forbidden_in", "source_preference"):
            object.__setattr__(self, name, tuple(getattr(self, name) or ()))
        object.__setattr__(self, "candidate_paths", _build_candidate_paths(self.path, self.aliases))
        object.__setattr__(self, "source_order", _build_source_order(self.source_preference))

    def is_required_in(self, environment: str) -> bool:
        target = environment_key(environment)
        return any(environment_key(e) == target for e in self.required_in)

    def is_forbidden_in(self, environment: str) -> bool:
        target = environment_key(environment)
        return any(environment_key(e) == target for e in self.forbidden_in)

    def invalid_source_preferences(self) -> List[str]:
        """Entradas de `source_preference` fora dos stores reconhecidos (normalizadas, sem repetição)."""
        invalid: List[str] = []
        for entry in self.source_preference:
            normalized = str(entry).strip().lower()
            if not normalized or SourceKind.parse(normalized) is not None:
                continue
            if normalized not in invalid:
                invalid.append(normalized)
        return invalid


# ---------------------------------------------------------------------------
# Documento
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class ContractDocument:
    """Representação interna explícita do contrato v1."""

    version: str
    environments: Tuple[str, ...]
    sources: ContractSources
    keys: Tuple[KeyRule, ...]
    raw: Dict[str, Any] = field(default_factory=dict, repr=False, compare=False)

    def __post_init__(self) -> None:
        object.__setattr__(self, "environments", tuple(self.environments))
        object.__setattr__(self, "keys", tuple(self.keys))

    @property
    def contract_hash(self) -> str:
        return compute_contract_hash(self.raw)
