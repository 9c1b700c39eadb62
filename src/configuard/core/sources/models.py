"""Valores resolvidos com proveniência e mapas achatados por store."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, Optional

from configuard.core.contract.models import SourceKind
from configuard.core.contract.paths import identifier_key


@dataclass(frozen=True)
class ResolvedValue:
    """Valor tipado + proveniência (store e arquivo de origem).

    `path` guarda a grafia achatada encontrada no arquivo, apenas para exibição.
    """

    value: Any
    source_kind: SourceKind
    source_file: str
    path: str


SourceMap = Dict[str, ResolvedValue]


@dataclass
class SourceMaps:
    """Mapas caminho→valor de um ambiente, um por store.

    As chaves são `identifier_key(path)`: lookup insensível a caixa e a separador.
    """

    environment: str
    appsettings: SourceMap = field(default_factory=dict)
    dotenv: SourceMap = field(default_factory=dict)
    env_snapshot: SourceMap = field(default_factory=dict)

    def for_kind(self, kind: SourceKind) -> SourceMap:
        if kind is SourceKind.APPSETTINGS:
            return self.appsettings
        if kind is SourceKind.DOTENV:
            return self.dotenv
        return self.env_snapshot

    def lookup(self, kind: SourceKind, path: str) -> Optional[ResolvedValue]:
        return self.for_kind(kind).get(identifier_key(path))
