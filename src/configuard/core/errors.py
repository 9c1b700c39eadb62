"""
Configuard — Canonical Error Structures (v1)

Este módulo define o padrão canônico de payload de erro de entrada do
Configuard. O payload é o que os colaboradores externos (CLI, formatadores)
recebem quando um comando é abortado por erro de entrada.

Erros de entrada devem ser:

- explícitos
- serializáveis
- acionáveis

Resultados de política (issues/warnings) NÃO passam por aqui.
"""

from __future__ import annotations

from dataclasses import asdict, dataclass
from typing import Any, Dict, Optional

from configuard.core.config.errors import ConfigError
from configuard.core.contract.errors import (
    ContractFileNotFoundError,
    ContractParseError,
    UnsupportedContractFormatError,
)
from configuard.core.exceptions import ConfiguardInputError
from configuard.core.sources.errors import (
    SourceError,
    SourceFileNotFoundError,
    SourceParseError,
    SourcePathTraversalError,
)


# ---------------------------------------------------------------------------
# Payload canônico
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class ErrorPayload:
    """
    Payload canônico de erro de entrada.

    Campos:
    - type: código estável do erro (não é texto livre)
    - message: mensagem curta, humana e objetiva
    - details: dados estruturados relevantes para diagnóstico
    - hint: ação sugerida ao operador (onde corrigir)
    """

    type: str
    message: str
    details: Dict[str, Any]
    hint: Optional[str] = None

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)


# ---------------------------------------------------------------------------
# Catálogo canônico de tipos de erro (v1)
# ---------------------------------------------------------------------------

# Contrato
CONTRACT_NOT_FOUND = "CONTRACT_NOT_FOUND"
CONTRACT_PARSE_ERROR = "CONTRACT_PARSE_ERROR"
CONTRACT_UNSUPPORTED_FORMAT = "CONTRACT_UNSUPPORTED_FORMAT"
CONTRACT_INVALID = "CONTRACT_INVALID"

# Stores
SOURCE_NOT_FOUND = "SOURCE_NOT_FOUND"
SOURCE_PARSE_ERROR = "SOURCE_PARSE_ERROR"
SOURCE_PATH_TRAVERSAL = "SOURCE_PATH_TRAVERSAL"
SOURCE_UNREADABLE = "SOURCE_UNREADABLE"

# Configuração da engine
SETTINGS_INVALID = "SETTINGS_INVALID"


# ordem importa: subclasses mais específicas primeiro
_CATALOG = (
    (ContractFileNotFoundError, CONTRACT_NOT_FOUND, "Verifique o caminho do contrato informado."),
    (UnsupportedContractFormatError, CONTRACT_UNSUPPORTED_FORMAT, "Use um contrato .json, .yaml ou .yml."),
    (ContractParseError, CONTRACT_PARSE_ERROR, "Corrija a sintaxe JSON/YAML do contrato."),
    (SourceFileNotFoundError, SOURCE_NOT_FOUND, "Crie o arquivo ou marque o store como `optional` no contrato."),
    (SourcePathTraversalError, SOURCE_PATH_TRAVERSAL, "Declare caminhos de store relativos ao diretório do contrato."),
    (SourceParseError, SOURCE_PARSE_ERROR, "Corrija o conteúdo do arquivo de store indicado."),
    (SourceError, SOURCE_UNREADABLE, "Verifique as permissões de leitura do arquivo de store."),
    (ConfigError, SETTINGS_INVALID, "Revise o arquivo local de configurações da engine."),
)


def input_error_payload(exc: ConfiguardInputError) -> ErrorPayload:
    """Converte um erro de entrada tipado no payload canônico."""
    if not isinstance(exc, ConfiguardInputError):
        raise TypeError(f"not an input error: {type(exc).__name__}")

    error_type = CONTRACT_INVALID
    hint: Optional[str] = "Corrija o contrato; a carga falha na primeira violação encontrada."
    for cls, code, cls_hint in _CATALOG:
        if isinstance(exc, cls):
            error_type, hint = code, cls_hint
            break

    details = dict(exc.details)
    details.setdefault("exception_class", exc.__class__.__name__)
    return ErrorPayload(type=error_type, message=exc.message, details=details, hint=hint)
