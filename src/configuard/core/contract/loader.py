"""Loader canônico de contrato (JSON/YAML).

Notas:
- JSON é o formato canônico; YAML é aceito como alternativa.
- O formato é inferido pela extensão do arquivo.
- O diretório que contém o contrato é a raiz de todos os caminhos de store.
"""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any, Dict, Optional, Union

import yaml

from configuard.core.config.settings import default_settings
from configuard.core.context import STEP_CONTRACT_LOAD, CommandContext, log_event

from .errors import (
    ContractFileNotFoundError,
    ContractParseError,
    UnsupportedContractFormatError,
)
from .models import ContractDocument
from .schema import validate_contract_v1


PathLike = Union[str, Path]


def read_contract_document(path: PathLike) -> Dict[str, Any]:
    """Lê o documento bruto do contrato.

    Raises:
        ContractFileNotFoundError: se arquivo não existir.
        UnsupportedContractFormatError: se extensão não suportada.
        ContractParseError: se parsing falhar ou a raiz não for um mapeamento.
    """
    p = Path(path)
    if not p.is_file():
        raise ContractFileNotFoundError(f"Contract file not found: {p}", details={"path": str(p)})

    suffix = p.suffix.lower()
    if suffix not in {".json", ".yml", ".yaml"}:
        raise UnsupportedContractFormatError(
            f"Unsupported contract format: {suffix or '(none)'}",
            details={"path": str(p)},
        )

    try:
        raw = p.read_text(encoding="utf-8")
        if suffix == ".json":
            data = json.loads(raw) if raw.strip() else None
        else:
            data = yaml.safe_load(raw)
    except (OSError, UnicodeDecodeError, ValueError, yaml.YAMLError) as e:
        raise ContractParseError(f"Contract parse error: {e}", details={"path": str(p)}) from e

    if data is None:
        raise ContractParseError("Contract file is empty or invalid.", details={"path": str(p)})

    if not isinstance(data, dict):
        raise ContractParseError("Contract root must be a mapping/dict.", details={"path": str(p)})

    return data


def load_contract(path: Optional[PathLike] = None, *, ctx: Optional[CommandContext] = None) -> ContractDocument:
    """Carrega e valida o contrato (portão fail-fast).

    Sem `path`, usa `contract.default_path` das configurações (relativo ao
    diretório corrente).
    """
    if path is None:
        settings = ctx.settings if ctx is not None else default_settings()
        path = settings.default_contract_path
    data = read_contract_document(path)
    contract = validate_contract_v1(data)

    if ctx is not None:
        ctx.contract_hash = contract.contract_hash
    log_event(
        ctx,
        step_id=STEP_CONTRACT_LOAD,
        level="INFO",
        message="contract loaded and validated",
        path=str(path),
        contract_hash=contract.contract_hash,
        environments=list(contract.environments),
        keys_count=len(contract.keys),
    )
    return contract


def contract_base_directory(path: PathLike) -> Path:
    """Diretório absoluto que contém o contrato."""
    return Path(path).resolve().parent
