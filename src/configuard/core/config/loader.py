# src/configuard/core/config/loader.py
"""
Loader canônico das configurações da engine do Configuard.

As configurações efetivas são resolvidas a partir de:
    - `DEFAULT_SETTINGS` (sempre presente, embutido no pacote)
    - um arquivo local de overrides (opcional)

Responsabilidades do módulo:
    - Carregar o arquivo local em YAML ou JSON
    - Validar requisitos estruturais mínimos (tipo raiz)
    - Resolver a configuração final via deep-merge determinístico
    - Materializar `EngineSettings`

Invariantes:
    - Overrides locais nunca mutam os defaults
    - Arquivo local ausente é tolerado; arquivo local inválido não
    - A mesma entrada sempre produz as mesmas configurações

Limites explícitos:
    - Não carrega o contrato (ver `configuard.core.contract.loader`)
    - Não lê stores de configuração das aplicações
"""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any, Dict, Optional, Union

import yaml  # PyYAML

from .errors import InvalidConfigRootTypeError, UnsupportedConfigFormatError
from .merge import deep_merge
from .settings import DEFAULT_SETTINGS, EngineSettings


def _load_file(path: Path) -> Dict[str, Any]:
    """
    Lê um arquivo de configuração local e valida sua estrutura básica.

    Decisões arquiteturais:
        - O formato é determinado pela extensão
        - Arquivos vazios são interpretados como dicionários vazios
        - O conteúdo raiz deve ser um dicionário

    Raises:
        UnsupportedConfigFormatError: Se o formato não for suportado.
        InvalidConfigRootTypeError: Se o conteúdo raiz não for um dicionário.
    """
    suffix = path.suffix.lower()

    if suffix in {".yaml", ".yml"}:
        with path.open("r", encoding="utf-8") as f:
            data = yaml.safe_load(f)

    elif suffix == ".json":
        with path.open("r", encoding="utf-8") as f:
            raw = f.read()
        data = json.loads(raw) if raw.strip() else None

    else:
        raise UnsupportedConfigFormatError(
            f"Unsupported settings format: {path.suffix}",
            details={"path": str(path)},
        )

    if data is None:
        data = {}

    if not isinstance(data, dict):
        raise InvalidConfigRootTypeError(
            f"settings root must be a mapping, got {type(data).__name__}",
            details={"path": str(path)},
        )

    return data


def load_settings(*, local_path: Optional[Union[str, Path]] = None) -> EngineSettings:
    """
    Carrega e resolve as configurações efetivas da engine.

    Política de resolução:
        - `DEFAULT_SETTINGS` é a base
        - O arquivo local é opcional; quando existe, tem prioridade
        - A resolução utiliza `deep_merge`

    Args:
        local_path: Caminho opcional para o arquivo de overrides locais.

    Returns:
        EngineSettings: Configurações imutáveis e validadas.

    Raises:
        UnsupportedConfigFormatError, InvalidConfigRootTypeError,
        ConfigTypeConflictError, InvalidSettingError
    """
    effective: Dict[str, Any] = DEFAULT_SETTINGS

    if local_path is not None:
        local_file = Path(local_path)
        if local_file.exists():
            effective = deep_merge(DEFAULT_SETTINGS, _load_file(local_file))

    return EngineSettings.from_dict(effective)
