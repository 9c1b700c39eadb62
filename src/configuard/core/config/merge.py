# src/configuard/core/config/merge.py
"""
Deep-merge canônico das configurações da engine.

Política de merge (v1):
    - dict → merge recursivo por chave
    - list → sobrescrita total (sem merge elemento a elemento)
    - escalar → sobrescrita direta
    - conflito de tipos → erro estrutural explícito

Invariantes:
    - Nenhum input é mutado
    - A mesma entrada sempre produz a mesma saída
    - Conflitos estruturais interrompem o merge

Observação: o merge de overlay dos stores (appsettings, dotenv) NÃO usa este
módulo; stores são achatados em mapas caminho→valor e sobrescritos por caminho.
"""

from copy import deepcopy
from typing import Any, Dict

from .errors import ConfigTypeConflictError


def deep_merge(base: Dict[str, Any], override: Dict[str, Any], *, _trail: str = "") -> Dict[str, Any]:
    """
    Mescla `override` sobre `base` e devolve um novo dicionário.

    Args:
        base (Dict[str, Any]): Configuração base (DEFAULT_SETTINGS).
        override (Dict[str, Any]): Overrides explícitos (arquivo local).

    Returns:
        Dict[str, Any]: Nova configuração resultante.

    Raises:
        ConfigTypeConflictError: Se uma chave mudar de tipo entre base e override.
    """
    if not isinstance(base, dict) or not isinstance(override, dict):
        raise ConfigTypeConflictError(
            f"deep-merge requires mappings at '{_trail or '$'}', got "
            f"{type(base).__name__} vs {type(override).__name__}"
        )

    result: Dict[str, Any] = deepcopy(base)

    for key, incoming in override.items():
        trail = f"{_trail}.{key}" if _trail else str(key)
        if key not in result:
            result[key] = deepcopy(incoming)
            continue

        current = result[key]

        if isinstance(current, dict) and isinstance(incoming, dict):
            result[key] = deep_merge(current, incoming, _trail=trail)
            continue

        if isinstance(incoming, list):
            result[key] = deepcopy(incoming)
            continue

        # None no override limpa o valor; a validação de settings decide se é aceitável
        if incoming is not None and type(current) is not type(incoming):
            raise ConfigTypeConflictError(
                f"type conflict at '{trail}': {type(current).__name__} vs {type(incoming).__name__}",
                details={"key": trail},
            )

        result[key] = deepcopy(incoming)

    return result
