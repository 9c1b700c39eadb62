"""Normalização de caminhos de chave e de nomes de ambiente.

`A__B` e `A:B` são grafias equivalentes do mesmo caminho. Toda comparação de
caminhos (unicidade no contrato, candidatos, lookup nos stores) passa por aqui.
"""

from __future__ import annotations

PATH_DELIMITER = ":"
ALT_PATH_DELIMITER = "__"


def normalize_path(path: str) -> str:
    """Mapeia o separador alternativo `__` para `:`. Idempotente."""
    return path.replace(ALT_PATH_DELIMITER, PATH_DELIMITER)


def identifier_key(path: str) -> str:
    """Chave de comparação: normalizada, sem espaços nas bordas, case-folded."""
    return normalize_path(path).strip().casefold()


def environment_key(environment: str) -> str:
    return environment.strip().casefold()
