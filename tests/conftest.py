# tests/conftest.py
"""
Fixtures compartilhados para testes do Configuard.

Este módulo define fixtures reutilizáveis que fornecem:
- um diretório de trabalho isolado (contrato + stores) sob `tmp_path`
- um contrato v1 mínimo e válido, como dicionário mutável por teste
- contexto de comando determinístico (CommandContext)

Decisões arquiteturais:
    - Cada teste recebe seu próprio diretório; nada é compartilhado
    - O contrato é fornecido como dict e escrito em disco apenas quando
      o teste pede, para que o loader real seja sempre exercitado
    - Imports do core são realizados de forma lazy para
      melhorar a clareza de erros durante falhas

Invariantes:
    - Nenhuma fixture lê arquivos fora de `tmp_path`
    - Nenhuma fixture contém lógica de política
    - Dados retornados são determinísticos

Limites explícitos:
    - Não substituir testes de integração das três operações
    - Não validar semântica do contrato (ver tests/core/contract)
"""

import copy
import json
from datetime import datetime, timezone
from pathlib import Path
from typing import Any, Dict

import pytest


_MINIMAL_CONTRACT: Dict[str, Any] = {
    "version": "1",
    "environments": ["staging", "production"],
    "sources": {
        "appsettings": {
            "base": "appsettings.json",
            "environmentPattern": "appsettings.{env}.json",
        },
        "dotenv": {
            "base": ".env",
            "environmentPattern": ".env.{env}",
            "optional": True,
        },
    },
    "keys": [
        {
            "path": "Api:Key",
            "type": "string",
            "requiredIn": ["staging"],
            "constraints": {"minLength": 10},
        }
    ],
}


class ContractWorkspace:
    """Diretório de contrato descartável com helpers de escrita."""

    def __init__(self, root: Path):
        self.root = root

    def write_text(self, relative: str, text: str) -> Path:
        path = self.root / relative
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(text, encoding="utf-8")
        return path

    def write_json(self, relative: str, data: Any) -> Path:
        return self.write_text(relative, json.dumps(data))

    def write_contract(self, data: Dict[str, Any], name: str = "configuard.contract.json") -> Path:
        return self.write_json(name, data)

    def load(self, data: Dict[str, Any], name: str = "configuard.contract.json"):
        from configuard.core.contract.loader import load_contract

        return load_contract(self.write_contract(data, name))


@pytest.fixture
def workspace(tmp_path) -> ContractWorkspace:
    """
    Fixture que fornece um diretório de contrato isolado.

    O diretório é a raiz de resolução dos stores: todo caminho declarado
    em `sources` é relativo a ele.

    Returns:
        ContractWorkspace: helpers de escrita sobre `tmp_path`.
    """
    return ContractWorkspace(tmp_path)


@pytest.fixture
def contract_data() -> Dict[str, Any]:
    """
    Fixture que fornece um contrato v1 mínimo e válido.

    Dois ambientes (`staging`, `production`), appsettings obrigatório e
    dotenv opcional, e uma única regra (`Api:Key`, string, obrigatória em
    staging, `minLength` 10).

    Cada teste recebe uma cópia profunda e pode alterá-la livremente.

    Returns:
        dict: Contrato v1 em forma bruta (antes do loader).
    """
    return copy.deepcopy(_MINIMAL_CONTRACT)


@pytest.fixture
def dummy_ctx():
    """
    Fixture que fornece um CommandContext determinístico para testes.

    `run_id` e `created_at` são fixos; as configurações são os defaults.

    Returns:
        CommandContext: contexto isolado, sem eventos nem warnings.
    """
    from configuard.core.context import CommandContext

    return CommandContext(
        run_id="run-test-001",
        created_at=datetime(2026, 1, 16, 0, 0, 0, tzinfo=timezone.utc),
    )
