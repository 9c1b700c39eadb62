"""Erros canônicos do domínio de Contract (Configuard).

O contrato é a entrada semântica crítica de todos os comandos.
Falhas de carregamento/validação devem produzir erros explícitos e estáveis,
e a validação de carga é um portão: a primeira violação encerra o comando.
"""

from configuard.core.exceptions import ConfiguardInputError


class ContractError(ConfiguardInputError):
    """Erro base do domínio de contrato."""


class ContractFileNotFoundError(ContractError):
    """Arquivo de contrato não existe no caminho informado."""


class UnsupportedContractFormatError(ContractError):
    """Formato de contrato não suportado (v1: JSON/YAML)."""


class ContractParseError(ContractError):
    """Falha ao parsear JSON/YAML ou raiz não é um mapeamento."""


class ContractValidationError(ContractError):
    """Contrato não é estrutural ou semanticamente válido."""
