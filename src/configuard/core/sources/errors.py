"""Erros canônicos da camada de stores (appsettings, dotenv, envSnapshot).

Todos são erros de entrada: abortam o comando inteiro, sem retry,
e nunca se misturam com resultados de política.
"""

from configuard.core.exceptions import ConfiguardInputError


class SourceError(ConfiguardInputError):
    """Erro base da resolução de stores."""


class SourceFileNotFoundError(SourceError):
    """Arquivo de um store obrigatório não encontrado."""


class SourceParseError(SourceError):
    """Conteúdo JSON ou dotenv malformado (independe de `optional`)."""


class SourcePathTraversalError(SourceError):
    """Caminho configurado resolve para fora do diretório do contrato."""
