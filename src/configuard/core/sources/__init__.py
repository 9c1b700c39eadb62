"""Configuard — stores de configuração (appsettings, dotenv, envSnapshot).

Carrega o conteúdo bruto de cada store por ambiente e o achata em mapas
caminho→valor, cada valor marcado com sua proveniência.
"""

from .dotenv import infer_scalar, parse_dotenv  # noqa: F401
from .errors import (  # noqa: F401
    SourceError,
    SourceFileNotFoundError,
    SourceParseError,
    SourcePathTraversalError,
)
from .flatten import iter_leaves, parse_json_store  # noqa: F401
from .models import ResolvedValue, SourceMaps  # noqa: F401
from .resolver import resolve_sources, resolve_within  # noqa: F401
