"""Parser de arquivos dotenv.

Formato por linha:
  - linhas vazias e comentários (`#`) são ignorados
  - prefixo opcional `export` é removido
  - divide no primeiro `=`; chave e valor sem espaços nas bordas
  - aspas simples/duplas envolventes e casadas são removidas
  - o texto restante é inferido: bool, depois int, depois float, senão string;
    floats integrais dentro de 32 bits são emitidos como int

Uma linha de conteúdo sem `=` ou com chave vazia é malformada.
"""

from __future__ import annotations

import math
import re
from typing import Any, Dict, Optional, Tuple

from configuard.core.contract.models import SourceKind
from configuard.core.contract.paths import identifier_key, normalize_path

from .errors import SourceParseError
from .models import ResolvedValue, SourceMap


_EXPORT_RE = re.compile(r"^export\s+", re.IGNORECASE)
_INT_RE = re.compile(r"[+-]?[0-9]+\Z")
_FLOAT_RE = re.compile(r"[+-]?(?:[0-9]+\.?[0-9]*|\.[0-9]+)(?:[eE][+-]?[0-9]+)?\Z")

_INT32_MIN = -(2 ** 31)
_INT32_MAX = 2 ** 31 - 1


def infer_scalar(raw: str) -> Any:
    lowered = raw.lower()
    if lowered in ("true", "false"):
        return lowered == "true"

    if _INT_RE.match(raw):
        number = int(raw)
        if _INT32_MIN <= number <= _INT32_MAX:
            return number

    if _FLOAT_RE.match(raw):
        number_f = float(raw)
        if math.isfinite(number_f):
            # literal integral (8080.0, 1e3) vira int quando cabe em 32 bits
            if number_f.is_integer() and _INT32_MIN <= number_f <= _INT32_MAX:
                return int(number_f)
            return number_f

    return raw


def _unquote(value: str) -> str:
    if len(value) >= 2 and value[0] == value[-1] and value[0] in ("'", '"'):
        return value[1:-1]
    return value


def parse_line(line: str) -> Optional[Tuple[str, str]]:
    """Devolve (chave, valor bruto) ou None para linhas ignoráveis.

    Raises:
        ValueError: linha de conteúdo malformada.
    """
    trimmed = line.strip()
    if not trimmed or trimmed.startswith("#"):
        return None

    trimmed = _EXPORT_RE.sub("", trimmed, count=1)

    key, sep, value = trimmed.partition("=")
    key = key.strip()
    if not sep:
        raise ValueError("missing '=' separator")
    if not key:
        raise ValueError("empty key")

    return key, _unquote(value.strip())


def parse_dotenv(text: str) -> Dict[str, Any]:
    """Interpreta conteúdo dotenv em {caminho normalizado: valor inferido}.

    Chaves são comparadas sem diferenciar caixa; a última ocorrência vence.
    """
    values: Dict[str, Any] = {}
    spellings: Dict[str, str] = {}
    for number, line in enumerate(text.splitlines(), start=1):
        try:
            parsed = parse_line(line)
        except ValueError as e:
            raise ValueError(f"line {number}: {e}") from e
        if parsed is None:
            continue
        key, raw = parsed
        path = normalize_path(key)
        # chaves diferem só na caixa: a última linha vence, com a sua grafia
        previous = spellings.pop(identifier_key(path), None)
        if previous is not None:
            del values[previous]
        spellings[identifier_key(path)] = path
        values[path] = infer_scalar(raw)
    return values


def parse_dotenv_store(text: str, source_file: str) -> SourceMap:
    try:
        parsed = parse_dotenv(text)
    except ValueError as e:
        raise SourceParseError(
            f"Failed to read source file '{source_file}': {e}",
            details={"path": source_file, "source": SourceKind.DOTENV.value},
        ) from e

    return {
        identifier_key(path): ResolvedValue(value=value, source_kind=SourceKind.DOTENV, source_file=source_file, path=path)
        for path, value in parsed.items()
    }
