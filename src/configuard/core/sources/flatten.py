"""Achatamento de documentos JSON em mapas caminho→valor.

Regras:
  - objetos não são folhas: cada propriedade desce um nível, unida por `:`
  - arrays e escalares (inclusive null) são folhas
  - a raiz deve ser um objeto
"""

from __future__ import annotations

import json
from typing import Any, Iterator, Tuple

from configuard.core.contract.models import SourceKind
from configuard.core.contract.paths import PATH_DELIMITER, identifier_key

from .errors import SourceParseError
from .models import ResolvedValue, SourceMap


def iter_leaves(node: Any, prefix: str = "") -> Iterator[Tuple[str, Any]]:
    """Percorre `node` em ordem de declaração devolvendo (caminho, folha)."""
    if not isinstance(node, dict):
        if prefix:
            yield prefix, node
        return

    for name, child in node.items():
        current = f"{prefix}{PATH_DELIMITER}{name}" if prefix else str(name)
        if isinstance(child, dict):
            yield from iter_leaves(child, current)
        else:
            yield current, child


def _reject_constant(token: str) -> Any:
    raise ValueError(f"invalid JSON constant: {token}")


def parse_json_store(text: str, source_file: str, kind: SourceKind) -> SourceMap:
    """Interpreta e achata o conteúdo de um store JSON.

    Raises:
        SourceParseError: JSON malformado ou raiz que não é objeto.
    """
    try:
        document = json.loads(text, parse_constant=_reject_constant)
    except ValueError as e:
        raise SourceParseError(
            f"Failed to read source file '{source_file}': {e}",
            details={"path": source_file, "source": kind.value},
        ) from e

    if not isinstance(document, dict):
        raise SourceParseError(
            f"Failed to read source file '{source_file}': root must be a JSON object.",
            details={"path": source_file, "source": kind.value},
        )

    values: SourceMap = {}
    for path, leaf in iter_leaves(document):
        values[identifier_key(path)] = ResolvedValue(value=leaf, source_kind=kind, source_file=source_file, path=path)
    return values
