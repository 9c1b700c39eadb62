"""Resolução dos stores de um ambiente (proveniência incluída).

Para cada store configurado no contrato:
  - appsettings: arquivo base (obrigatório) + overlay do ambiente (sempre opcional)
  - dotenv: base + overlay; ambos obrigatórios, exceto com `optional: true`
  - envSnapshot: um único arquivo por ambiente; obrigatório, exceto com `optional: true`

O overlay sobrescreve entradas de mesmo caminho vindas do base.

Política de falhas:
  - arquivo obrigatório ausente → `SourceFileNotFoundError`
  - arquivo opcional ausente ou ilegível → store sem contribuição (silencioso)
  - conteúdo malformado → `SourceParseError`, independente de `optional`
  - caminho fora do diretório do contrato → `SourcePathTraversalError`

Cada chamada reconstrói os mapas do zero; nada é compartilhado entre ambientes.
"""

from __future__ import annotations

from pathlib import Path
from typing import Callable, Optional, Union

from configuard.core.context import STEP_SOURCES_RESOLVE, CommandContext, log_event
from configuard.core.contract.models import ContractSources, SourceKind

from .dotenv import parse_dotenv_store
from .errors import SourceError, SourceFileNotFoundError, SourceParseError, SourcePathTraversalError
from .flatten import parse_json_store
from .models import SourceMap, SourceMaps


StoreParser = Callable[[str, str], SourceMap]


def resolve_within(base_dir: Union[str, Path], relative: str) -> Path:
    """Junta `relative` ao diretório base e garante que o resultado não escapa dele."""
    base = Path(base_dir).resolve()
    candidate = (base / relative).resolve()
    if candidate != base and base not in candidate.parents:
        raise SourcePathTraversalError(
            f"Source path '{relative}' resolves outside the contract directory: {candidate}",
            details={"path": relative, "base_dir": str(base)},
        )
    return candidate


def _json_parser(kind: SourceKind) -> StoreParser:
    return lambda text, source_file: parse_json_store(text, source_file, kind)


def _load_store_file(
    path: Path,
    *,
    kind: SourceKind,
    parser: StoreParser,
    optional: bool,
    ctx: Optional[CommandContext],
    environment: str,
) -> SourceMap:
    if not path.is_file():
        if optional:
            log_event(
                ctx,
                step_id=STEP_SOURCES_RESOLVE,
                level="DEBUG",
                message="optional source file not found; skipped",
                environment=environment,
                source=kind.value,
                path=str(path),
            )
            return {}
        raise SourceFileNotFoundError(
            f"Required {kind.value} source file not found: {path}",
            details={"path": str(path), "source": kind.value, "environment": environment},
        )

    try:
        text = path.read_text(encoding="utf-8")
    except UnicodeDecodeError as e:
        raise SourceParseError(
            f"Failed to read source file '{path}': {e}",
            details={"path": str(path), "source": kind.value},
        ) from e
    except OSError as e:
        if optional:
            log_event(
                ctx,
                step_id=STEP_SOURCES_RESOLVE,
                level="WARNING",
                message="optional source file unreadable; skipped",
                environment=environment,
                source=kind.value,
                path=str(path),
                error=str(e),
            )
            return {}
        raise SourceError(
            f"Failed to read source file '{path}': {e}",
            details={"path": str(path), "source": kind.value},
        ) from e

    values = parser(text, str(path))
    log_event(
        ctx,
        step_id=STEP_SOURCES_RESOLVE,
        level="DEBUG",
        message="source file loaded",
        environment=environment,
        source=kind.value,
        path=str(path),
        entries=len(values),
    )
    return values


def resolve_sources(
    base_dir: Union[str, Path],
    sources: ContractSources,
    environment: str,
    *,
    ctx: Optional[CommandContext] = None,
) -> SourceMaps:
    """Carrega e achata todos os stores configurados para `environment`."""
    maps = SourceMaps(environment=environment)

    def load(relative: str, kind: SourceKind, parser: StoreParser, optional: bool) -> SourceMap:
        return _load_store_file(
            resolve_within(base_dir, relative),
            kind=kind,
            parser=parser,
            optional=optional,
            ctx=ctx,
            environment=environment,
        )

    app = sources.appsettings
    app_parser = _json_parser(SourceKind.APPSETTINGS)
    maps.appsettings.update(load(app.base, SourceKind.APPSETTINGS, app_parser, False))
    maps.appsettings.update(load(app.environment_file(environment), SourceKind.APPSETTINGS, app_parser, True))

    if sources.dotenv is not None:
        dotenv = sources.dotenv
        maps.dotenv.update(load(dotenv.base, SourceKind.DOTENV, parse_dotenv_store, dotenv.optional))
        maps.dotenv.update(
            load(dotenv.environment_file(environment), SourceKind.DOTENV, parse_dotenv_store, dotenv.optional)
        )

    if sources.env_snapshot is not None:
        snapshot = sources.env_snapshot
        maps.env_snapshot.update(
            load(
                snapshot.environment_file(environment),
                SourceKind.ENV_SNAPSHOT,
                _json_parser(SourceKind.ENV_SNAPSHOT),
                snapshot.optional,
            )
        )

    log_event(
        ctx,
        step_id=STEP_SOURCES_RESOLVE,
        level="INFO",
        message="environment sources resolved",
        environment=environment,
        counts={
            SourceKind.APPSETTINGS.value: len(maps.appsettings),
            SourceKind.DOTENV.value: len(maps.dotenv),
            SourceKind.ENV_SNAPSHOT.value: len(maps.env_snapshot),
        },
    )
    return maps
