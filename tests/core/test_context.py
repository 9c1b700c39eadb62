# tests/core/test_context.py
"""
Testes de logging estruturado e coleta de warnings no CommandContext.

Decisões arquiteturais:
    - Logs não são tratados como strings livres, mas como eventos estruturados
    - Warnings são sinais não fatais e não interrompem execução

Invariantes:
    - A coleção de warnings é indexada por `step_id`
    - `run_id` está presente em todos os eventos de log
"""

from configuard.core.config.settings import EngineSettings
from configuard.core.context import CommandContext, log_event


def test_context_collects_warnings(dummy_ctx):
    dummy_ctx.add_warning(step_id="policy.validate", message="w1")
    dummy_ctx.add_warning(step_id="policy.validate", message="w2")
    dummy_ctx.add_warning(step_id="contract.load", message="w3")

    assert dummy_ctx.warnings == {"policy.validate": ["w1", "w2"], "contract.load": ["w3"]}


def test_context_logs_structured_events(dummy_ctx):
    """
    Verifica que eventos carregam metadados mínimos e preservam campos extras.

    Invariantes:
        - `run_id`, `step_id`, `level`, `message` e `timestamp` sempre presentes
        - Campos adicionais são preservados sem perda
    """
    dummy_ctx.log(step_id="sources.resolve", level="INFO", message="loaded", environment="staging")

    assert len(dummy_ctx.events) == 1
    event = dummy_ctx.events[0]
    assert event["run_id"] == "run-test-001"
    assert event["step_id"] == "sources.resolve"
    assert event["level"] == "INFO"
    assert event["message"] == "loaded"
    assert event["environment"] == "staging"
    assert "timestamp" in event


def test_events_for_filters_by_step(dummy_ctx):
    dummy_ctx.log(step_id="a", level="INFO", message="1")
    dummy_ctx.log(step_id="b", level="INFO", message="2")
    dummy_ctx.log(step_id="a", level="DEBUG", message="3")

    assert [e["message"] for e in dummy_ctx.events_for("a")] == ["1", "3"]


def test_log_event_without_context_is_noop():
    log_event(None, step_id="a", level="INFO", message="ignored")


def test_create_uses_defaults():
    ctx = CommandContext.create()

    assert len(ctx.run_id) == 32
    assert ctx.created_at.tzinfo is not None
    assert ctx.settings.verbosity == "normal"
    assert ctx.contract_hash is None
    assert CommandContext.create(run_id="fixed").run_id == "fixed"


def test_quiet_verbosity_keeps_only_warnings_and_errors():
    settings = EngineSettings.from_dict(
        {
            "output": {"verbosity": "quiet", "redaction_marker": "<redacted>"},
            "contract": {"default_path": "configuard.contract.json"},
        }
    )
    ctx = CommandContext.create(settings=settings, run_id="quiet")

    ctx.log(step_id="a", level="DEBUG", message="1")
    ctx.log(step_id="a", level="INFO", message="2")
    ctx.log(step_id="a", level="WARNING", message="3")
    ctx.log(step_id="a", level="ERROR", message="4")
    ctx.add_warning(step_id="a", message="w")

    assert [e["message"] for e in ctx.events] == ["3", "4"]
    assert ctx.warnings == {"a": ["w"]}
