# tests/test_smoke.py
"""
Testes de sanidade estrutural (smoke tests) do Configuard.

Garantem apenas que o pacote importa e expõe sua API pública. Não validam
comportamento de domínio.
"""

import configuard


def test_smoke():
    """Sentinela de integridade: pacote importável e API pública completa."""
    assert configuard.__version__
    for name in configuard.__all__:
        assert hasattr(configuard, name), name
