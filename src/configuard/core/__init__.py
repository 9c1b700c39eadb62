# src/configuard/core/__init__.py
"""
Core do Configuard.

Este pacote contém a engine de resolução e avaliação de políticas do
Configuard, independente de CLI e de formatação de saída.

O core é projetado para ser:
    - determinístico
    - síncrono e single-threaded por comando
    - testável de forma isolada
    - orientado a um contrato declarativo explícito

Componentes principais (folhas primeiro):
    - contract → modelo, normalização de caminhos e loader fail-fast
    - sources  → stores achatados com proveniência (appsettings, dotenv, envSnapshot)
    - policy   → candidatos/precedência, tipo/restrições, validate, diff, explain
    - config   → configurações da engine (verbosidade, redação)
    - context  → log estruturado de eventos por comando

Limites explícitos:
    - Não faz parsing de argumentos nem renderiza texto/JSON/SARIF
    - Não persiste histórico de resolução
    - Não acessa stores remotos
"""
