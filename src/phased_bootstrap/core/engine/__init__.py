"""
Engine do Phased Bootstrap.

Este pacote contém o motor genérico de fases, que orquestra handlers
opacos sem conhecer o significado de nenhuma fase.

Componentes principais:
    - validation → ValidationCache: memoização sequencial dos validates
    - driver     → BootstrapDriver: validação + execução fase a fase
    - strategies → bootstrap_to_phase (estrito) e bootstrap_max (melhor esforço)
    - session    → BootstrapSession: fachada pública da sessão

Invariantes:
    - `current_phase` nunca diminui
    - Cada execute roda no máximo uma vez por sessão
    - Cada validate roda no máximo uma vez por sessão
    - Erros de validação da fase i bloqueiam a fase i e todas as seguintes

Limites explícitos:
    - Não insere, pula ou reordena fases em runtime
    - Não aplica timeout nem cancelamento a handlers
    - Não possui locking; uso single-threaded
"""

from .validation import ValidationCache
from .driver import BootstrapDriver
from .strategies import bootstrap_max, bootstrap_to_phase
from .session import BootstrapSession

__all__ = [
    "ValidationCache",
    "BootstrapDriver",
    "bootstrap_max",
    "bootstrap_to_phase",
    "BootstrapSession",
]
