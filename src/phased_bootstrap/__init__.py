# src/phased_bootstrap/__init__.py
"""
Phased Bootstrap: motor de bootstrap em fases.

Um processo sai de "nada inicializado" e alcança um de vários níveis de
prontidão executando uma tabela ordenada de fases. Cada fase valida suas
pré-condições (memoizado) e então executa seus efeitos colaterais.

Princípios centrais:
    - Validação memoizada: nunca revalidar o que já foi validado
    - Dois modos de progressão: estrito (fase N ou falha) e melhor esforço
    - Fases alcançadas podem liberar trabalho novo via hook de descoberta
    - Erros estruturados acumulados, inspecionáveis após a chamada

Exemplo:

    session = BootstrapSession(PhaseTable([...]))
    if not session.to_phase(2):
        print(session.errors)
"""

from .core.engine.session import BootstrapSession
from .core.phases import (
    BOOTSTRAP_MAX,
    BOOTSTRAP_NONE,
    Phase,
    PhaseHandler,
    PhaseTable,
    ValidationOutcome,
)

__all__ = [
    "BootstrapSession",
    "BOOTSTRAP_MAX",
    "BOOTSTRAP_NONE",
    "Phase",
    "PhaseHandler",
    "PhaseTable",
    "ValidationOutcome",
]
