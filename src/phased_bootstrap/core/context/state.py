# src/phased_bootstrap/core/context/state.py
"""
Estado de bootstrap de uma sessão.

`BootstrapState` é o registro mutável, com tempo de vida do processo (ou
da sessão explícita), que guarda o progresso do bootstrap. Ele pertence
exclusivamente ao `ContextStore`; o driver e o cache de validação apenas
o leem e escrevem através do store.

Invariantes:
    - `current_phase` nunca diminui
    - `validated_phase` nunca diminui
    - um resultado em `validation_cache` nunca é recalculado
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Dict

from phased_bootstrap.core.phases.types import BOOTSTRAP_NONE


@dataclass
class BootstrapState:
    # maior índice cujo execute concluiu
    current_phase: int = BOOTSTRAP_NONE
    # maior índice cuja validação foi tentada
    validated_phase: int = BOOTSTRAP_NONE
    validation_cache: Dict[int, bool] = field(default_factory=dict)
    # erros de validação por fase, preservados para resultados em cache
    phase_errors: Dict[int, Dict[str, str]] = field(default_factory=dict)

    # posições na tabela (não índices)
    next_validate_position: int = 0
    next_run_position: int = 0

    bootstrapping: bool = False
    depth: int = 0
    reset_pending: bool = False

    def advance_current(self, index: int) -> None:
        if index > self.current_phase:
            self.current_phase = index

    def advance_validated(self, index: int) -> None:
        if index > self.validated_phase:
            self.validated_phase = index
