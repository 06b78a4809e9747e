"""
# Phases: Phased Bootstrap

Este pacote define os **contratos canônicos** das fases de bootstrap.

## Componentes

- **types**
  - `BOOTSTRAP_NONE`, `BOOTSTRAP_MAX`: sentinelas de fase
  - `ValidationOutcome`: resultado imutável de um validate

- **phase**
  - `PhaseHandler` (Protocol): colaborador que fornece validate/execute
  - `Phase`: descritor imutável de fase

- **table**
  - `PhaseTable`: tabela ordenada, única por índice, com visão de âncoras

## Invariantes

- A tabela é definida uma vez na configuração e nunca mutada
- Capacidades são resolvidas na configuração, não por nome em runtime
"""

from .types import BOOTSTRAP_MAX, BOOTSTRAP_NONE, ValidationOutcome, normalize_outcome
from .phase import Phase, PhaseHandler
from .table import DuplicatePhaseIndexError, PhaseTable, UnknownPhaseError

__all__ = [
    "BOOTSTRAP_MAX",
    "BOOTSTRAP_NONE",
    "ValidationOutcome",
    "normalize_outcome",
    "Phase",
    "PhaseHandler",
    "PhaseTable",
    "DuplicatePhaseIndexError",
    "UnknownPhaseError",
]
