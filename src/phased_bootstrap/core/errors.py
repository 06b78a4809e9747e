"""
Phased Bootstrap: Canonical Error Structures (v1)

Este módulo define o padrão canônico de erros do bootstrap em fases.
Erros de bootstrap fazem parte do contrato operacional do sistema:
o chamador inspeciona a superfície de erros para decidir *por que*
uma fase não foi alcançada.

Erros devem ser:

- explícitos
- serializáveis
- identificados por código estável

A superfície de erros do processo é um mapa ordenado `código -> mensagem`.
O payload abaixo carrega, além disso, detalhes estruturados para o Event Log.
"""

from __future__ import annotations

from dataclasses import dataclass, asdict, field
from typing import Any, Dict, Optional


# ---------------------------------------------------------------------------
# Payload canônico
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class BootstrapErrorPayload:
    """
    Payload canônico de erro do bootstrap.

    Campos:
    - type: código estável do erro (chave na superfície de erros)
    - message: mensagem curta e humana (valor na superfície de erros)
    - details: dados estruturados relevantes para diagnóstico
    - hint: ação sugerida ao operador
    """

    type: str
    message: str
    details: Dict[str, Any] = field(default_factory=dict)
    hint: Optional[str] = None

    def to_dict(self) -> Dict[str, Any]:
        """Retorna representação serializável do erro."""
        return asdict(self)


# ---------------------------------------------------------------------------
# Catálogo canônico de tipos de erro (v1)
# ---------------------------------------------------------------------------

# Validação
PHASE_VALIDATION_FAILED = "PHASE_VALIDATION_FAILED"
PHASE_VALIDATION_EXCEPTION = "PHASE_VALIDATION_EXCEPTION"

# Execução
PHASE_EXECUTION_ERROR = "PHASE_EXECUTION_ERROR"
PHASE_BLOCKED_BY_PRIOR_ERROR = "PHASE_BLOCKED_BY_PRIOR_ERROR"

# Colaboradores externos
DISCOVERY_HOOK_ERROR = "DISCOVERY_HOOK_ERROR"


# ---------------------------------------------------------------------------
# Helpers de fábrica
# ---------------------------------------------------------------------------

def phase_validation_failed(
    *,
    phase_index: int,
    phase_name: str,
    hint: str = "Verifique as pré-condições da fase antes de solicitar o bootstrap novamente.",
) -> BootstrapErrorPayload:
    return BootstrapErrorPayload(
        type=PHASE_VALIDATION_FAILED,
        message=f"Validação da fase '{phase_name}' falhou",
        details={
            "phase_index": phase_index,
            "phase_name": phase_name,
        },
        hint=hint,
    )


def phase_validation_exception(
    *,
    phase_index: int,
    phase_name: str,
    exc_type: str,
    exc_message: str,
    hint: str = "O validate da fase levantou exceção; corrija o handler ou o ambiente.",
) -> BootstrapErrorPayload:
    return BootstrapErrorPayload(
        type=PHASE_VALIDATION_EXCEPTION,
        message=f"Validação da fase '{phase_name}' levantou {exc_type}: {exc_message}",
        details={
            "phase_index": phase_index,
            "phase_name": phase_name,
            "exc_type": exc_type,
            "exc_message": exc_message,
        },
        hint=hint,
    )


def phase_execution_error(
    *,
    phase_index: int,
    phase_name: str,
    exc_type: str,
    exc_message: str,
    hint: str = "A fase não é reexecutada automaticamente. Reinicie a sessão de bootstrap após corrigir a causa.",
) -> BootstrapErrorPayload:
    return BootstrapErrorPayload(
        type=PHASE_EXECUTION_ERROR,
        message=f"Falha ao executar a fase '{phase_name}': {exc_message or exc_type}",
        details={
            "phase_index": phase_index,
            "phase_name": phase_name,
            "exc_type": exc_type,
            "exc_message": exc_message,
        },
        hint=hint,
    )


def phase_blocked_by_prior_error(
    *,
    phase_index: int,
    phase_name: str,
    prior_errors: Dict[str, str],
) -> BootstrapErrorPayload:
    return BootstrapErrorPayload(
        type=PHASE_BLOCKED_BY_PRIOR_ERROR,
        message=f"Fase '{phase_name}' não executada: erro anterior registrado",
        details={
            "phase_index": phase_index,
            "phase_name": phase_name,
            "prior_errors": list(prior_errors),
        },
        hint="Resolva os erros já presentes na superfície de erros.",
    )


def discovery_hook_error(
    *,
    phase_index: int,
    exc_type: str,
    exc_message: str,
) -> BootstrapErrorPayload:
    return BootstrapErrorPayload(
        type=DISCOVERY_HOOK_ERROR,
        message=f"Hook de descoberta falhou após a fase {phase_index}",
        details={
            "phase_index": phase_index,
            "exc_type": exc_type,
            "exc_message": exc_message,
        },
        hint=None,
    )
