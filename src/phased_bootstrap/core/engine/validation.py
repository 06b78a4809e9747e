# src/phased_bootstrap/core/engine/validation.py
"""
Cache de validação de fases.

Este módulo memoiza o resultado de validação de cada fase exatamente uma
vez por sessão de bootstrap. Validar a fase *i* exige que todas as fases
anteriores já tenham sido validadas; por isso o cache caminha a partir da
marca d'água (`next_validate_position`) até a fase solicitada, invocando
cada validate intermediário uma única vez.

Política de validação (v1):
    - resultado em cache → retorno imediato, sem invocar o handler
    - fase sem validate → vacuamente válida (True em cache)
    - validate que levanta exceção → falha registrada com código estável
    - falha sem código de erro → PHASE_VALIDATION_FAILED com o nome da fase
    - namespaces de erros e values zerados uma vez por invocação do driver,
      antes da primeira caminhada sobre fases ainda não validadas

Invariantes:
    - Um resultado em cache nunca é recalculado na mesma sessão
    - A marca d'água só avança
    - A caminhada continua até a fase solicitada mesmo após uma falha

Limites explícitos:
    - Não executa fases
    - Não copia erros para a superfície do processo (decisão do driver)
    - Não faz retry de validações que falharam
"""

from __future__ import annotations

from typing import Dict

from phased_bootstrap.core.context.store import ContextStore
from phased_bootstrap.core.errors import (
    PHASE_VALIDATION_FAILED,
    phase_validation_exception,
    phase_validation_failed,
)
from phased_bootstrap.core.exceptions import BootstrapException
from phased_bootstrap.core.phases.phase import Phase
from phased_bootstrap.core.phases.table import PhaseTable
from phased_bootstrap.core.phases.types import ValidationOutcome, normalize_outcome


class ValidationCache:
    """Memoização sequencial dos validates da tabela de fases."""

    def __init__(self, *, table: PhaseTable, store: ContextStore):
        self.table = table
        self.store = store

    def errors_for(self, phase_index: int) -> Dict[str, str]:
        return dict(self.store.state.phase_errors.get(phase_index, {}))

    def validate(self, phase_index: int) -> bool:
        state = self.store.state
        if phase_index in state.validation_cache:
            return state.validation_cache[phase_index]

        target = self.table.position(phase_index)

        if state.reset_pending or state.depth == 0:
            self.store.reset_validation_namespaces()
            state.reset_pending = False

        while state.next_validate_position <= target:
            phase = self.table.at(state.next_validate_position)
            ok = self._validate_phase(phase)
            state.validation_cache[phase.index] = ok
            state.advance_validated(phase.index)
            state.next_validate_position += 1

        return state.validation_cache[phase_index]

    def _validate_phase(self, phase: Phase) -> bool:
        if phase.validate is None:
            self.store.log(phase=phase.name, level="DEBUG", message="no validate; vacuously valid")
            return True

        namespace_errors = self.store.bootstrap_errors
        before = set(namespace_errors)

        outcome = self._invoke(phase)

        # erros registrados pelo handler via bootstrap_error() durante o validate
        raised_in_namespace = {
            code: msg for code, msg in namespace_errors.items() if code not in before
        }
        errors: Dict[str, str] = dict(raised_in_namespace)
        errors.update(outcome.errors)

        ok = outcome.ok and not raised_in_namespace
        if not ok and not errors:
            default = phase_validation_failed(phase_index=phase.index, phase_name=phase.name)
            errors[default.type] = default.message

        self.store.bootstrap_values.update(outcome.values)
        namespace_errors.update(errors)
        if errors:
            self.store.state.phase_errors[phase.index] = errors

        self.store.log(
            phase=phase.name,
            level="DEBUG" if ok else "WARNING",
            message="validated" if ok else "validation failed",
            phase_index=phase.index,
            ok=ok,
            errors=list(errors),
        )
        return ok

    def _invoke(self, phase: Phase) -> ValidationOutcome:
        try:
            return normalize_outcome(phase.validate())
        except BootstrapException as exc:
            return ValidationOutcome(
                ok=False,
                errors={exc.code or PHASE_VALIDATION_FAILED: exc.message},
            )
        except Exception as exc:
            payload = phase_validation_exception(
                phase_index=phase.index,
                phase_name=phase.name,
                exc_type=exc.__class__.__name__,
                exc_message=str(exc),
            )
            return ValidationOutcome(ok=False, errors={payload.type: payload.message})
