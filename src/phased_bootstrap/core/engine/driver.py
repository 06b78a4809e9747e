# src/phased_bootstrap/core/engine/driver.py
"""
Driver de bootstrap do Phased Bootstrap.

O driver caminha pela tabela de fases a partir da menor fase ainda não
consumida, validando e executando cada fase em ordem, até a fase
solicitada ou até a primeira falha de validação.

Para cada fase no cursor:
    1. valida via ValidationCache (resultado memoizado)
    2. consome a fase do cursor, com ou sem sucesso
    3. falha de validação → copia os erros acumulados para a superfície
       de erros do processo e para o laço
    4. erro já presente na superfície → execute e hook são pulados
       (PriorErrorBlock, registrado como warning)
    5. caso contrário executa a fase (quando possui execute) e, se o
       execute concluiu sem exceção, notifica `on_phase_advanced(index, ceiling)`
    6. atualiza `current_phase`

Ajustes:
- Exceções no execute viram PHASE_EXECUTION_ERROR na superfície; a fase
  fica consumida e nunca é reexecutada, e as fases seguintes do mesmo
  laço caem no bloqueio por erro prévio.
- Falhas do hook de descoberta são registradas como warning e nunca
  viram erro de bootstrap.
- `bootstrapping` é restaurado em qualquer caminho de saída.
"""

from __future__ import annotations

from contextlib import contextmanager
from typing import Callable, Iterator, Optional

from phased_bootstrap.core.context.store import ContextStore
from phased_bootstrap.core.errors import (
    PHASE_EXECUTION_ERROR,
    BootstrapErrorPayload,
    discovery_hook_error,
    phase_blocked_by_prior_error,
    phase_execution_error,
)
from phased_bootstrap.core.exceptions import BootstrapException
from phased_bootstrap.core.phases.phase import Phase
from phased_bootstrap.core.phases.table import PhaseTable

from .validation import ValidationCache


PhaseAdvancedHook = Callable[[int, Optional[int]], None]


class BootstrapDriver:
    """Driver canônico: validação memoizada + execução sequencial de fases."""

    def __init__(
        self,
        *,
        table: PhaseTable,
        store: ContextStore,
        on_phase_advanced: Optional[PhaseAdvancedHook] = None,
    ):
        self.table = table
        self.store = store
        self.cache = ValidationCache(table=table, store=store)
        self.on_phase_advanced = on_phase_advanced

    # ------------------------------------------------------------------
    # Escopo de invocação
    # ------------------------------------------------------------------
    @contextmanager
    def bootstrapping(self) -> Iterator[None]:
        """Marca uma invocação do driver; aninhamentos compartilham o escopo externo."""
        state = self.store.state
        if state.depth == 0:
            state.reset_pending = True
            state.bootstrapping = True
        state.depth += 1
        try:
            yield
        finally:
            state.depth -= 1
            if state.depth == 0:
                state.bootstrapping = False
                state.reset_pending = False

    def validate(self, phase_index: int) -> bool:
        return self.cache.validate(phase_index)

    # ------------------------------------------------------------------
    # Execução
    # ------------------------------------------------------------------
    def run_to(self, phase_index: int, ceiling: Optional[int] = None) -> bool:
        state = self.store.state
        if phase_index <= state.current_phase:
            self.store.log(
                phase="-",
                level="DEBUG",
                message="already reached; no-op",
                phase_index=phase_index,
                current_phase=state.current_phase,
            )
            return True

        with self.bootstrapping():
            while state.next_run_position < len(self.table):
                phase = self.table.at(state.next_run_position)
                if phase.index > phase_index:
                    break

                valid = self.cache.validate(phase.index)
                state.next_run_position += 1

                if not valid:
                    self._surface_validation_errors(phase)
                    break

                if self.store.has_error():
                    self._report_blocked(phase)
                elif phase.execute is not None and self._execute(phase):
                    self._notify(phase, ceiling)

                state.advance_current(phase.index)

        return not self.store.has_error()

    def _execute(self, phase: Phase) -> bool:
        self.store.log(
            phase=phase.name,
            level="INFO",
            message="bootstrap phase: execute",
            phase_index=phase.index,
        )
        try:
            phase.execute()
        except BootstrapException as exc:
            error = BootstrapErrorPayload(
                type=exc.code or PHASE_EXECUTION_ERROR,
                message=exc.message,
                details={"phase_index": phase.index, "phase_name": phase.name, **dict(exc.details)},
                hint=exc.hint,
            )
            self.store.record_error(error, phase=phase.name)
            return False
        except Exception as exc:
            error = phase_execution_error(
                phase_index=phase.index,
                phase_name=phase.name,
                exc_type=exc.__class__.__name__,
                exc_message=str(exc),
            )
            self.store.record_error(error, phase=phase.name)
            return False
        return True

    def _notify(self, phase: Phase, ceiling: Optional[int]) -> None:
        if self.on_phase_advanced is None:
            return
        try:
            self.on_phase_advanced(phase.index, ceiling)
        except Exception as exc:
            error = discovery_hook_error(
                phase_index=phase.index,
                exc_type=exc.__class__.__name__,
                exc_message=str(exc),
            )
            self.store.add_warning(phase=phase.name, message=error.message)
            self.store.log(phase=phase.name, level="WARNING", message=error.message, error=error.to_dict())

    def _surface_validation_errors(self, phase: Phase) -> None:
        errors = dict(self.store.bootstrap_errors)
        errors.update(self.cache.errors_for(phase.index))
        for code, message in errors.items():
            self.store.set_error(code, message)
        self.store.log(
            phase=phase.name,
            level="ERROR",
            message="bootstrap stopped: validation failed",
            phase_index=phase.index,
            errors=list(errors),
        )

    def _report_blocked(self, phase: Phase) -> None:
        blocked = phase_blocked_by_prior_error(
            phase_index=phase.index,
            phase_name=phase.name,
            prior_errors=self.store.errors(),
        )
        self.store.add_warning(phase=phase.name, message=blocked.message)
        self.store.log(phase=phase.name, level="WARNING", message=blocked.message, error=blocked.to_dict())
