# tests/conftest.py
"""
Fixtures compartilhados para testes do Phased Bootstrap.

Este módulo define fixtures reutilizáveis que fornecem:
- handlers de fase com contadores de chamadas (validate/execute)
- uma fábrica de sessões com hook de descoberta gravador
- YAMLs de configuração semelhantes ao uso real

Decisões arquiteturais:
    - Cada teste constrói sua própria sessão (nenhum estado compartilhado)
    - Handlers dummy utilizam duck typing em vez de herança
    - Imports do core são lazy para melhorar a clareza de erros

Invariantes:
    - Nenhuma fixture executa bootstrap
    - Nenhuma fixture realiza I/O
"""

import pytest


@pytest.fixture
def RecordingPhase():
    """
    Fixture factory que fornece um handler de fase com contadores.

    O handler retornado:
    - conta quantas vezes `validate` e `execute` foram chamados
    - permite trocar `ok` entre chamadas (condição externa mutável)
    - publica `values` e reporta `errors` via ValidationOutcome
    - pode ser convertido em `Phase` via `as_phase()`

    Returns:
        type: Classe _RecordingPhase instanciável pelos testes.
    """
    from phased_bootstrap.core.phases.phase import Phase
    from phased_bootstrap.core.phases.types import ValidationOutcome

    class _RecordingPhase:
        def __init__(
            self,
            index,
            name=None,
            *,
            ok=True,
            errors=None,
            values=None,
            with_validate=True,
            with_execute=True,
            anchor=False,
            on_execute=None,
        ):
            self.index = index
            self.name = name or f"phase{index}"
            self.ok = ok
            self.errors = dict(errors or {})
            self.values = dict(values or {})
            self.with_validate = with_validate
            self.with_execute = with_execute
            self.anchor = anchor
            self.on_execute = on_execute
            self.validate_calls = 0
            self.execute_calls = 0

        def validate(self):
            self.validate_calls += 1
            return ValidationOutcome(ok=self.ok, errors=dict(self.errors), values=dict(self.values))

        def execute(self):
            self.execute_calls += 1
            if self.on_execute is not None:
                self.on_execute()

        def as_phase(self):
            return Phase(
                index=self.index,
                name=self.name,
                validate=self.validate if self.with_validate else None,
                execute=self.execute if self.with_execute else None,
                anchor=self.anchor,
            )

    return _RecordingPhase


@pytest.fixture
def discovery_calls():
    """Lista onde o hook gravador acumula `(phase_index, ceiling)`."""
    return []


@pytest.fixture
def make_session(discovery_calls):
    """
    Fixture factory que monta uma BootstrapSession a partir de handlers gravadores.

    Args (da função retornada):
        handlers: lista de _RecordingPhase
        hook: hook de descoberta opcional; por padrão grava em `discovery_calls`

    Returns:
        Callable[..., BootstrapSession]
    """
    from phased_bootstrap.core.engine.session import BootstrapSession
    from phased_bootstrap.core.phases.table import PhaseTable

    def _record(phase_index, ceiling):
        discovery_calls.append((phase_index, ceiling))

    def _make(handlers, *, hook=_record, max_phase=None):
        table = PhaseTable([h.as_phase() for h in handlers])
        return BootstrapSession(table, on_phase_advanced=hook, max_phase=max_phase)

    return _make


@pytest.fixture
def project_like_bootstrap_yaml() -> str:
    """
    YAML de defaults semelhante ao uso real: três fases resolvidas por referência.

    Os handlers vivem em `tests/fixtures/phases/sample_phases.py`.
    """
    return """
bootstrap:
  max_phase: null
  phases:
    - index: 0
      name: runtime
      handler: "tests.fixtures.phases.sample_phases:make_runtime_phase"
      anchor: true
    - index: 1
      name: root
      handler: "tests.fixtures.phases.sample_phases:make_root_phase"
    - index: 2
      name: site
      handler: "tests.fixtures.phases.sample_phases:make_site_phase"
      anchor: true
engine:
  log_level: INFO
"""


@pytest.fixture
def project_like_bootstrap_local_yaml() -> str:
    """Override local: limita o melhor esforço à fase 1."""
    return """
bootstrap:
  max_phase: 1
"""
