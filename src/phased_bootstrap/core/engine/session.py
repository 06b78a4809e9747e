# src/phased_bootstrap/core/engine/session.py
"""
Sessão de bootstrap: fachada pública do engine.

`BootstrapSession` reúne a tabela de fases, o ContextStore, o driver e as
estratégias de progressão em um único objeto passado por referência aos
colaboradores. Cada sessão é independente; testes constroem uma sessão
nova por caso.

Operações públicas:
    - to_phase / to_max  → estratégias estrita e de melhor esforço
    - validate / run_to  → acesso direto ao cache de validação e ao driver
    - phase_value        → único canal sancionado de dados entre fases
    - bootstrap_error    → registro de erro por handlers durante o validate
    - has_reached        → consulta sem disparar bootstrap
    - reset              → inicia uma sessão nova e independente
    - from_config        → constrói sessão e tabela a partir de YAML/JSON

Limites explícitos:
    - Não define o significado concreto de nenhuma fase
    - Não possui locking; uso single-threaded
"""

from __future__ import annotations

from typing import Any, Dict, Optional

from phased_bootstrap.core.config.hashing import compute_config_hash, compute_table_hash
from phased_bootstrap.core.config.loader import load_config
from phased_bootstrap.core.config.phases import build_phase_table, max_phase_from_config
from phased_bootstrap.core.context.store import ContextStore
from phased_bootstrap.core.exceptions import PhaseTableConfigurationError
from phased_bootstrap.core.phases.table import PhaseTable
from phased_bootstrap.core.traceability.report import BootstrapReport, build_report

from .driver import BootstrapDriver, PhaseAdvancedHook
from .strategies import bootstrap_max, bootstrap_to_phase


_UNSET = object()


class BootstrapSession:
    """Fachada de uma sessão de bootstrap em fases."""

    def __init__(
        self,
        table: Optional[PhaseTable] = None,
        *,
        store: Optional[ContextStore] = None,
        on_phase_advanced: Optional[PhaseAdvancedHook] = None,
        meta: Optional[Dict[str, Any]] = None,
        max_phase: Optional[int] = None,
    ):
        self.store = store if store is not None else ContextStore()
        if meta:
            self.store.meta.update(meta)
        self.on_phase_advanced = on_phase_advanced
        self.max_phase = max_phase
        self._table: Optional[PhaseTable] = None
        self._driver: Optional[BootstrapDriver] = None
        if table is not None:
            self.configure(table)

    @classmethod
    def from_config(
        cls,
        *,
        defaults_path: str,
        local_path: Optional[str] = None,
        on_phase_advanced: Optional[PhaseAdvancedHook] = None,
        store: Optional[ContextStore] = None,
    ) -> "BootstrapSession":
        """
        Carrega a configuração, resolve os handlers e devolve a sessão pronta.

        Os factories de handler recebem a própria sessão, permitindo que
        validates publiquem valores via `phase_value`.

        Raises:
            ConfigError: Arquivo ausente, formato não suportado ou conflito de merge.
            PhaseTableConfigurationError: Seção `bootstrap` malformada.
            DuplicatePhaseIndexError: Índices de fase repetidos.
        """
        config = load_config(defaults_path=defaults_path, local_path=local_path)
        session = cls(
            store=store,
            on_phase_advanced=on_phase_advanced,
            meta={"config_hash": compute_config_hash(config)},
            max_phase=max_phase_from_config(config),
        )
        table = build_phase_table(config, session)
        session.configure(table)
        session.store.meta["table_hash"] = compute_table_hash(table)
        return session

    def configure(self, table: PhaseTable) -> None:
        if self._table is not None:
            raise PhaseTableConfigurationError(
                message="phase table is already configured for this session",
                details={"configured": repr(self._table)},
            )
        self._table = table
        self._driver = BootstrapDriver(
            table=table,
            store=self.store,
            on_phase_advanced=self.on_phase_advanced,
        )

    @property
    def table(self) -> PhaseTable:
        return self.driver.table

    @property
    def driver(self) -> BootstrapDriver:
        if self._driver is None:
            raise PhaseTableConfigurationError(
                message="bootstrap session has no phase table configured",
                details={},
            )
        return self._driver

    # -----------------------------
    # Strategies
    # -----------------------------
    def to_phase(self, target: int) -> bool:
        return bootstrap_to_phase(self.driver, target)

    def to_max(self, ceiling: Optional[int] = None) -> int:
        if ceiling is None:
            ceiling = self.max_phase
        return bootstrap_max(self.driver, ceiling)

    def validate(self, phase_index: int) -> bool:
        return self.driver.validate(phase_index)

    def run_to(self, phase_index: int) -> bool:
        return self.driver.run_to(phase_index)

    # -----------------------------
    # Phase values & errors
    # -----------------------------
    def phase_value(self, key: str, value: Any = _UNSET, default: Any = None) -> Any:
        """
        Publica e/ou lê um bootstrap value.

        Com `value` informado (inclusive None ou valores falsy), sobrescreve
        o valor armazenado e o retorna. Sem `value`, lê o valor armazenado;
        chave ausente retorna `default`.
        """
        values = self.store.bootstrap_values
        if value is not _UNSET:
            values[key] = value
        return values.get(key, default)

    def has_phase_value(self, key: str) -> bool:
        return key in self.store.bootstrap_values

    def bootstrap_error(self, code: str, message: str) -> bool:
        """Registra um erro de validação e retorna False, para uso como `return`."""
        self.store.bootstrap_errors[code] = message
        return False

    @property
    def errors(self) -> Dict[str, str]:
        return self.store.errors()

    # -----------------------------
    # Queries
    # -----------------------------
    def has_reached(self, phase_index: int) -> bool:
        return self.store.state.current_phase >= phase_index

    @property
    def current_phase(self) -> int:
        return self.store.state.current_phase

    @property
    def validated_phase(self) -> int:
        return self.store.state.validated_phase

    @property
    def is_bootstrapping(self) -> bool:
        return self.store.state.bootstrapping

    def report(self) -> BootstrapReport:
        return build_report(self.table, self.store)

    def reset(self) -> None:
        self.store.reset()
