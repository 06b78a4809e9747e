# src/phased_bootstrap/core/traceability/report.py
"""
Relatório de bootstrap: snapshot forense de uma sessão.

Este módulo define a estrutura e as operações canônicas do relatório de
bootstrap, que consolida de forma serializável:
    - identidade e metadados da sessão (inclui `config_hash`)
    - estado de cada fase (validada, válida, alcançada)
    - fase corrente e marca d'água de validação
    - superfície de erros do processo
    - Event Log ordenado e warnings por fase

Princípios fundamentais:
    - O relatório é um snapshot; não observa a sessão depois de criado
    - O formato de persistência é JSON determinístico
    - O relatório é reconstruível (round-trip)

Limites explícitos:
    - Não executa bootstrap
    - Não muta o ContextStore
"""

from __future__ import annotations

import json
from dataclasses import dataclass, field
from datetime import datetime, timezone
from pathlib import Path
from typing import Any, Dict, List, Optional, Union

from phased_bootstrap.core.context.store import ContextStore
from phased_bootstrap.core.phases.table import PhaseTable


def _iso(dt: datetime) -> str:
    if dt.tzinfo is None:
        dt = dt.replace(tzinfo=timezone.utc)
    return dt.astimezone(timezone.utc).isoformat()


@dataclass
class BootstrapReport:
    """
    Snapshot serializável de uma sessão de bootstrap.

    Campos principais:
        - session: session_id, generated_at e meta da sessão
        - progress: current_phase e validated_phase
        - phases: lista ordenada de estados por fase
        - errors: superfície de erros (código → mensagem), ordenada
        - events / warnings: Event Log e warnings por fase
    """
    session: Dict[str, Any]
    progress: Dict[str, Any]
    phases: List[Dict[str, Any]] = field(default_factory=list)
    errors: Dict[str, str] = field(default_factory=dict)
    events: List[Dict[str, Any]] = field(default_factory=list)
    warnings: Dict[str, List[str]] = field(default_factory=dict)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "session": dict(self.session),
            "progress": dict(self.progress),
            "phases": [dict(p) for p in self.phases],
            "errors": dict(self.errors),
            "events": [dict(e) for e in self.events],
            "warnings": {k: list(v) for k, v in self.warnings.items()},
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "BootstrapReport":
        return cls(
            session=dict(data.get("session", {})),
            progress=dict(data.get("progress", {})),
            phases=[dict(p) for p in (data.get("phases", []) or [])],
            errors=dict(data.get("errors", {}) or {}),
            events=[dict(e) for e in (data.get("events", []) or [])],
            warnings={k: list(v) for k, v in (data.get("warnings", {}) or {}).items()},
        )

    def phase(self, index: int) -> Optional[Dict[str, Any]]:
        for entry in self.phases:
            if entry.get("index") == index:
                return entry
        return None


def build_report(
    table: PhaseTable,
    store: ContextStore,
    *,
    generated_at: Optional[datetime] = None,
) -> BootstrapReport:
    """Monta o snapshot da sessão a partir da tabela e do store."""
    state = store.state
    phases = []
    for phase in table:
        validated = phase.index in state.validation_cache
        phases.append({
            "index": phase.index,
            "name": phase.name,
            "anchor": phase.anchor,
            "validated": validated,
            "valid": state.validation_cache.get(phase.index) if validated else None,
            "reached": state.current_phase >= phase.index,
            "errors": dict(state.phase_errors.get(phase.index, {})),
        })

    return BootstrapReport(
        session={
            "session_id": store.session_id,
            "generated_at": _iso(generated_at or datetime.now(timezone.utc)),
            "meta": dict(store.meta),
        },
        progress={
            "current_phase": state.current_phase,
            "validated_phase": state.validated_phase,
            "bootstrapping": state.bootstrapping,
        },
        phases=phases,
        errors=store.errors(),
        events=[dict(e) for e in store.events],
        warnings={k: list(v) for k, v in store.warnings.items()},
    )


def save_report(report: BootstrapReport, path: Union[str, Path]) -> None:
    """Persiste o relatório em JSON determinístico (UTF-8, indentado)."""
    p = Path(path)
    p.parent.mkdir(parents=True, exist_ok=True)
    payload = json.dumps(report.to_dict(), ensure_ascii=False, indent=2, sort_keys=True, default=str)
    p.write_text(payload + "\n", encoding="utf-8")


def load_report(path: Union[str, Path]) -> BootstrapReport:
    p = Path(path)
    data = json.loads(p.read_text(encoding="utf-8"))
    return BootstrapReport.from_dict(data)
