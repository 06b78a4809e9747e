# src/phased_bootstrap/core/config/phases.py
"""
Construção da tabela de fases a partir da configuração.

Formato da seção `bootstrap` (v1):

    bootstrap:
      max_phase: null
      phases:
        - index: 0
          name: runtime
          handler: "my_pkg.phases:make_runtime_phase"
          anchor: true

Cada `handler` é uma referência `módulo:atributo` resolvida com importlib
no momento da configuração. O atributo é um factory chamado com a sessão
de bootstrap e que retorna um objeto com `validate()` e/ou `execute()`.

Invariantes:
    - Referências são resolvidas uma única vez, antes de qualquer bootstrap
    - Qualquer entrada malformada invalida a configuração inteira

Limites explícitos:
    - Não valida nem executa fases
    - Não carrega arquivos (ver `config.loader`)
"""

from __future__ import annotations

import importlib
from typing import Any, Callable, Dict, List, Optional

from phased_bootstrap.core.exceptions import PhaseTableConfigurationError
from phased_bootstrap.core.phases.phase import Phase
from phased_bootstrap.core.phases.table import PhaseTable


_REQUIRED_KEYS = ("index", "name", "handler")


def _bootstrap_section(config: Dict[str, Any]) -> Dict[str, Any]:
    section = (config or {}).get("bootstrap", {}) or {}
    if not isinstance(section, dict):
        raise PhaseTableConfigurationError(
            message="config 'bootstrap' section must be a mapping",
            details={"received": type(section).__name__},
        )
    return section


def resolve_reference(reference: str) -> Callable[..., Any]:
    """
    Resolve uma referência `pacote.modulo:atributo[.sub]` para um callable.

    Raises:
        PhaseTableConfigurationError: Referência malformada, módulo ou
            atributo inexistente, ou alvo não chamável.
    """
    if not isinstance(reference, str) or ":" not in reference:
        raise PhaseTableConfigurationError(
            message=f"handler reference must look like 'module:attribute', got {reference!r}",
            details={"reference": reference},
        )

    module_name, _, attr_path = reference.partition(":")
    try:
        target: Any = importlib.import_module(module_name)
    except ImportError as exc:
        raise PhaseTableConfigurationError(
            message=f"cannot import handler module '{module_name}'",
            details={"reference": reference, "exc_message": str(exc)},
        ) from exc

    for part in attr_path.split("."):
        if not hasattr(target, part):
            raise PhaseTableConfigurationError(
                message=f"handler reference '{reference}' not found",
                details={"reference": reference, "missing": part},
            )
        target = getattr(target, part)

    if not callable(target):
        raise PhaseTableConfigurationError(
            message=f"handler reference '{reference}' is not callable",
            details={"reference": reference},
        )
    return target


def build_phase_table(config: Dict[str, Any], session: Any) -> PhaseTable:
    """
    Constrói a PhaseTable declarada em `config["bootstrap"]["phases"]`.

    Args:
        config (Dict[str, Any]): Configuração resolvida.
        session: Sessão repassada a cada factory de handler.

    Returns:
        PhaseTable: Tabela imutável e ordenada.

    Raises:
        PhaseTableConfigurationError: Seção ausente ou entrada malformada.
        DuplicatePhaseIndexError: Índices repetidos.
    """
    entries = _bootstrap_section(config).get("phases")
    if not isinstance(entries, list) or not entries:
        raise PhaseTableConfigurationError(
            message="config 'bootstrap.phases' must be a non-empty list",
            details={"received": type(entries).__name__},
        )

    phases: List[Phase] = []
    for position, entry in enumerate(entries):
        if not isinstance(entry, dict):
            raise PhaseTableConfigurationError(
                message=f"phase entry #{position} must be a mapping",
                details={"position": position},
            )
        missing = [k for k in _REQUIRED_KEYS if k not in entry]
        if missing:
            raise PhaseTableConfigurationError(
                message=f"phase entry #{position} is missing keys: {', '.join(missing)}",
                details={"position": position, "missing": missing},
            )

        factory = resolve_reference(entry["handler"])
        handler = factory(session)
        try:
            phase = Phase.from_handler(
                entry["index"],
                entry["name"],
                handler,
                anchor=bool(entry.get("anchor", False)),
            )
        except TypeError as exc:
            raise PhaseTableConfigurationError(
                message=str(exc),
                details={"position": position, "handler": entry["handler"]},
            ) from exc
        phases.append(phase)

    return PhaseTable(phases)


def max_phase_from_config(config: Dict[str, Any]) -> Optional[int]:
    value = _bootstrap_section(config).get("max_phase")
    if value is None:
        return None
    if isinstance(value, bool) or not isinstance(value, int):
        raise PhaseTableConfigurationError(
            message="config 'bootstrap.max_phase' must be an int or null",
            details={"received": type(value).__name__},
        )
    return value
