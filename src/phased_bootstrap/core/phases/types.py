# src/phased_bootstrap/core/phases/types.py
"""
Tipos canônicos de fase do Phased Bootstrap.

Este módulo define as estruturas e sentinelas fundamentais que padronizam
a comunicação entre handlers de fase, o cache de validação e o driver.

Componentes principais:
    - BOOTSTRAP_NONE     → sentinela "nenhuma fase alcançada"
    - BOOTSTRAP_MAX      → sentinela "alvo máximo" das estratégias
    - ValidationOutcome  → resultado imutável de um validate
    - normalize_outcome  → conversão de retornos aceitos para ValidationOutcome

Invariantes:
    - BOOTSTRAP_NONE é menor que qualquer índice real de fase (>= 0)
    - BOOTSTRAP_MAX nunca nomeia uma fase real
    - ValidationOutcome é imutável

Limites explícitos:
    - Não executa fases
    - Não acessa o Context Store
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, Mapping, Union


BOOTSTRAP_NONE = -1
BOOTSTRAP_MAX = -2


@dataclass(frozen=True)
class ValidationOutcome:
    """
    Resultado imutável do validate de uma fase.

    Campos:
        - ok: pré-condições satisfeitas
        - errors: mapa ordenado `código -> mensagem`
        - values: valores publicados no namespace de bootstrap values

    Valores são publicados mesmo quando `ok` é falso: uma fase pode
    resolver parte do estado antes de descobrir a falha.
    """
    ok: bool
    errors: Dict[str, str] = field(default_factory=dict)
    values: Dict[str, Any] = field(default_factory=dict)

    @classmethod
    def success(cls, **values: Any) -> "ValidationOutcome":
        return cls(ok=True, values=dict(values))

    @classmethod
    def failure(cls, code: str, message: str, **values: Any) -> "ValidationOutcome":
        return cls(ok=False, errors={code: message}, values=dict(values))


OutcomeLike = Union[bool, ValidationOutcome]


def normalize_outcome(raw: Any) -> ValidationOutcome:
    """
    Converte o retorno de um validate em ValidationOutcome.

    Aceita:
        - ValidationOutcome (retornado como está)
        - bool (sem erros nem valores)
        - tupla `(ok, errors, values)` no formato da interface de handler

    Raises:
        TypeError: Para qualquer outro tipo de retorno.
    """
    if isinstance(raw, ValidationOutcome):
        return raw
    if isinstance(raw, bool):
        return ValidationOutcome(ok=raw)
    if isinstance(raw, tuple) and len(raw) == 3:
        ok, errors, values = raw
        return ValidationOutcome(
            ok=bool(ok),
            errors=dict(_as_mapping(errors)),
            values=dict(_as_mapping(values)),
        )
    raise TypeError(
        f"validate() must return bool, ValidationOutcome or (ok, errors, values), "
        f"got {type(raw).__name__}"
    )


def _as_mapping(value: Any) -> Mapping[str, Any]:
    if value is None:
        return {}
    if not isinstance(value, Mapping):
        raise TypeError(f"expected mapping, got {type(value).__name__}")
    return value
