# src/phased_bootstrap/core/phases/phase.py
"""
Contrato canônico de fase do Phased Bootstrap.

Uma fase é um degrau discreto e ordenado de prontidão do processo, com
sua própria verificação de pré-condições (`validate`) e sua ação com
efeitos colaterais (`execute`).

Este módulo define:
    - PhaseHandler: protocolo de colaboradores que fornecem as capacidades
    - Phase: descritor imutável consumido pela tabela de fases e pelo driver

Princípios fundamentais:
    - Fases não conhecem o driver nem as estratégias
    - Fases não controlam a ordem de execução
    - Capacidades são resolvidas na configuração, nunca por nome em runtime
    - Conformidade de handlers é verificada por duck typing (@runtime_checkable)

Invariantes:
    - `execute` roda no máximo uma vez por sessão de bootstrap
    - `execute` só roda após `validate` bem-sucedido da mesma fase

Limites explícitos:
    - Não contém lógica de memoização
    - Não registra eventos
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Callable, Optional, Protocol, runtime_checkable

from .types import OutcomeLike


ValidateFn = Callable[[], OutcomeLike]
ExecuteFn = Callable[[], Any]


@runtime_checkable
class PhaseHandler(Protocol):
    """
    Colaborador que fornece as capacidades de uma fase.

    Ambos os métodos são opcionais na prática: `Phase.from_handler` usa
    apenas o que o objeto expõe. O protocolo descreve a forma completa.
    """

    def validate(self) -> OutcomeLike:
        """Verifica as pré-condições da fase, sem efeitos no estado de bootstrap."""
        ...

    def execute(self) -> None:
        """Aplica os efeitos colaterais da fase."""
        ...


@dataclass(frozen=True)
class Phase:
    """
    Descritor imutável de uma fase.

    Campos:
        - index: inteiro não negativo; a ordem da tabela define a sequência
        - name: rótulo opaco para logs e diagnósticos
        - validate: capacidade de validação (None → vacuamente válida)
        - execute: capacidade de execução (None → nada a executar)
        - anchor: fase âncora, exposta na visão restrita da tabela
    """
    index: int
    name: str
    validate: Optional[ValidateFn] = None
    execute: Optional[ExecuteFn] = None
    anchor: bool = False

    @classmethod
    def from_handler(
        cls,
        index: int,
        name: str,
        handler: Any,
        *,
        anchor: bool = False,
    ) -> "Phase":
        validate = getattr(handler, "validate", None)
        execute = getattr(handler, "execute", None)
        if validate is not None and not callable(validate):
            raise TypeError(f"handler.validate for phase '{name}' is not callable")
        if execute is not None and not callable(execute):
            raise TypeError(f"handler.execute for phase '{name}' is not callable")
        return cls(index=index, name=name, validate=validate, execute=execute, anchor=anchor)

    @property
    def has_validate(self) -> bool:
        return self.validate is not None

    @property
    def has_execute(self) -> bool:
        return self.execute is not None
