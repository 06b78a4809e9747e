# src/phased_bootstrap/core/phases/table.py
"""
Tabela de fases do Phased Bootstrap.

Este módulo define a `PhaseTable`, a lista imutável e ordenada de
descritores de fase sobre a qual o driver e as estratégias caminham.

A tabela atua como uma camada de proteção antecipada, garantindo que:
    - cada fase possua um índice inteiro não negativo
    - não existam índices duplicados
    - a sequência de execução seja a ordem ascendente de índices

Responsabilidades do módulo:
    - Validar a integridade estrutural das fases declaradas
    - Ordenar as fases por índice
    - Expor a visão completa e a visão restrita às fases âncora

Decisões arquiteturais:
    - A validação ocorre na configuração, antes de qualquer bootstrap
    - Erros estruturais são tratados como falhas fatais
    - Lacunas entre índices são permitidas; a ordem da tabela define a sequência
    - A tabela não é mutável após construída

Invariantes:
    - Cada índice aparece no máximo uma vez
    - `phases()` está sempre em ordem ascendente de índice
    - Nenhuma fase inválida é aceita

Limites explícitos:
    - Não valida nem executa fases
    - Não interage com o Context Store
    - Não suporta inserção de fases em runtime
"""

from __future__ import annotations

from typing import Dict, Iterable, Iterator, List, Tuple

from phased_bootstrap.core.exceptions import PhaseTableConfigurationError

from .phase import Phase


class DuplicatePhaseIndexError(ValueError):
    """
    Exceção levantada quando duas fases declaram o mesmo índice.

    Decisões arquiteturais:
        - O índice é a chave primária de uma fase na tabela
        - A duplicidade é tratada como erro fatal de configuração
        - A exceção é lançada na construção da tabela, antes do bootstrap

    Limites explícitos:
        - Não tenta renumerar fases automaticamente
    """


class UnknownPhaseError(KeyError):
    """Exceção levantada ao consultar um índice ausente da tabela."""


class PhaseTable:
    """
    Tabela canônica, imutável e ordenada de fases.

    Invariantes:
        - Índices únicos, inteiros e não negativos
        - Nomes não vazios
        - Pelo menos uma fase declarada
    """

    def __init__(self, phases: Iterable[Phase]):
        by_index: Dict[int, Phase] = {}
        for phase in phases:
            index = getattr(phase, "index", None)
            name = getattr(phase, "name", None)
            if isinstance(index, bool) or not isinstance(index, int) or index < 0:
                raise PhaseTableConfigurationError(
                    message=f"phase.index must be a non-negative int, got {index!r}",
                    details={"index": index, "name": name},
                )
            if not isinstance(name, str) or not name.strip():
                raise PhaseTableConfigurationError(
                    message="phase.name must be a non-empty string",
                    details={"index": index},
                )
            if index in by_index:
                raise DuplicatePhaseIndexError(
                    f"Duplicate phase index {index}: '{by_index[index].name}' and '{name}'"
                )
            by_index[index] = phase

        if not by_index:
            raise PhaseTableConfigurationError(
                message="phase table must declare at least one phase",
                details={},
            )

        self._phases: Tuple[Phase, ...] = tuple(by_index[i] for i in sorted(by_index))
        self._positions: Dict[int, int] = {p.index: pos for pos, p in enumerate(self._phases)}

    def __len__(self) -> int:
        return len(self._phases)

    def __iter__(self) -> Iterator[Phase]:
        return iter(self._phases)

    def __contains__(self, index: object) -> bool:
        return index in self._positions

    def __repr__(self) -> str:
        names = ", ".join(f"{p.index}:{p.name}" for p in self._phases)
        return f"PhaseTable([{names}])"

    # -----------------------------
    # Views
    # -----------------------------
    def phases(self) -> List[Phase]:
        return list(self._phases)

    def anchors(self) -> List[Phase]:
        """Visão restrita às fases âncora (listagem sem repetir descobertas caras)."""
        return [p for p in self._phases if p.anchor]

    def indices(self) -> List[int]:
        return [p.index for p in self._phases]

    # -----------------------------
    # Lookup
    # -----------------------------
    def has(self, index: int) -> bool:
        return index in self._positions

    def get(self, index: int) -> Phase:
        if index not in self._positions:
            raise UnknownPhaseError(index)
        return self._phases[self._positions[index]]

    def position(self, index: int) -> int:
        if index not in self._positions:
            raise UnknownPhaseError(index)
        return self._positions[index]

    def at(self, position: int) -> Phase:
        return self._phases[position]

    @property
    def max_index(self) -> int:
        return self._phases[-1].index
