"""
Phased Bootstrap: Canonical Exceptions (v1)

Este módulo define exceções tipadas internas do bootstrap em fases.

Objetivo:
- Permitir que handlers de fase levantem falhas semânticas com código estável
- Facilitar o mapeamento determinístico para a superfície de erros
- Evitar ValueError/RuntimeError genéricos em erros de configuração

Regras:
- Exceções carregam apenas dados estruturados (serializáveis).
- `code` é a chave usada na superfície de erros quando a exceção é convertida.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, Optional


@dataclass(frozen=True)
class BootstrapException(Exception):
    """Base class para exceções internas do bootstrap.

    Importante:
    - Sempre carregar dados estruturados em `details`
    - Mensagem deve ser curta e humana
    - `code` vazio significa "usar o código padrão de quem converter"
    """

    message: str
    details: Dict[str, Any] = field(default_factory=dict)
    code: Optional[str] = None
    hint: Optional[str] = None

    def __str__(self) -> str:  # pragma: no cover
        return self.message


# ---------------------------------------------------------------------------
# Validação / execução de fases
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class ValidationFailure(BootstrapException):
    """Pré-condição de uma fase não satisfeita (levantada pelo validate)."""


@dataclass(frozen=True)
class PhaseExecutionError(BootstrapException):
    """Falha semântica durante o execute de uma fase."""


# ---------------------------------------------------------------------------
# Configuração
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class PhaseTableConfigurationError(BootstrapException):
    """Tabela de fases malformada. Fatal na inicialização."""
