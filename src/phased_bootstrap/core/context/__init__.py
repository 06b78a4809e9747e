"""
Contexto do Phased Bootstrap.

Este pacote contém o `ContextStore` (estado chave/valor com namespaces,
superfície de erros e log estruturado) e o `BootstrapState`, o registro
de progresso que pertence exclusivamente ao store.
"""

from .state import BootstrapState
from .store import ContextStore

__all__ = ["BootstrapState", "ContextStore"]
