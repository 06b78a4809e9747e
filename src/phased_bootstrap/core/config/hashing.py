# src/phased_bootstrap/core/config/hashing.py
"""
Identidade estrutural do bootstrap configurado.

Dois hashes são gravados no meta da sessão por `BootstrapSession.from_config`
e aparecem no relatório de bootstrap:

    - `config_hash`: configuração efetiva (defaults + override local)
    - `table_hash`: tabela de fases resolvida (índice, nome, âncora e
      capacidades de cada fase), independente de como os handlers foram
      referenciados no YAML

Ambos usam SHA-256 sobre JSON canônico (chaves ordenadas, separadores
compactos, UTF-8). Valores não serializáveis entram via `str()`.
"""

import hashlib
import json
from typing import Any, Dict, List

from phased_bootstrap.core.phases.table import PhaseTable


def _digest(payload: Any) -> str:
    canonical = json.dumps(
        payload,
        sort_keys=True,
        separators=(",", ":"),
        ensure_ascii=False,
        default=str,
    )
    return hashlib.sha256(canonical.encode("utf-8")).hexdigest()


def compute_config_hash(config: Dict[str, Any]) -> str:
    """
    Hash determinístico da configuração efetiva.

    Raises:
        TypeError: Se `config` não for um dicionário.
    """
    if not isinstance(config, dict):
        raise TypeError(
            f"Config para hashing deve ser dict, recebido: {type(config).__name__}"
        )
    return _digest(config)


def compute_table_hash(table: PhaseTable) -> str:
    """
    Hash da forma da tabela de fases.

    Duas tabelas com as mesmas fases, âncoras e capacidades têm o mesmo
    hash, ainda que os handlers sejam objetos diferentes.
    """
    shape: List[Dict[str, Any]] = [
        {
            "index": phase.index,
            "name": phase.name,
            "anchor": phase.anchor,
            "validate": phase.has_validate,
            "execute": phase.has_execute,
        }
        for phase in table
    ]
    return _digest(shape)
