# src/phased_bootstrap/core/context/store.py
"""
Context Store do Phased Bootstrap.

Este módulo define o `ContextStore`, o estado chave/valor com namespaces
usado para passar valores validados e listas de erros entre fases, e
para registrar a fase corrente alcançada.

O ContextStore atua como o único meio permitido de:
    - troca indireta de informações entre fases (bootstrap values)
    - acumulação de erros de validação antes da decisão do driver
    - exposição da superfície de erros do processo
    - registro de logs estruturados do bootstrap
    - coleta de warnings não fatais associados a fases

Princípios fundamentais:
    - Uma instância por sessão de bootstrap, passada por referência
    - Nenhum estado global ambiente
    - Reset explícito e testável

Invariantes:
    - Logs sempre incluem `session_id` e `phase`
    - Warnings são agrupados por fase
    - A superfície de erros preserva a ordem de inserção

Limites explícitos:
    - Não executa fases
    - Não persiste dados além da sessão
    - Não possui locking: acesso single-threaded apenas
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Any, Dict, List, Optional

import uuid

from phased_bootstrap.core.errors import BootstrapErrorPayload

from .state import BootstrapState


BOOTSTRAP_NAMESPACE = "bootstrap"
PROCESS_NAMESPACE = "process"

VALUES_KEY = "values"
ERRORS_KEY = "errors"


@dataclass
class ContextStore:
    """
    Estado de contexto de uma sessão de bootstrap.

    Namespaces bem conhecidos:
        - ("bootstrap", "values"): valores publicados pelas fases
        - ("bootstrap", "errors"): erros acumulados durante a validação
        - ("process", "errors"):   superfície de erros do processo
    """
    session_id: str = field(default_factory=lambda: uuid.uuid4().hex)
    meta: Dict[str, Any] = field(default_factory=dict)

    state: BootstrapState = field(default_factory=BootstrapState)
    _namespaces: Dict[str, Dict[str, Any]] = field(default_factory=dict, init=False, repr=False)
    events: List[Dict[str, Any]] = field(default_factory=list, init=False)
    warnings: Dict[str, List[str]] = field(default_factory=dict, init=False)

    # -----------------------------
    # Namespaced key/value
    # -----------------------------
    def get(self, namespace: str, key: str, default: Any = None) -> Any:
        return self._namespaces.get(namespace, {}).get(key, default)

    def set(self, namespace: str, key: str, value: Any) -> Any:
        bucket = self._namespaces.setdefault(namespace, {})
        previous = bucket.get(key)
        bucket[key] = value
        return previous

    def has(self, namespace: str, key: str) -> bool:
        return key in self._namespaces.get(namespace, {})

    def ref(self, namespace: str, key: str) -> Dict[str, Any]:
        """Retorna o dict mutável em `namespace/key`, criando-o se ausente."""
        bucket = self._namespaces.setdefault(namespace, {})
        value = bucket.get(key)
        if value is None:
            value = {}
            bucket[key] = value
        elif not isinstance(value, dict):
            raise TypeError(f"{namespace}/{key} holds {type(value).__name__}, not a mapping")
        return value

    def clear(self, namespace: str, key: Optional[str] = None) -> None:
        if key is None:
            self._namespaces.pop(namespace, None)
            return
        bucket = self._namespaces.get(namespace)
        if bucket is not None:
            bucket.pop(key, None)

    # -----------------------------
    # Bootstrap values & errors
    # -----------------------------
    @property
    def bootstrap_values(self) -> Dict[str, Any]:
        return self.ref(BOOTSTRAP_NAMESPACE, VALUES_KEY)

    @property
    def bootstrap_errors(self) -> Dict[str, str]:
        return self.ref(BOOTSTRAP_NAMESPACE, ERRORS_KEY)

    def reset_validation_namespaces(self) -> None:
        self.ref(BOOTSTRAP_NAMESPACE, VALUES_KEY).clear()
        self.ref(BOOTSTRAP_NAMESPACE, ERRORS_KEY).clear()

    # -----------------------------
    # Error surface
    # -----------------------------
    def set_error(self, code: str, message: str) -> None:
        self.ref(PROCESS_NAMESPACE, ERRORS_KEY)[code] = message

    def record_error(self, error: BootstrapErrorPayload, *, phase: str = "-") -> None:
        self.set_error(error.type, error.message)
        self.log(phase=phase, level="ERROR", message=error.message, error=error.to_dict())

    def has_error(self) -> bool:
        return bool(self.get(PROCESS_NAMESPACE, ERRORS_KEY))

    def errors(self) -> Dict[str, str]:
        return dict(self.get(PROCESS_NAMESPACE, ERRORS_KEY) or {})

    # -----------------------------
    # Logging & warnings
    # -----------------------------
    def log(self, *, phase: str, level: str, message: str, **extra: Any) -> None:
        event = {
            "session_id": self.session_id,
            "phase": phase,
            "level": level,
            "message": message,
            "timestamp": datetime.now(timezone.utc).isoformat(),
        }
        event.update(extra)
        self.events.append(event)

    def add_warning(self, *, phase: str, message: str) -> None:
        if phase not in self.warnings:
            self.warnings[phase] = []
        self.warnings[phase].append(message)

    # -----------------------------
    # Session lifecycle
    # -----------------------------
    def reset(self) -> None:
        """Descarta todo o estado e inicia uma sessão independente."""
        self.session_id = uuid.uuid4().hex
        self.state = BootstrapState()
        self._namespaces = {}
        self.events = []
        self.warnings = {}
