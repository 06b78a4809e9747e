# src/phased_bootstrap/core/engine/strategies.py
"""
Estratégias de progressão do bootstrap.

Duas entradas públicas, ambas construídas sobre o driver:

    - bootstrap_to_phase (estrito): falha o bootstrap inteiro se a fase
      solicitada não for alcançada. O alvo BOOTSTRAP_MAX delega para
      bootstrap_max e sempre reporta sucesso.
    - bootstrap_max (melhor esforço): para silenciosamente na maior fase
      alcançável e retorna o índice alcançado.

Invariantes:
    - Nenhuma fase já executada é reexecutada
    - Toda memoização vive no driver / ValidationCache; as estratégias
      não mantêm contabilidade própria
    - Modo estrito: o resultado é o AND dos resultados por fase, com
      curto-circuito na primeira falha
    - Modo melhor esforço: falha de validação é condição normal de parada
      e não popula a superfície de erros

Limites explícitos:
    - Não fazem retry de validações que falharam
    - Não resolvem aliases ou alvos remotos
"""

from __future__ import annotations

from typing import Optional

from phased_bootstrap.core.phases.types import BOOTSTRAP_MAX

from .driver import BootstrapDriver


def bootstrap_to_phase(driver: BootstrapDriver, target: int) -> bool:
    """
    Leva o bootstrap até `target` ou falha.

    `target` não precisa ser um índice declarado: a caminhada roda toda
    fase com índice <= `target` (alvos em lacunas, além da última fase ou
    BOOTSTRAP_NONE são válidos). Para cada uma dessas fases,
    valida e, se a fase ainda não foi alcançada, pede ao driver para
    executar até ela. A primeira falha de validação encerra a chamada com
    `False`; os erros acumulados são levados à superfície pelo driver.

    Args:
        driver (BootstrapDriver): Driver da sessão.
        target (int): Índice da fase alvo ou BOOTSTRAP_MAX.

    Returns:
        bool: True se a fase alvo foi alcançada sem erros.
    """
    if target == BOOTSTRAP_MAX:
        bootstrap_max(driver)
        return True

    store = driver.store
    with driver.bootstrapping():
        for phase in driver.table:
            if phase.index > target:
                break
            if not driver.validate(phase.index):
                # o driver decide parar e copia os erros para a superfície
                driver.run_to(phase.index, ceiling=target)
                return False
            if phase.index > store.state.current_phase:
                if not driver.run_to(phase.index, ceiling=target):
                    return False
    return True


def bootstrap_max(driver: BootstrapDriver, ceiling: Optional[int] = None) -> int:
    """
    Avança o bootstrap até a maior fase alcançável, sem tratar a parada como falha.

    Args:
        driver (BootstrapDriver): Driver da sessão.
        ceiling (Optional[int]): Teto opcional de índice, independente da
            extensão da tabela.

    Returns:
        int: Índice da fase efetivamente alcançada (`current_phase`).
    """
    store = driver.store
    with driver.bootstrapping():
        for phase in driver.table:
            if ceiling is not None and phase.index > ceiling:
                break
            if not driver.validate(phase.index):
                break
            if phase.index > store.state.current_phase:
                if not driver.run_to(phase.index, ceiling=ceiling):
                    break
    return store.state.current_phase
