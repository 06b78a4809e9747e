# tests/core/config/test_hashing.py
"""
Testes do hash canônico de configuração.

Garante estabilidade independente da ordem de chaves, sensibilidade a
mudanças de valor e rejeição de entradas não-dict, e que o hash da
tabela depende só da forma das fases (índice, nome, âncora, capacidades).
"""

import pytest

from phased_bootstrap.core.config.hashing import compute_config_hash, compute_table_hash
from phased_bootstrap.core.phases.phase import Phase
from phased_bootstrap.core.phases.table import PhaseTable


def test_hash_is_stable_across_key_order():
    a = {"bootstrap": {"max_phase": 1, "phases": [{"index": 0, "name": "a"}]}}
    b = {"bootstrap": {"phases": [{"name": "a", "index": 0}], "max_phase": 1}}

    assert compute_config_hash(a) == compute_config_hash(b)
    assert len(compute_config_hash(a)) == 64


def test_hash_changes_with_values():
    assert compute_config_hash({"max_phase": 1}) != compute_config_hash({"max_phase": 2})


def test_hash_rejects_non_dict():
    with pytest.raises(TypeError):
        compute_config_hash(["not", "a", "dict"])


def test_table_hash_tracks_phase_shape_not_handler_identity():
    table_a = PhaseTable([Phase(0, "runtime", execute=lambda: None), Phase(1, "root", validate=lambda: True)])
    table_b = PhaseTable([Phase(1, "root", validate=lambda: False), Phase(0, "runtime", execute=print)])

    assert compute_table_hash(table_a) == compute_table_hash(table_b)
    assert len(compute_table_hash(table_a)) == 64


@pytest.mark.parametrize(
    "changed",
    [
        [Phase(0, "runtime", execute=print), Phase(1, "site", validate=print)],
        [Phase(0, "runtime", execute=print, anchor=True), Phase(1, "root", validate=print)],
        [Phase(0, "runtime"), Phase(1, "root", validate=print)],
        [Phase(0, "runtime", execute=print), Phase(2, "root", validate=print)],
    ],
)
def test_table_hash_changes_with_name_anchor_capability_or_index(changed):
    base = PhaseTable([Phase(0, "runtime", execute=print), Phase(1, "root", validate=print)])
    assert compute_table_hash(base) != compute_table_hash(PhaseTable(changed))
