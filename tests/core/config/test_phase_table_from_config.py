# tests/core/config/test_phase_table_from_config.py
"""
Testes da construção da tabela de fases a partir de YAML.

Os testes asseguram que:
- referências `módulo:atributo` são resolvidas na configuração
- factories recebem a sessão, permitindo publicar valores e erros
- `bootstrap.max_phase` vira o teto padrão do melhor esforço
- entradas malformadas e referências inválidas são erro fatal
- os hashes da configuração e da tabela são registrados no meta da sessão
"""

from pathlib import Path

import pytest

try:
    from phased_bootstrap.core.config.hashing import compute_table_hash
    from phased_bootstrap.core.config.phases import build_phase_table, resolve_reference
    from phased_bootstrap.core.engine.session import BootstrapSession
    from phased_bootstrap.core.exceptions import PhaseTableConfigurationError
    from phased_bootstrap.core.phases.table import DuplicatePhaseIndexError
except Exception as e:  # noqa: BLE001
    BootstrapSession = None
    _IMPORT_ERR = e
else:
    _IMPORT_ERR = None


_FIXTURES = "tests.fixtures.phases.sample_phases"


def _require_imports():
    if _IMPORT_ERR is not None:
        pytest.fail(f"Missing config phase builder. Import error: {_IMPORT_ERR}")


def _write(tmp_path: Path, name: str, content: str) -> str:
    path = tmp_path / name
    path.write_text(content, encoding="utf-8")
    return str(path)


def test_session_from_config_runs_declared_phases(tmp_path: Path, project_like_bootstrap_yaml):
    """
    Verifica o fluxo completo YAML → tabela → bootstrap estrito.

    Invariantes:
        - fases âncora declaradas aparecem na visão de âncoras
        - o valor publicado no validate da fase root é lido pelo execute
        - a fase site falha com o código declarado pelo handler
    """
    _require_imports()
    defaults = _write(tmp_path, "bootstrap.yaml", project_like_bootstrap_yaml)
    session = BootstrapSession.from_config(defaults_path=defaults)
    session.store.meta["root"] = "/var/www"

    assert [p.name for p in session.table.anchors()] == ["runtime", "site"]
    assert len(session.store.meta["config_hash"]) == 64
    assert session.store.meta["table_hash"] == compute_table_hash(session.table)

    assert session.to_phase(2) is False
    assert session.current_phase == 1
    assert session.store.meta["executed"] == ["runtime", "root:/var/www"]
    assert session.errors == {"E_NO_SITE": "No site selected"}


def test_handler_bootstrap_error_reaches_surface(tmp_path: Path, project_like_bootstrap_yaml):
    _require_imports()
    defaults = _write(tmp_path, "bootstrap.yaml", project_like_bootstrap_yaml)
    session = BootstrapSession.from_config(defaults_path=defaults)

    assert session.to_phase(1) is False
    assert session.errors == {"E_NO_ROOT": "No root directory could be found"}
    assert session.current_phase == 0


def test_local_max_phase_caps_best_effort(tmp_path: Path, project_like_bootstrap_yaml, project_like_bootstrap_local_yaml):
    _require_imports()
    defaults = _write(tmp_path, "bootstrap.yaml", project_like_bootstrap_yaml)
    local = _write(tmp_path, "bootstrap.local.yaml", project_like_bootstrap_local_yaml)
    session = BootstrapSession.from_config(defaults_path=defaults, local_path=local)
    session.store.meta.update({"root": "/srv", "site": "default"})

    assert session.max_phase == 1
    assert session.to_max() == 1
    assert session.to_max(ceiling=2) == 2


@pytest.mark.parametrize(
    "config",
    [
        {},
        {"bootstrap": "phases"},
        {"bootstrap": {"phases": []}},
        {"bootstrap": {"phases": ["runtime"]}},
        {"bootstrap": {"phases": [{"index": 0, "name": "runtime"}]}},
        {"bootstrap": {"phases": [{"index": 0, "name": "x", "handler": "no_colon_here"}]}},
        {"bootstrap": {"phases": [{"index": 0, "name": "x", "handler": "no.such.module:make"}]}},
        {"bootstrap": {"phases": [{"index": 0, "name": "x", "handler": f"{_FIXTURES}:missing"}]}},
        {"bootstrap": {"phases": [{"index": 0, "name": "x", "handler": f"{_FIXTURES}:NOT_A_FACTORY"}]}},
    ],
)
def test_malformed_phase_section_raises(config):
    _require_imports()
    session = BootstrapSession()
    with pytest.raises(PhaseTableConfigurationError):
        build_phase_table(config, session)


def test_duplicate_index_in_config_raises():
    _require_imports()
    config = {
        "bootstrap": {
            "phases": [
                {"index": 0, "name": "a", "handler": f"{_FIXTURES}:make_runtime_phase"},
                {"index": 0, "name": "b", "handler": f"{_FIXTURES}:make_site_phase"},
            ]
        }
    }
    with pytest.raises(DuplicatePhaseIndexError):
        build_phase_table(config, BootstrapSession())


def test_invalid_max_phase_raises(tmp_path: Path):
    _require_imports()
    defaults = _write(
        tmp_path,
        "bootstrap.yaml",
        f"""
bootstrap:
  max_phase: "full"
  phases:
    - {{index: 0, name: runtime, handler: "{_FIXTURES}:make_runtime_phase"}}
""",
    )
    with pytest.raises(PhaseTableConfigurationError):
        BootstrapSession.from_config(defaults_path=defaults)


def test_resolve_reference_supports_nested_attributes():
    _require_imports()
    target = resolve_reference(f"{_FIXTURES}:RootPhase.validate")
    assert callable(target)
