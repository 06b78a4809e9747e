# tests/core/engine/test_session_scenario.py
"""
Testes de cenário da BootstrapSession.

Cobre o cenário canônico de três fases (P0 sempre válida, P1 publica a
raiz no execute, P2 sem raiz), a propagação de valores entre fases, a
consulta `has_reached` e o ciclo de vida da sessão.
"""

import pytest

try:
    from phased_bootstrap.core.engine.session import BootstrapSession
    from phased_bootstrap.core.exceptions import PhaseTableConfigurationError
    from phased_bootstrap.core.phases.phase import Phase
    from phased_bootstrap.core.phases.table import PhaseTable
    from phased_bootstrap.core.phases.types import BOOTSTRAP_NONE, ValidationOutcome
except Exception as e:  # noqa: BLE001
    BootstrapSession = None
    _IMPORT_ERR = e
else:
    _IMPORT_ERR = None


def _require_imports():
    if _IMPORT_ERR is not None:
        pytest.fail(f"Missing BootstrapSession. Import error: {_IMPORT_ERR}")


def test_canonical_three_phase_scenario():
    """
    Cenário: [P0 válida sem execute, P1 válida cujo execute publica root=/x,
    P2 inválida com E_NO_ROOT].

    Invariantes:
        - to_phase(2) falha, E_NO_ROOT está na superfície, current_phase == 1
        - phase_value("root") == "/x"
        - to_max() posterior mantém current_phase == 1 sem reexecutar P1
    """
    _require_imports()
    calls = {"p1_execute": 0}
    session = None

    def p1_execute():
        calls["p1_execute"] += 1
        session.phase_value("root", "/x")

    table = PhaseTable([
        Phase(0, "drush", validate=lambda: True),
        Phase(1, "root", validate=lambda: True, execute=p1_execute),
        Phase(2, "site", validate=lambda: ValidationOutcome.failure("E_NO_ROOT", "No Drupal root found")),
    ])
    session = BootstrapSession(table)

    assert session.to_phase(2) is False
    assert "E_NO_ROOT" in session.errors
    assert session.current_phase == 1
    assert session.phase_value("root") == "/x"

    reached = session.to_max()
    assert reached == 1
    assert session.current_phase == 1
    assert calls["p1_execute"] == 1


def test_value_published_by_validate_is_read_by_later_execute():
    """
    Um valor publicado no validate da fase i é lido, inalterado, pelo execute
    da fase i e de fases seguintes na mesma execução.
    """
    _require_imports()
    seen = []
    session = None

    table = PhaseTable([
        Phase(0, "root", validate=lambda: ValidationOutcome.success(root="/srv/app"),
              execute=lambda: seen.append(("root", session.phase_value("root")))),
        Phase(1, "config", validate=lambda: True,
              execute=lambda: seen.append(("config", session.phase_value("root")))),
        Phase(2, "full", execute=lambda: seen.append(("full", session.phase_value("root")))),
    ])
    session = BootstrapSession(table)

    assert session.to_phase(2) is True
    assert seen == [("root", "/srv/app"), ("config", "/srv/app"), ("full", "/srv/app")]


def test_phase_value_overwrites_and_reports_absence():
    _require_imports()
    session = BootstrapSession(PhaseTable([Phase(0, "only")]))

    assert session.phase_value("uri") is None
    assert session.has_phase_value("uri") is False
    assert session.phase_value("uri", "a") == "a"
    assert session.phase_value("uri", "b") == "b"
    assert session.phase_value("uri") == "b"


@pytest.mark.parametrize("stored", [None, 0, "", False, []])
def test_phase_value_stores_falsy_values(stored):
    """Qualquer valor informado é publicado, inclusive None e valores falsy."""
    _require_imports()
    session = BootstrapSession(PhaseTable([Phase(0, "only")]))
    session.phase_value("db_port", "5432")

    assert session.phase_value("db_port", stored) == stored
    assert session.phase_value("db_port", default="fallback") == stored
    assert session.has_phase_value("db_port") is True


def test_phase_value_default_applies_only_to_absent_keys():
    _require_imports()
    session = BootstrapSession(PhaseTable([Phase(0, "only")]))

    assert session.phase_value("site", default="default") == "default"
    assert session.has_phase_value("site") is False

    session.phase_value("site", "example.com")
    assert session.phase_value("site", default="default") == "example.com"


def test_has_reached_does_not_trigger_bootstrap():
    _require_imports()
    executed = []
    session = BootstrapSession(PhaseTable([Phase(0, "a", execute=lambda: executed.append(0))]))

    assert session.has_reached(0) is False
    assert executed == []
    session.to_phase(0)
    assert session.has_reached(0) is True
    assert session.has_reached(BOOTSTRAP_NONE) is True


def test_session_without_table_refuses_to_run():
    _require_imports()
    session = BootstrapSession()
    with pytest.raises(PhaseTableConfigurationError):
        session.to_phase(0)


def test_table_can_only_be_configured_once():
    _require_imports()
    session = BootstrapSession(PhaseTable([Phase(0, "a")]))
    with pytest.raises(PhaseTableConfigurationError):
        session.configure(PhaseTable([Phase(0, "b")]))


def test_report_snapshot_reflects_progress():
    _require_imports()
    table = PhaseTable([
        Phase(0, "drush", anchor=True),
        Phase(1, "site", validate=lambda: ValidationOutcome.failure("E_NO_SITE", "no site")),
    ])
    session = BootstrapSession(table, meta={"config_hash": "deadbeef"})
    session.to_phase(1)

    report = session.report()

    assert report.session["meta"] == {"config_hash": "deadbeef"}
    assert report.progress["current_phase"] == 0
    assert report.phase(0)["reached"] is True
    assert report.phase(1)["valid"] is False
    assert report.phase(1)["errors"] == {"E_NO_SITE": "no site"}
    assert report.errors == {"E_NO_SITE": "no site"}
