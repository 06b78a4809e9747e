"""
Rastreabilidade do Phased Bootstrap.

Expõe o relatório de bootstrap: snapshot serializável do progresso por
fase, da superfície de erros e do Event Log de uma sessão.
"""

from .report import BootstrapReport, build_report, load_report, save_report

__all__ = ["BootstrapReport", "build_report", "load_report", "save_report"]
