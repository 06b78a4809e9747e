# src/phased_bootstrap/core/config/__init__.py

"""
Camada de configuração do Phased Bootstrap.

Este pacote carrega, mescla e identifica a configuração que declara a
tabela de fases, e resolve os handlers de fase no momento da configuração.

Responsabilidades do pacote:
    - Carregamento de YAML/JSON (defaults + overrides locais)
    - Deep-merge determinístico
    - Hash canônico para rastreabilidade
    - Construção da PhaseTable a partir da seção `bootstrap`

Invariantes:
    - A configuração final é um dicionário puro (dict)
    - Conflitos estruturais são tratados como erro fatal
"""
