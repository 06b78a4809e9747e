# src/phased_bootstrap/core/__init__.py
"""
Core do Phased Bootstrap.

Este pacote contém o motor genérico de bootstrap em fases: leva um
processo de "nada inicializado" a um nível de prontidão bem definido,
executando uma sequência ordenada de fases em que cada fase pode exigir
condições estabelecidas pela anterior.

Componentes principais:
    - phases       → descritores de fase, handlers e tabela de fases
    - context      → ContextStore e BootstrapState
    - engine       → cache de validação, driver, estratégias e sessão
    - config       → carregamento YAML/JSON e construção da tabela
    - traceability → relatório serializável da sessão

Limites explícitos:
    - Não contém o significado concreto de nenhuma fase
    - Não contém registry de comandos, parsing de opções ou buffering de saída
"""
