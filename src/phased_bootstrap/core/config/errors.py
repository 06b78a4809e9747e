# src/phased_bootstrap/core/config/errors.py
"""
Exceções canônicas da camada de configuração do Phased Bootstrap.

Este módulo define a hierarquia de exceções usadas durante o carregamento
e a resolução da configuração que declara a tabela de fases.

Princípios fundamentais:
    - Exceções são tipadas e semânticas
    - Erros estruturais são falhas fatais na inicialização
    - Nenhuma exceção aqui representa falha de validação de fase

Invariantes:
    - Todas as exceções de configuração herdam de `ConfigError`
"""


class ConfigError(Exception):
    """
    Exceção base para erros de configuração.

    Permite captura genérica de falhas de load/merge, distinguindo-as
    de falhas de bootstrap (que vão para a superfície de erros).
    """


class DefaultsNotFoundError(ConfigError):
    """
    O arquivo de configuração base (defaults) não existe.

    Decisões arquiteturais:
        - O arquivo de defaults é obrigatório
        - Sem defaults não há tabela de fases declarada
    """


class UnsupportedConfigFormatError(ConfigError):
    """
    Formato de arquivo não suportado pelo loader.

    Formatos suportados (v1):
        - YAML (.yaml, .yml)
        - JSON (.json)
    """


class InvalidConfigRootTypeError(ConfigError):
    """O conteúdo raiz da configuração não é um dicionário."""


class ConfigTypeConflictError(ConfigError):
    """
    Conflito de tipos durante o deep-merge.

    Exemplo de conflito:
        - base:     {"bootstrap": {"max_phase": 3}}
        - override: {"bootstrap": "full"}

    Limites explícitos:
        - Não realiza coerção de tipos
        - Não tenta resolver conflitos automaticamente
    """
