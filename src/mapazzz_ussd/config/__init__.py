"""Configurações centralizadas do mapazzz_ussd.

Este módulo exporta:
- Settings: classe de configuração via variáveis de ambiente
- get_settings: função cacheada para obter instância única

Uso típico:
    from mapazzz_ussd.config import get_settings
"""

from mapazzz_ussd.config.settings import Settings, get_settings

__all__ = [
    "Settings",
    "get_settings",
]
