"""Servidor USSD do mapaZZZ (menus, análise de texto e envio de SMS)."""

__version__ = "0.1.0"
