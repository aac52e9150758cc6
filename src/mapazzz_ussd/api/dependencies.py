"""Dependências injetadas nas rotas."""

from __future__ import annotations

from fastapi import Request

from mapazzz_ussd.application.dialog_engine import UssdDialogEngine
from mapazzz_ussd.config.settings import Settings


def get_settings(request: Request) -> Settings:
    """Retorna settings da aplicação."""

    return request.app.state.settings


def get_dialog_engine(request: Request) -> UssdDialogEngine:
    """Retorna o engine do diálogo USSD."""

    return request.app.state.dialog_engine

