"""NiceGUI web menu setup and page registration."""

from __future__ import annotations

import os
import secrets

from fastapi import FastAPI
from nicegui import ui


def setup_ui(fastapi_app: FastAPI) -> None:
    """Register NiceGUI pages with the FastAPI application."""

    settings = fastapi_app.state.settings
    switcher = fastapi_app.state.switcher

    @ui.page("/")
    def index():
        from soundchooser.ui.menu import menu_page
        menu_page(settings, switcher)

    storage_secret = os.environ.get("SOUNDCHOOSER_STORAGE_SECRET") or secrets.token_hex(32)

    ui.run_with(
        fastapi_app,
        title="Sound Output Chooser",
        storage_secret=storage_secret,
    )
