# routes.py
import os
from fastapi import FastAPI
from fastapi.staticfiles import StaticFiles
from config.settings import settings
from controller.transaction_controller import transaction_router
from controller.user_controller import user_router


def register_routes(app: FastAPI) -> None:
    """Register & Access control controllers here."""
    app.include_router(transaction_router)
    app.include_router(user_router)

    # Review UI; mounted last so /api routes win
    if settings.STATIC_DIR and os.path.isdir(settings.STATIC_DIR):
        app.mount("/", StaticFiles(directory=settings.STATIC_DIR, html=True), name="ui")
