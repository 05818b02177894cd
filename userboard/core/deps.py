# userboard/core/deps.py
from fastapi import Request

from userboard.core.config import Settings
from userboard.kv.store import KVStore


def get_store(request: Request) -> KVStore:
    # un solo handle por proceso, creado en create_app()
    return request.app.state.store


def get_settings(request: Request) -> Settings:
    return request.app.state.settings
