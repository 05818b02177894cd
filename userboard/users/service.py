# userboard/users/service.py
from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import datetime, timezone

from starlette.concurrency import run_in_threadpool

from userboard.core.errors import ConflictError, ValidationError
from userboard.core.security import create_access_token, hash_password
from userboard.kv.store import KVStore
from userboard.users.models import User
from userboard.users.repository import create_user, get_by_username, list_users

log = logging.getLogger("uvicorn")


@dataclass(frozen=True)
class RegisterResult:
    token: str
    username: str


def _is_utf8(value: str) -> bool:
    try:
        value.encode("utf-8")
    except UnicodeEncodeError:
        return False
    return True


async def register_user(
    store: KVStore,
    username: str | None,
    password: str | None,
    *,
    secret: str,
    expires_minutes: int = 60,
    min_password_length: int = 6,
) -> RegisterResult:
    if not username or not password:
        raise ValidationError("missing credentials")
    if not _is_utf8(username) or not _is_utf8(password):
        # JSON admite surrogates sueltos ("\ud800"); ni la clave ni argon2 pueden codificarlos
        raise ValidationError("invalid credentials")
    if len(password) < min_password_length:
        raise ValidationError("password too short")

    # pre-check rápido, NO es la garantía: dos peticiones pueden pasar juntas por aquí
    if await get_by_username(store, username):
        raise ConflictError("user exists")

    # argon2 es CPU pura: fuera del event loop
    hashed = await run_in_threadpool(hash_password, password)
    user = User(
        username=username,
        password_hash=hashed,
        created_at=datetime.now(timezone.utc),
    )

    # la garantía real: INSERT condicionado a que la clave no exista
    if not await create_user(store, user):
        log.info("registro concurrente perdido para %r", username)
        raise ConflictError("user exists")

    token = create_access_token(username, secret=secret, expires_minutes=expires_minutes)
    log.info("👤 usuario registrado: %s", username)
    return RegisterResult(token=token, username=username)


async def recent_users(store: KVStore, limit: int = 10) -> list[User]:
    # el scan viene en orden de clave; empates en created_at quedan en orden arbitrario
    users = await list_users(store)
    users.sort(key=lambda u: u.created_at, reverse=True)
    return users[:limit]
