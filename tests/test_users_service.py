from __future__ import annotations

import asyncio
import random
from datetime import datetime, timedelta, timezone

import pytest

from userboard.core.errors import ConflictError, StoreError, ValidationError
from userboard.core.security import decode_access_token, verify_password
from userboard.kv.store import KVStore
from userboard.users import repository, service
from userboard.users.models import User

from .conftest import SECRET

pytestmark = pytest.mark.anyio


async def test_register_creates_user_and_returns_token(store: KVStore) -> None:
    result = await service.register_user(store, "alice", "hunter2", secret=SECRET)

    assert result.username == "alice"
    assert result.token
    assert decode_access_token(result.token, secret=SECRET) == "alice"

    user = await repository.get_by_username(store, "alice")
    assert user is not None
    assert user.password_hash != "hunter2"
    assert verify_password("hunter2", user.password_hash)
    assert user.created_at.tzinfo is not None


async def test_second_registration_conflicts(store: KVStore) -> None:
    await service.register_user(store, "alice", "hunter2", secret=SECRET)

    with pytest.raises(ConflictError) as exc:
        await service.register_user(store, "alice", "different-password", secret=SECRET)
    assert exc.value.message == "user exists"

    user = await repository.get_by_username(store, "alice")
    assert verify_password("hunter2", user.password_hash)


@pytest.mark.parametrize(
    ("username", "password", "message"),
    [
        ("", "hunter2", "missing credentials"),
        (None, "hunter2", "missing credentials"),
        ("bob", "", "missing credentials"),
        ("bob", None, "missing credentials"),
        ("bob", "abc", "password too short"),
        ("bob", "12345", "password too short"),
    ],
)
async def test_invalid_input_is_rejected(store: KVStore, username, password, message) -> None:
    with pytest.raises(ValidationError) as exc:
        await service.register_user(store, username, password, secret=SECRET)
    assert exc.value.message == message
    assert await repository.list_users(store) == []


async def test_minimum_length_password_is_accepted(store: KVStore) -> None:
    result = await service.register_user(store, "carol", "123456", secret=SECRET)
    assert result.username == "carol"


async def test_atomic_write_catches_race_missed_by_precheck(store: KVStore, monkeypatch) -> None:
    await service.register_user(store, "alice", "hunter2", secret=SECRET)

    async def stale_lookup(_store, _username):
        return None

    # simula que otra petición creó el usuario entre el pre-check y la escritura
    monkeypatch.setattr(service, "get_by_username", stale_lookup)

    with pytest.raises(ConflictError):
        await service.register_user(store, "alice", "other-password", secret=SECRET)

    user = await repository.get_by_username(store, "alice")
    assert verify_password("hunter2", user.password_hash)


async def test_concurrent_registrations_have_single_winner(store: KVStore) -> None:
    attempts = 5
    results = await asyncio.gather(
        *(
            service.register_user(store, "dave", f"password-{i}", secret=SECRET)
            for i in range(attempts)
        ),
        return_exceptions=True,
    )

    winners = [r for r in results if isinstance(r, service.RegisterResult)]
    losers = [r for r in results if isinstance(r, Exception)]

    assert len(winners) == 1
    assert len(losers) == attempts - 1
    assert all(isinstance(e, (ConflictError, StoreError)) for e in losers)

    # el token ganador corresponde a la contraseña que quedó guardada
    winner_index = results.index(winners[0])
    user = await repository.get_by_username(store, "dave")
    assert verify_password(f"password-{winner_index}", user.password_hash)


async def test_recent_users_returns_ten_newest_descending(store: KVStore) -> None:
    base = datetime(2024, 1, 1, tzinfo=timezone.utc)
    users = [
        User(username=f"u{i:02d}", password_hash="x", created_at=base + timedelta(minutes=i))
        for i in range(1, 13)
    ]
    random.Random(7).shuffle(users)
    for user in users:
        assert await repository.create_user(store, user)

    recent = await service.recent_users(store, limit=10)

    assert [u.username for u in recent] == [f"u{i:02d}" for i in range(12, 2, -1)]


async def test_recent_users_on_empty_store(store: KVStore) -> None:
    assert await service.recent_users(store) == []


@pytest.mark.parametrize(
    ("username", "password"),
    [("\ud800", "hunter2"), ("alice", "hunter\udfff2")],
)
async def test_unencodable_credentials_are_rejected(store: KVStore, username, password) -> None:
    with pytest.raises(ValidationError) as exc:
        await service.register_user(store, username, password, secret=SECRET)
    assert exc.value.message == "invalid credentials"
    assert await repository.list_users(store) == []
