# userboard/users/repository.py
from userboard.kv.store import KVStore
from userboard.users.models import User

USERS_PREFIX = ("users",)


def user_key(username: str) -> tuple[str, str]:
    return (*USERS_PREFIX, username)


async def get_by_username(store: KVStore, username: str) -> User | None:
    entry = await store.get(user_key(username))
    return User.from_record(entry.value) if entry else None


async def create_user(store: KVStore, user: User) -> bool:
    # única vía de escritura: False si la clave ya tenía versión
    versionstamp = await store.create_if_absent(user_key(user.username), user.to_record())
    return versionstamp is not None


async def list_users(store: KVStore) -> list[User]:
    entries = await store.list(USERS_PREFIX)
    return [User.from_record(e.value) for e in entries]
