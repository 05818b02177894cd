# userboard/kv/store.py
"""
Almacén clave-valor ordenado sobre una sola tabla SQL (kv_entries).

Las claves son tuplas jerárquicas, p.ej. ("users", "alice"). Cada parte se
codifica con percent-encoding y se unen con "/", así un username con "/" no
rompe el prefix scan.

La única escritura es create_if_absent: un INSERT cuyo conflicto de clave
primaria ES la precondición "la clave no tiene versión". La base serializa
dos INSERT sobre la misma clave: gana uno, el otro recibe IntegrityError.
"""
from __future__ import annotations

import uuid
from dataclasses import dataclass
from typing import Any, Sequence
from urllib.parse import quote, unquote

from sqlalchemy import select
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncEngine

from userboard.core.errors import StoreError
from userboard.db.init_db import init_models
from userboard.db.session import build_engine, build_sessionmaker
from userboard.kv.models import KVEntry

Key = Sequence[str]


class StoreUnavailable(StoreError):
    pass


@dataclass(frozen=True)
class Entry:
    key: tuple[str, ...]
    value: Any
    versionstamp: str


def encode_key(key: Key) -> str:
    return "/".join(quote(part, safe="") for part in key)


def decode_key(raw: str) -> tuple[str, ...]:
    return tuple(unquote(part) for part in raw.split("/"))


def _to_entry(row: KVEntry) -> Entry:
    return Entry(key=decode_key(row.key), value=row.value, versionstamp=row.versionstamp)


class KVStore:
    def __init__(self, engine: AsyncEngine):
        self.engine = engine
        self._sessions = build_sessionmaker(engine)

    @classmethod
    def from_url(cls, db_url: str) -> "KVStore":
        return cls(build_engine(db_url))

    async def init(self) -> None:
        try:
            await init_models(self.engine)
        except (SQLAlchemyError, OSError) as e:
            raise StoreUnavailable(f"store unavailable: {e!r}") from e

    async def close(self) -> None:
        await self.engine.dispose()

    async def get(self, key: Key) -> Entry | None:
        try:
            async with self._sessions() as session:
                row = await session.get(KVEntry, encode_key(key))
                return _to_entry(row) if row else None
        except (SQLAlchemyError, OSError) as e:
            raise StoreUnavailable(f"store unavailable: {e!r}") from e

    async def create_if_absent(self, key: Key, value: Any) -> str | None:
        """
        Inserta solo si la clave no existe.
        Devuelve el versionstamp nuevo, o None si otra escritura llegó antes.
        """
        versionstamp = uuid.uuid4().hex
        try:
            async with self._sessions() as session:
                async with session.begin():
                    session.add(
                        KVEntry(key=encode_key(key), value=value, versionstamp=versionstamp)
                    )
        except IntegrityError:
            return None
        except (SQLAlchemyError, OSError) as e:
            raise StoreUnavailable(f"commit failed: {e!r}") from e
        return versionstamp

    async def list(self, prefix: Key) -> list[Entry]:
        """Prefix scan en orden de clave (no de creación)."""
        q = select(KVEntry).order_by(KVEntry.key)
        if prefix:
            # rango [p/, p0): "0" es el carácter siguiente a "/"; comparación binaria, sensible a mayúsculas
            p = encode_key(prefix)
            q = q.where(KVEntry.key >= p + "/", KVEntry.key < p + "0")
        try:
            async with self._sessions() as session:
                res = await session.execute(q)
                return [_to_entry(row) for row in res.scalars()]
        except (SQLAlchemyError, OSError) as e:
            raise StoreUnavailable(f"store unavailable: {e!r}") from e
