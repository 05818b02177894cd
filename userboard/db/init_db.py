# userboard/db/init_db.py
import logging

from sqlalchemy.ext.asyncio import AsyncEngine

from userboard.db.base import Base

# 👇 importa todos los modelos que deben existir en la DB
from userboard.kv.models import KVEntry  # noqa: F401

log = logging.getLogger("uvicorn")


async def init_models(engine: AsyncEngine):
    """
    Crea/verifica todas las tablas declaradas en Base.metadata
    """
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    log.info("✅ DB init: tablas creadas/verificadas.")
