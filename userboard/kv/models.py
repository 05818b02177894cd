# userboard/kv/models.py
from sqlalchemy import JSON, String
from sqlalchemy.orm import Mapped, mapped_column

from userboard.db.base import Base


class KVEntry(Base):
    __tablename__ = "kv_entries"

    # clave jerárquica codificada ("users/alice"), ver userboard.kv.store.encode_key
    # 👇 orden binario también en postgres: el prefix scan es un rango de claves
    key: Mapped[str] = mapped_column(
        String(512).with_variant(String(512, collation="C"), "postgresql"),
        primary_key=True,
    )
    value: Mapped[dict] = mapped_column(JSON, nullable=False)
    versionstamp: Mapped[str] = mapped_column(String(32), nullable=False)
