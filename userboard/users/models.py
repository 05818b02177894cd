# userboard/users/models.py
from datetime import datetime

from pydantic import BaseModel


class User(BaseModel):
    """Registro canónico guardado en ("users", username). Nunca se actualiza."""

    username: str
    password_hash: str
    created_at: datetime

    model_config = {"frozen": True}

    def to_record(self) -> dict:
        # JSON plano para la columna value (created_at en ISO-8601)
        return self.model_dump(mode="json")

    @classmethod
    def from_record(cls, record: dict) -> "User":
        return cls.model_validate(record)
