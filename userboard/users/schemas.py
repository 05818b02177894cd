# userboard/users/schemas.py
from datetime import datetime

from pydantic import BaseModel


class RegisterIn(BaseModel):
    # sin min_length aquí: los mensajes de validación los da el servicio (400, no 422)
    username: str | None = None
    password: str | None = None


class UserPublic(BaseModel):
    username: str


class RegisterOut(BaseModel):
    success: bool = True
    token: str
    user: UserPublic


class RecentUserOut(BaseModel):
    username: str
    created_at: datetime
