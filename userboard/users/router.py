# userboard/users/router.py
import logging

from fastapi import APIRouter, Depends, HTTPException, status

from userboard.core.config import Settings
from userboard.core.deps import get_settings, get_store
from userboard.core.errors import ServiceError
from userboard.kv.store import KVStore
from userboard.users import service as svc
from userboard.users.schemas import RegisterIn, RegisterOut, UserPublic

log = logging.getLogger("uvicorn")

router = APIRouter(prefix="/api", tags=["users"])


@router.post("/register", response_model=RegisterOut)
async def register(
    payload: RegisterIn,
    store: KVStore = Depends(get_store),
    settings: Settings = Depends(get_settings),
):
    try:
        result = await svc.register_user(
            store,
            payload.username,
            payload.password,
            secret=settings.JWT_SECRET,
            expires_minutes=settings.ACCESS_TOKEN_EXPIRE_MIN,
            min_password_length=settings.MIN_PASSWORD_LENGTH,
        )
    except ServiceError as e:
        if e.status_code >= status.HTTP_500_INTERNAL_SERVER_ERROR:
            log.error(f"❌ registro falló: {e.message}")
            raise HTTPException(status_code=e.status_code, detail="registration failed")
        raise HTTPException(status_code=e.status_code, detail=e.message)

    return RegisterOut(token=result.token, user=UserPublic(username=result.username))
