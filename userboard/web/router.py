# userboard/web/router.py
from datetime import datetime, timezone
from pathlib import Path

from fastapi import APIRouter, Depends, Request
from fastapi.responses import HTMLResponse
from fastapi.templating import Jinja2Templates

from userboard.core.config import Settings
from userboard.core.deps import get_settings, get_store
from userboard.kv.store import KVStore
from userboard.users.schemas import RecentUserOut
from userboard.users.service import recent_users

TEMPLATE_DIR = Path(__file__).resolve().parents[1] / "templates"
templates = Jinja2Templates(directory=str(TEMPLATE_DIR))

router = APIRouter(tags=["web"])


@router.get("/", response_class=HTMLResponse)
async def index(
    request: Request,
    store: KVStore = Depends(get_store),
    settings: Settings = Depends(get_settings),
):
    users = await recent_users(store, limit=settings.RECENT_USERS_LIMIT)
    return templates.TemplateResponse(
        request,
        "index.html",
        {
            # 👇 solo la proyección pública, nunca el hash
            "users": [RecentUserOut(username=u.username, created_at=u.created_at) for u in users],
            "timestamp": datetime.now(timezone.utc).strftime("%Y-%m-%d %H:%M:%S %Z"),
        },
    )
