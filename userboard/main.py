# userboard/main.py
import logging
import time

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError

from userboard.core.config import Settings, settings as default_settings
from userboard.core.errors import ServiceError, StoreError
from userboard.core.json import UTF8JSONResponse
from userboard.kv.store import KVStore

# routers
from userboard.users.router import router as users_router
from userboard.web.router import router as web_router

log = logging.getLogger("uvicorn")

SECURITY_HEADERS = {
    "X-Content-Type-Options": "nosniff",
    "X-Frame-Options": "DENY",
}


def create_app(settings: Settings | None = None, store: KVStore | None = None) -> FastAPI:
    settings = settings or default_settings
    store = store or KVStore.from_url(settings.DATABASE_URL)

    app = FastAPI(
        title="userboard",
        default_response_class=UTF8JSONResponse,
    )
    app.state.settings = settings
    app.state.store = store

    @app.middleware("http")
    async def security_headers(request: Request, call_next):
        try:
            response = await call_next(request)
        except Exception:
            # sin esto el 500 de ServerErrorMiddleware sale sin cabeceras
            log.exception(f"❌ {request.method} {request.url.path}: error no controlado")
            response = UTF8JSONResponse({"detail": "internal error"}, status_code=500)
        for name, value in SECURITY_HEADERS.items():
            response.headers[name] = value
        return response

    @app.exception_handler(RequestValidationError)
    async def bad_body(request: Request, exc: RequestValidationError):
        # JSON roto o tipos incorrectos → 400 como el resto de validaciones
        return UTF8JSONResponse({"detail": "invalid request body"}, status_code=400)

    @app.exception_handler(ServiceError)
    async def service_error(request: Request, exc: ServiceError):
        if isinstance(exc, StoreError):
            log.error(f"❌ {request.method} {request.url.path}: {exc.message}")
            return UTF8JSONResponse({"detail": "store unavailable"}, status_code=exc.status_code)
        return UTF8JSONResponse({"detail": exc.message}, status_code=exc.status_code)

    @app.on_event("startup")
    async def on_startup():
        log.info("🚀 Iniciando servicio…")
        if not settings.JWT_SECRET:
            raise RuntimeError("JWT_SECRET is empty; refusing to start")
        if settings.uses_default_secret:
            log.warning("⚠️ JWT_SECRET usa el valor por defecto (inseguro): defínelo en producción")
        await store.init()
        log.info(f"✅ Servicio listo: http://localhost:{settings.PORT}")

    @app.on_event("shutdown")
    async def on_shutdown():
        await store.close()

    @app.get("/health")
    async def health():
        # no toca el store: responde aunque la DB esté caída
        return {"status": "healthy", "timestamp": int(time.time() * 1000)}

    app.include_router(web_router)     # /
    app.include_router(users_router)   # /api/register
    return app


app = create_app()
