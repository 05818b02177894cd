# run_dev.py
import uvicorn

from userboard.core.config import settings


def main():
    # .env lo carga pydantic-settings (python-dotenv) al importar settings
    print(f"🔗 API local: http://127.0.0.1:{settings.PORT}")
    print(f"🌀 reload={'ON' if settings.RELOAD else 'OFF'}")

    uvicorn.run(
        "userboard.main:app",
        host=settings.HOST,
        port=settings.PORT,
        reload=settings.RELOAD,
        reload_dirs=["userboard"],
        timeout_keep_alive=30,
        timeout_graceful_shutdown=15,
        log_level=settings.LOG_LEVEL,
        lifespan="on",
    )


if __name__ == "__main__":
    main()
