# userboard/core/config.py
from pydantic_settings import BaseSettings, SettingsConfigDict

# ⚠️ valor público, conocido por todos: en producción SIEMPRE definir JWT_SECRET
DEFAULT_JWT_SECRET = "super_secret_key_123!"


class Settings(BaseSettings):
    HOST: str = "0.0.0.0"
    PORT: int = 8000
    RELOAD: bool = False
    LOG_LEVEL: str = "info"

    JWT_SECRET: str = DEFAULT_JWT_SECRET
    ACCESS_TOKEN_EXPIRE_MIN: int = 60          # 1 hora de validez
    DATABASE_URL: str = "sqlite+aiosqlite:///./userboard.sqlite3"

    RECENT_USERS_LIMIT: int = 10               # usuarios en la portada
    MIN_PASSWORD_LENGTH: int = 6

    model_config = SettingsConfigDict(env_file=".env", extra="ignore")

    @property
    def uses_default_secret(self) -> bool:
        return self.JWT_SECRET == DEFAULT_JWT_SECRET


settings = Settings()
