from pathlib import Path
from typing import Annotated, List, Literal

import orjson
from pydantic import SecretStr, field_validator
from pydantic_settings import BaseSettings, NoDecode, SettingsConfigDict


_PROJECT_ROOT = Path(__file__).resolve().parents[3]
_ENV_PATH = _PROJECT_ROOT / '.env'
_ENV_FILE = _ENV_PATH if _ENV_PATH.exists() else (_PROJECT_ROOT / '.env.example')


class Settings(BaseSettings):
    model_config = SettingsConfigDict(
        env_file=str(_ENV_FILE),
        env_ignore_empty=True,
        extra='ignore',
    )

    PROJECT_NAME: str = 'Event Booking System'
    VERSION: str = '0.1.0'
    DEBUG: bool = True  # Set to False in production

    # Storage backend: 'sqlalchemy' (PostgreSQL) or 'memory' (single process, dev/test)
    STORAGE_BACKEND: Literal['sqlalchemy', 'memory'] = 'sqlalchemy'

    # Database
    POSTGRES_SERVER: str = 'localhost'
    POSTGRES_USER: str = 'postgres'
    POSTGRES_PASSWORD: SecretStr = SecretStr('postgres')
    POSTGRES_DB: str = 'event_booking'
    POSTGRES_PORT: int = 5432

    # Full async URL override (e.g. sqlite+aiosqlite:///./local.db)
    DATABASE_URL: str = ''

    @property
    def DATABASE_URL_ASYNC(self) -> str:
        if self.DATABASE_URL:
            return self.DATABASE_URL
        password = self.POSTGRES_PASSWORD.get_secret_value()
        return f'postgresql+asyncpg://{self.POSTGRES_USER}:{password}@{self.POSTGRES_SERVER}:{self.POSTGRES_PORT}/{self.POSTGRES_DB}'

    # Database pool
    DB_POOL_SIZE: int = 10
    DB_POOL_MAX_OVERFLOW: int = 10
    DB_POOL_TIMEOUT: int = 30
    DB_POOL_RECYCLE: int = 3600
    DB_POOL_PRE_PING: bool = True
    # Run metadata.create_all on startup (local/dev); production schemas come from Alembic
    DB_CREATE_TABLES_ON_STARTUP: bool = True

    # Booking rules
    MIN_TICKETS_PER_BOOKING: int = 1
    MAX_TICKETS_PER_BOOKING: int = 10

    # Notifications: 'log' keeps a record and logs, 'webhook' POSTs to NOTIFICATION_WEBHOOK_URL
    NOTIFICATION_BACKEND: Literal['log', 'webhook'] = 'log'
    NOTIFICATION_WEBHOOK_URL: str = ''
    NOTIFICATION_TIMEOUT_SECONDS: float = 5.0
    NOTIFICATION_SENDER: str = 'noreply@eventify.com'
    NOTIFICATION_LOG_HISTORY_SIZE: int = 1000

    # CORS
    # Comma separated (a,b) or a JSON list; NoDecode hands the raw string to the validator
    BACKEND_CORS_ORIGINS: Annotated[List[str], NoDecode] = []

    @field_validator('BACKEND_CORS_ORIGINS', mode='before')
    @classmethod
    def assemble_cors_origins(cls, v: str | List[str]) -> List[str]:
        if isinstance(v, list):
            return v
        if not isinstance(v, str) or not v.strip():
            return []
        if v.lstrip().startswith('['):
            return [str(origin) for origin in orjson.loads(v)]
        return [origin.strip() for origin in v.split(',') if origin.strip()]


settings = Settings()  # type: ignore
