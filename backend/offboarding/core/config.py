import sys

from pydantic_settings import BaseSettings
from sqlalchemy.engine import URL

_ENV_FILE = None if "pytest" in sys.modules else ".env"


class Settings(BaseSettings):
    APP_VERSION: str = "0.1.0"
    HOST: str = "0.0.0.0"
    PORT: int = 3100
    LOG_LEVEL: str = "INFO"

    DB_USER: str = "postgres"
    DB_PASSWORD: str = "admin123"
    DB_HOST: str = "postgres"
    DB_PORT: int = 5432
    DB_NAME: str = "offboarding_db"
    # Takes precedence over the DB_* parts, e.g. sqlite+aiosqlite:///./offboarding.db
    DATABASE_URL: str = ""

    DB_POOL_SIZE: int = 20
    DB_POOL_TIMEOUT: float = 5.0
    DB_IDLE_TIMEOUT: int = 30
    DB_CONNECT_TIMEOUT: float = 5.0
    DB_COMMAND_TIMEOUT: float = 30.0

    DB_CONNECT_ATTEMPTS: int = 5
    DB_CONNECT_RETRY_DELAY: float = 5.0
    DB_CONNECT_BACKOFF: float = 1.0
    SHUTDOWN_TIMEOUT: float = 10.0

    CORS_ORIGINS: list[str] = [
        "http://localhost:8200",
        "http://localhost:8201",
        "http://127.0.0.1:5501",
        "http://127.0.0.1:5503",
    ]

    model_config = {
        "env_file": _ENV_FILE,
        "env_file_encoding": "utf-8",
        "case_sensitive": True,
    }

    @property
    def database_url(self) -> str:
        if self.DATABASE_URL:
            return self.DATABASE_URL
        return URL.create(
            "postgresql+asyncpg",
            username=self.DB_USER,
            password=self.DB_PASSWORD,
            host=self.DB_HOST,
            port=self.DB_PORT,
            database=self.DB_NAME,
        ).render_as_string(hide_password=False)


settings = Settings()
