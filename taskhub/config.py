from pydantic_settings import BaseSettings
from dotenv import load_dotenv

load_dotenv()

class Settings(BaseSettings):
    database_url: str = "sqlite+aiosqlite:///./taskhub.db"
    AUTO_CREATE_SCHEMA: bool = True

    # Security
    SECRET_KEY: str = "something"
    ALGORITHM: str = "HS256"
    ACCESS_TOKEN_EXPIRE_MINUTES: int = 30

    # Logging
    LOG_LEVEL: str = "INFO"
    ERROR_LOG_FILE: str | None = None

    CORS_ORIGIN_REGEX: str = "https?://.*"

    class Config:
        env_file = ".env"

    @property
    def async_database_url(self) -> str:
        # Ensure we use the async driver
        return self.database_url.replace("postgresql://", "postgresql+asyncpg://", 1)

settings = Settings()
