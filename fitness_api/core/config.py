# fitness_api/core/config.py
import os
from functools import lru_cache
from typing import ClassVar, List

from dotenv import load_dotenv
from pydantic import BaseModel, Field

from fitness_api.core.errors import ConfigurationError

load_dotenv()


def _default_database_url() -> str:
    data_dir = os.path.abspath(os.getenv("DATA_DIR", "./data"))
    os.makedirs(data_dir, exist_ok=True)
    return os.getenv("DATABASE_URL", f"sqlite:///{os.path.join(data_dir, 'fitness.db')}")


def _split_csv(raw: str) -> List[str]:
    return [part.strip() for part in raw.split(",") if part.strip()]


class Settings(BaseModel):
    DATA_DIR: ClassVar[str] = os.path.abspath(os.getenv("DATA_DIR", "./data"))

    DATABASE_URL: str = Field(default_factory=_default_database_url)
    SECRET_KEY: str = Field(default_factory=lambda: os.getenv("SECRET_KEY", ""))
    REFRESH_SECRET_KEY: str = Field(default_factory=lambda: os.getenv("REFRESH_SECRET_KEY", ""))
    ALGORITHM: str = Field(default_factory=lambda: os.getenv("JWT_ALGORITHM", "HS256"))
    ACCESS_TOKEN_EXPIRE_MINUTES: int = Field(default_factory=lambda: int(os.getenv("ACCESS_TOKEN_EXPIRE_MINUTES", "15")))
    REFRESH_TOKEN_EXPIRE_DAYS: int = Field(default_factory=lambda: int(os.getenv("REFRESH_TOKEN_EXPIRE_DAYS", "7")))

    # argon2 cost; defaults land above 100ms per hash on a typical server core
    PASSWORD_HASH_TIME_COST: int = Field(default_factory=lambda: int(os.getenv("PASSWORD_HASH_TIME_COST", "3")))
    PASSWORD_HASH_MEMORY_COST: int = Field(default_factory=lambda: int(os.getenv("PASSWORD_HASH_MEMORY_COST", "65536")))

    DEFAULT_CURRENCY: str = Field(default_factory=lambda: os.getenv("DEFAULT_CURRENCY", "LSL"))
    CORS_ORIGINS: List[str] = Field(default_factory=lambda: _split_csv(os.getenv("CORS_ORIGINS", "*")))
    LOG_LEVEL: str = Field(default_factory=lambda: os.getenv("LOG_LEVEL", "INFO"))
    DB_BOOTSTRAP: str = Field(default_factory=lambda: os.getenv("DB_BOOTSTRAP", "migrate"))
    SEED_PLANS: bool = Field(default_factory=lambda: os.getenv("SEED_PLANS", "1") not in {"0", "false", "False", ""})
    ENABLE_METRICS: bool = Field(default_factory=lambda: os.getenv("ENABLE_METRICS", "1") not in {"0", "false", "False", ""})

    def validate_secrets(self) -> None:
        """Refuse to start without two distinct signing secrets."""
        if not self.SECRET_KEY or not self.SECRET_KEY.strip():
            raise ConfigurationError("SECRET_KEY is not configured")
        if not self.REFRESH_SECRET_KEY or not self.REFRESH_SECRET_KEY.strip():
            raise ConfigurationError("REFRESH_SECRET_KEY is not configured")
        if self.SECRET_KEY == self.REFRESH_SECRET_KEY:
            raise ConfigurationError("SECRET_KEY and REFRESH_SECRET_KEY must differ")


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    return Settings()
