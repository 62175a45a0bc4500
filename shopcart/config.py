# shopcart/config.py
import os
from dataclasses import dataclass, field
from typing import List, Optional

from dotenv import load_dotenv
from sqlalchemy.engine import URL

load_dotenv()


def _bool_env(name: str, default: bool = False) -> bool:
    value = os.getenv(name)
    if value is None:
        return default
    return value.strip().lower() in ("1", "true", "yes", "on")


@dataclass
class Settings:
    db_driver: str = "postgresql+asyncpg"
    db_host: Optional[str] = None
    db_user: Optional[str] = None
    db_password: Optional[str] = None
    db_name: Optional[str] = None
    db_port: Optional[int] = None
    database_url: Optional[str] = None
    db_echo: bool = False

    host: str = "0.0.0.0"
    port: int = 5001
    bcrypt_rounds: int = 10
    log_level: str = "INFO"
    cors_origins: List[str] = field(default_factory=lambda: ["*"])

    @property
    def sqlalchemy_url(self):
        """DATABASE_URL wins; otherwise the URL is assembled from the DB_* parts."""
        if self.database_url:
            return self.database_url
        return URL.create(
            self.db_driver,
            username=self.db_user,
            password=self.db_password,
            host=self.db_host,
            port=self.db_port,
            database=self.db_name,
        )


def load_settings() -> Settings:
    # Values are not validated here: a bad or missing DB setting shows up as a
    # connection error when the store is first used.
    port = os.getenv("DB_PORT")
    origins = os.getenv("CORS_ORIGINS", "*")
    return Settings(
        db_driver=os.getenv("DB_DRIVER", "postgresql+asyncpg"),
        db_host=os.getenv("DB_HOST"),
        db_user=os.getenv("DB_USER"),
        db_password=os.getenv("DB_PASSWORD"),
        db_name=os.getenv("DB_NAME"),
        db_port=int(port) if port else None,
        database_url=os.getenv("DATABASE_URL"),
        db_echo=_bool_env("DB_ECHO"),
        host=os.getenv("HOST", "0.0.0.0"),
        port=int(os.getenv("PORT", 5001)),
        bcrypt_rounds=int(os.getenv("BCRYPT_ROUNDS", 10)),
        log_level=os.getenv("LOG_LEVEL", "INFO"),
        cors_origins=[o.strip() for o in origins.split(",") if o.strip()],
    )
