"""Application settings and validation."""

import os
from pathlib import Path

BASE = Path(__file__).resolve().parent.parent
DEFAULT_DB_URL = f"sqlite:///{BASE / 'app.db'}"


class Settings:
    ENV: str
    DATABASE_URL: str
    LOG_LEVEL: str
    ALLOW_DEV_CORS: bool
    ALLOW_SQLITE_IN_PROD: bool
    SQL_ECHO: bool

    def __init__(self):
        self.ENV = os.getenv("ENV", "dev").lower()
        self.DATABASE_URL = os.getenv("DATABASE_URL", DEFAULT_DB_URL)
        self.LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO").upper()
        self.ALLOW_DEV_CORS = os.getenv("ALLOW_DEV_CORS", "true").lower() == "true"
        self.ALLOW_SQLITE_IN_PROD = os.getenv("ALLOW_SQLITE_IN_PROD", "false").lower() == "true"
        self.SQL_ECHO = os.getenv("SQL_ECHO", "false").lower() == "true"
        self._validate()

    def _validate(self):
        if self.ENV != "dev" and not self.ALLOW_SQLITE_IN_PROD and self.DATABASE_URL == DEFAULT_DB_URL:
            raise RuntimeError("DATABASE_URL must be set to a non-default value in non-dev environments")


settings = Settings()
