# app/config.py
import os
from pathlib import Path
from functools import lru_cache
from urllib.parse import urlparse

BASE_DIR = Path(__file__).resolve().parent


class Config:
    def __init__(self):
        # Centralized configuration retrieval
        self._validate_critical_configs()

    def _validate_critical_configs(self):
        """Validate critical configuration parameters"""
        critical_configs = [
            'MONGO_CONNECTION',
            'COOKIE_SECRET',
        ]

        for config in critical_configs:
            if not os.getenv(config):
                raise ValueError(f"Critical configuration {config} is not set in environment")

    @property
    def MONGO_CONNECTION(self) -> str:
        """Document store connection string"""
        url = os.getenv("MONGO_CONNECTION")
        if not url:
            raise ValueError("MONGO_CONNECTION is not set in environment")
        return url

    @property
    def MONGO_DB_NAME(self) -> str:
        """
        Database name. Falls back to the database named in the
        connection string, then to a fixed default.
        """
        name = os.getenv("MONGO_DB_NAME")
        if name:
            return name
        path = urlparse(self.MONGO_CONNECTION).path.lstrip("/")
        return path or "people_directory"

    @property
    def COOKIE_SECRET(self) -> str:
        secret = os.getenv("COOKIE_SECRET")
        if not secret:
            raise ValueError("COOKIE_SECRET is not set in environment")
        return secret

    @property
    def PORT(self) -> int:
        return int(os.getenv("PORT", "8000"))

    @property
    def APP_ENV(self) -> str:
        return os.getenv("APP_ENV", "development").lower()

    @property
    def is_production(self) -> bool:
        return self.APP_ENV == "production"

    @property
    def APP_NAME(self) -> str:
        return os.getenv("APP_NAME", "People Directory")

    @property
    def STATIC_DIR(self) -> Path:
        return Path(os.getenv("STATIC_DIR", str(BASE_DIR / "static")))

    @property
    def UPLOAD_DIR(self) -> Path:
        """Root folder for uploaded files, one subfolder per upload kind"""
        return Path(os.getenv("UPLOAD_DIR", str(self.STATIC_DIR / "uploads")))

    @property
    def TEMPLATES_DIR(self) -> Path:
        return BASE_DIR / "templates"

    @property
    def AVATAR_MAX_BYTES(self) -> int:
        return int(os.getenv("AVATAR_MAX_BYTES", "10000000"))

    @property
    def LOG_LEVEL(self) -> str:
        return os.getenv("LOG_LEVEL", "INFO").upper()

    def validate(self) -> bool:
        """
        Comprehensive configuration validation
        Useful for pre-deployment checks
        """
        try:
            _ = [
                self.MONGO_CONNECTION,
                self.COOKIE_SECRET,
                self.PORT,
                self.AVATAR_MAX_BYTES,
            ]
            return True
        except ValueError:
            return False


@lru_cache(maxsize=1)
def load_config() -> Config:
    """
    Cached configuration loader for the process entry point.
    Request handlers get their configuration from the application context.
    """
    config = Config()
    if not config.validate():
        raise RuntimeError("Configuration validation failed")
    return config
