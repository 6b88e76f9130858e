# app/context.py
from dataclasses import dataclass

from fastapi.templating import Jinja2Templates

from app.config import Config
from app.database.connection import DatabaseManager
from app.utils.uploader import Uploader


@dataclass
class AppContext:
    """Everything request handlers share, built once by create_app()."""

    config: Config
    database: DatabaseManager
    templates: Jinja2Templates
    avatar_uploader: Uploader

    @classmethod
    def build(cls, config: Config) -> "AppContext":
        return cls(
            config=config,
            database=DatabaseManager(config),
            templates=Jinja2Templates(directory=str(config.TEMPLATES_DIR)),
            avatar_uploader=Uploader(
                config.UPLOAD_DIR,
                "avatars",
                ["image/jpeg", "image/jpg", "image/png"],
                config.AVATAR_MAX_BYTES,
                "Only .jpg, jpeg or .png format allowed!",
            ),
        )
