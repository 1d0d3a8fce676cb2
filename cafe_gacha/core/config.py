from pathlib import Path
from typing import Literal

from dotenv import load_dotenv
from pydantic_settings import BaseSettings


class Config(BaseSettings):
    db_url: str = "sqlite+aiosqlite:///./cafe_gacha.db"
    env: Literal["prod", "dev"] = "prod"

    # Catalog
    catalog_path: Path | None = None
    """Overrides the bundled catalog JSON when set"""

    # Schema management; disable when alembic owns the schema
    create_tables: bool = True

    # Logging
    log_level: str = "INFO"
    log_file: str = "backend.log"

    @property
    def is_dev(self) -> bool:
        return self.env == "dev"


load_dotenv()
settings = Config()
