"""Settings for the family book tools.

Loaded from environment variables prefixed with GIAPHA_ (or a .env file).
Command-line options override them.
"""

from pathlib import Path

from dotenv import load_dotenv
from pydantic_settings import BaseSettings, SettingsConfigDict

load_dotenv()


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_prefix="GIAPHA_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # Report
    family_name: str = "Hoàng"
    locale: str = "vi"
    # Surname marking lineage members on GEDCOM import (defaults to family_name)
    lineage_surname: str | None = None

    # Paths
    db_path: Path = Path("./family_tree.db")
    output_dir: Path = Path("./output")

    def get_lineage_surname(self) -> str:
        return self.lineage_surname or self.family_name


settings = Settings()
