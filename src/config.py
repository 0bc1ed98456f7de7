"""App settings loaded from environment variables or a .env file."""

from functools import lru_cache
from pathlib import Path

from pydantic import AliasChoices, Field
from pydantic_settings import BaseSettings, SettingsConfigDict

BASE_DIR = Path(__file__).resolve().parents[1]


class Settings(BaseSettings):
    model_config = SettingsConfigDict(
        env_prefix="RECIPE_CTF_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # ---- server ----
    HOST: str = "0.0.0.0"
    # the bare PORT variable is accepted too, hosting platforms set it
    PORT: int = Field(
        default=8080,
        validation_alias=AliasChoices("RECIPE_CTF_PORT", "PORT"),
    )
    LOG_LEVEL: str = "INFO"

    # ---- resources ----
    ASSETS_DIR: Path = BASE_DIR / "assets"
    TEMPLATES_DIR: Path = BASE_DIR / "templates"
    USERS_CSV: str = "users.csv"
    RECIPES_FILE: str = "recipes.json"

    # ---- challenge ----
    FLAG_FILENAME: str = "flag.zip"
    DOWNLOAD_RECIPE_ID: int = 13
    PRIVILEGED_USER: str = "kanmu"

    @property
    def users_csv_path(self) -> Path:
        return self.ASSETS_DIR / self.USERS_CSV

    @property
    def flag_path(self) -> Path:
        return self.ASSETS_DIR / self.FLAG_FILENAME


@lru_cache
def get_settings() -> Settings:
    return Settings()
