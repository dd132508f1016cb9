"""Runtime settings, read from the environment (and a local ``.env`` file)."""

from __future__ import annotations

from pathlib import Path
from typing import Literal

from pydantic import Field, SecretStr, field_validator, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

# When installed in editable mode the project root is the repo root.
DEFAULT_DATA_DIR = Path(__file__).resolve().parents[3] / "data"


class Settings(BaseSettings):
    """Backend selection and connection settings.

    ``CATALOG_BACKEND`` picks the adapter; the Cosmos backend additionally
    needs ``COSMOS_ENDPOINT`` and ``COSMOS_KEY``.
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        env_ignore_empty=True,
        case_sensitive=False,
        extra="ignore",
        frozen=True,
        populate_by_name=True,
    )

    backend: Literal["json", "cosmos"] = Field(
        "json", validation_alias="catalog_backend"
    )
    data_dir: Path = Field(
        DEFAULT_DATA_DIR, validation_alias="catalog_data_dir"
    )

    # Cosmos DB
    cosmos_endpoint: str | None = None
    cosmos_key: SecretStr | None = None
    cosmos_database: str = "catalog"
    cosmos_container: str = "products"

    @field_validator("backend", mode="before")
    @classmethod
    def normalize_backend(cls, v: object) -> object:
        return v.strip().lower() if isinstance(v, str) else v

    @model_validator(mode="after")
    def require_cosmos_credentials(self) -> Settings:
        if self.backend == "cosmos" and not (self.cosmos_endpoint and self.cosmos_key):
            raise ValueError(
                "COSMOS_ENDPOINT and COSMOS_KEY are required for the cosmos backend"
            )
        return self
