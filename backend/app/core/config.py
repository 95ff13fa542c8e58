import os
from functools import lru_cache
from pathlib import Path

from pydantic import Field, ValidationError, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

DEFAULT_ENV = "development"


class ConfigurationError(Exception):
    """Raised when the service configuration cannot be loaded."""


class Settings(BaseSettings):
    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
        frozen=True,
    )

    env: str = Field(default=DEFAULT_ENV, alias="MIRAIO_ENV")
    debug: bool = Field(default=False, alias="DEBUG")

    host: str = Field(default="0.0.0.0", alias="MIRAIO_HOST")
    port: int = Field(default=5000, alias="MIRAIO_PORT")
    log_dir: Path = Field(default=Path("/var/log/miraio"), alias="MIRAIO_LOG_DIR")

    minio_endpoint: str = Field(default="localhost:9000", alias="MINIO_ENDPOINT")
    minio_access_key: str = Field(..., alias="MINIO_ACCESS_KEY")
    minio_secret_key: str = Field(..., alias="MINIO_SECRET_KEY")
    minio_use_ssl: bool = Field(default=False, alias="MINIO_USE_SSL")
    minio_region: str = Field(default="us-east-1", alias="MINIO_REGION")
    minio_bucket: str = Field(..., alias="MINIO_BUCKET")
    minio_public_url: str = Field(..., alias="MINIO_PUBLIC_URL")

    @field_validator("minio_use_ssl", mode="before")
    @classmethod
    def _parse_use_ssl(cls, value: object) -> bool:
        # Only the literal "true" turns TLS on.
        if isinstance(value, str):
            return value == "true"
        return bool(value)


def resolve_env_file(env: str | None = None, base_dir: Path | None = None) -> Path:
    """Pick ``.env.<env>`` when present, otherwise fall back to ``.env``."""
    env = env or os.environ.get("MIRAIO_ENV") or DEFAULT_ENV
    base = base_dir or Path.cwd()
    candidate = base / f".env.{env}"
    if candidate.is_file():
        return candidate
    return base / ".env"


def load_settings(env_file: Path | None = None) -> Settings:
    env_file = env_file or resolve_env_file()
    try:
        return Settings(_env_file=env_file)
    except ValidationError as exc:
        raise ConfigurationError(f"Invalid configuration ({env_file}): {exc}") from exc


@lru_cache
def get_settings() -> Settings:
    return load_settings()
