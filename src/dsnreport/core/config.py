"""Application configuration using pydantic-settings with grouped env prefixes."""

from __future__ import annotations

from typing import Literal

from pydantic import Field
from pydantic_settings import BaseSettings


class UploadConfig(BaseSettings):
    """Upload validation limits applied before a DSN file is parsed."""

    model_config = {"env_prefix": "DSNREPORT_UPLOAD_"}

    field_name: str = "dsn"
    max_size_bytes: int = 10 * 1024 * 1024  # 10 MB
    allowed_extensions: list[str] = Field(default_factory=lambda: [".txt"])


class CacheConfig(BaseSettings):
    """Session cache configuration."""

    model_config = {"env_prefix": "DSNREPORT_CACHE_"}

    backend: Literal["memory", "redis"] = "memory"
    session_ttl_seconds: int = 4 * 60 * 60


class RedisConfig(BaseSettings):
    """Redis cache configuration."""

    model_config = {"env_prefix": "DSNREPORT_REDIS_"}

    host: str = "localhost"
    port: int = 6379
    db: int = 0
    decode_responses: bool = True


class ApiConfig(BaseSettings):
    """HTTP API configuration."""

    model_config = {"env_prefix": "DSNREPORT_API_"}

    port: int = Field(default=3000, gt=0, lt=65536)
    cors_origin: str = "http://localhost:5173"


class AppSettings(BaseSettings):
    """Root application settings aggregating all sub-configs."""

    model_config = {"env_prefix": "DSNREPORT_"}

    environment: Literal["development", "production"] = "development"
    log_level: str = "INFO"

    upload: UploadConfig = UploadConfig()
    cache: CacheConfig = CacheConfig()
    redis: RedisConfig = RedisConfig()
    api: ApiConfig = ApiConfig()
