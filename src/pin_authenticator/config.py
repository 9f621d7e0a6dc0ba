"""Application configuration."""

import os
from dataclasses import dataclass
from typing import Literal

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

_ENVIRONMENT = os.getenv("ENVIRONMENT", "local")

DeploymentTarget = Literal["local", "docker", "railway", "production"]


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    supabase_url: str
    supabase_service_key: str
    pim_api_key: str
    pim_api_url: str = "https://master.pinauth.com"
    upload_timeout_seconds: float = Field(default=180.0, gt=0)
    health_timeout_seconds: float = Field(default=10.0, gt=0)
    transmission_log_size: int = Field(default=50, ge=1)
    environment: str = _ENVIRONMENT
    deployment_target: DeploymentTarget = "local"
    host: str | None = None
    port: int = 5000
    static_dir: str | None = None

    model_config = SettingsConfigDict(
        env_file=(f".env.{_ENVIRONMENT}", ".env"),
        extra="ignore",
    )


@dataclass(frozen=True)
class ServerTarget:
    """Where and how the HTTP server should bind."""

    host: str
    port: int
    static_dir: str | None


def resolve_server_target(settings: Settings) -> ServerTarget:
    """Resolve bind address and static assets for the deployment target."""
    default_host = "127.0.0.1" if settings.deployment_target == "local" else "0.0.0.0"  # noqa: S104
    static_dir = settings.static_dir
    if static_dir is None and settings.deployment_target != "local":
        static_dir = "dist/public"
    return ServerTarget(
        host=settings.host or default_host,
        port=settings.port,
        static_dir=static_dir,
    )
