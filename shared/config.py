"""
Shared configuration management for the gateway token authorizer.
"""

from typing import Literal, Optional

from pydantic import AliasChoices, Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class BaseConfig(BaseSettings):
    """Base configuration class with common settings.

    Values come from ``AUTHZ_``-prefixed environment variables (or a local
    ``.env`` file) and are read once at process start.
    """

    model_config = SettingsConfigDict(
        env_prefix="AUTHZ_",
        env_file=".env",
        case_sensitive=False,
        extra="ignore",
        populate_by_name=True,
    )
    
    # Environment
    env: str = "local"
    log_level: str = "info"
    
    # Key-publishing endpoint. AUTH0_JWKS_URL is what existing deployments export.
    jwks_url: str = Field(
        default="http://localhost:8080/.well-known/jwks.json",
        validation_alias=AliasChoices("AUTHZ_JWKS_URL", "AUTH0_JWKS_URL"),
    )
    jwks_timeout_seconds: float = Field(default=5.0, gt=0)
    
    # Token claim checks
    token_audience: Optional[str] = None
    token_issuer: Optional[str] = None
    token_leeway_seconds: int = Field(default=0, ge=0)
    
    # Certificate cache: "keyed" caches per kid, "single" keeps one global slot
    certificate_cache_mode: Literal["keyed", "single"] = "keyed"
    
    # Policy document
    policy_resource: str = "*"
    
    # Observability
    enable_metrics: bool = True


class ServiceConfig(BaseConfig):
    """Service-specific configuration."""
    
    service_name: str
    port: int
    host: str = "0.0.0.0"
    
    def __init__(self, service_name: str, port: int, **kwargs):
        super().__init__(service_name=service_name, port=port, **kwargs)


def get_config(service_name: str, port: int) -> ServiceConfig:
    """Get configuration for a specific service."""
    return ServiceConfig(service_name=service_name, port=port)
