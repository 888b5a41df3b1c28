"""Pydantic models for client configuration."""

from __future__ import annotations

from pydantic import BaseModel, Field, field_validator

from openshift_client.config.constants import DEFAULT_TIMEOUT


class ProxySettings(BaseModel):
    """HTTP proxy handed to the transport at construction."""

    host: str | None = None
    port: int | None = Field(default=None, gt=0, le=65535)
    enabled: bool = False

    @property
    def url(self) -> str | None:
        if not self.enabled or not self.host:
            return None
        if self.port:
            return f"http://{self.host}:{self.port}"
        return f"http://{self.host}"


class ServerProfile(BaseModel):
    """A named broker connection profile."""

    name: str
    url: str = Field(description="Broker base URL, e.g. https://openshift.redhat.com")
    username: str | None = Field(default=None, description="Login (rhlogin)")
    password: str | None = Field(default=None, description="Password")
    token: str | None = Field(default=None, description="Authorization token")
    verify_ssl: bool = Field(default=True, description="Verify SSL certificates")
    timeout: float = Field(
        default=DEFAULT_TIMEOUT, gt=0, le=600, description="Request timeout in seconds",
    )
    proxy: ProxySettings = Field(default_factory=ProxySettings)

    @field_validator("url")
    @classmethod
    def validate_url(cls, v: str) -> str:
        if not v.startswith(("http://", "https://")):
            raise ValueError("URL must start with http:// or https://")
        return v.rstrip("/")

    @property
    def auth_configured(self) -> bool:
        has_basic = (
            self.username is not None and self.password is not None
        )
        return self.token is not None or has_basic


class ClientConfig(BaseModel):
    """Root configuration model."""

    default_profile: str | None = None
    default_format: str = "table"
    profiles: dict[str, ServerProfile] = Field(default_factory=dict)
