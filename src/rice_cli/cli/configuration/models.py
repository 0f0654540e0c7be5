"""Configuration models for the Rice services."""

from typing import Any

from pydantic import (
    BaseModel,
    ConfigDict,
    Field,
    SecretStr,
    ValidationInfo,
    field_validator,
    model_validator,
)


class ServiceConfig(BaseModel):
    """Connection settings for one Rice service."""

    model_config = ConfigDict(extra="ignore")

    enabled: bool = False
    url: str | None = None
    token: SecretStr | None = None

    @field_validator("*", mode="before")
    @classmethod
    def _empty_as_unset(cls, value: Any, info: ValidationInfo) -> Any:
        """Treat empty strings as "not set"."""
        if info.field_name == "enabled":
            return value
        if isinstance(value, SecretStr):
            value = value.get_secret_value()
        if isinstance(value, str):
            value = value.strip()
            return value or None
        return value

    @model_validator(mode="after")
    def _check_enabled_fields(self) -> "ServiceConfig":
        """Require a URL for enabled services and clear disabled ones."""
        if self.enabled:
            if not self.url:
                raise ValueError("url is required when the service is enabled")
            return self
        for name in type(self).model_fields:
            if name != "enabled":
                setattr(self, name, None)
        return self

    def token_value(self) -> str | None:
        """Return the raw token for persistence and authentication."""
        if self.token is None:
            return None
        return self.token.get_secret_value()


class StorageConfig(ServiceConfig):
    """Rice Storage settings."""

    user: str | None = None
    http_port: int | None = Field(default=None, ge=1, le=65535)


class StateConfig(ServiceConfig):
    """Rice State (AI agent memory) settings."""

    run_id: str | None = None


class RiceConfig(BaseModel):
    """Configuration for both Rice services."""

    model_config = ConfigDict(extra="ignore")

    storage: StorageConfig = Field(default_factory=StorageConfig)
    state: StateConfig = Field(default_factory=StateConfig)

    def service(self, name: str) -> ServiceConfig:
        """Return a service configuration by name."""
        return getattr(self, name)

    def any_enabled(self) -> bool:
        """Return true when at least one service is enabled."""
        return self.storage.enabled or self.state.enabled
