"""Caller authentication settings.

Token issuance lives outside this service. The settings only describe how
an incoming bearer token maps onto an admin or regular caller.
"""

from __future__ import annotations

import hmac
from typing import Any, Literal

from pydantic import Field, SecretStr, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from .yaml_sources import create_auth_yaml_source

DevPersona = Literal["admin", "user", "anonymous"]

DEFAULT_DEV_PERSONAS: dict[str, dict[str, Any]] = {
    "admin": {
        "user_id": "dev-admin-001",
        "roles": ["admin"],
    },
    "user": {
        "user_id": "dev-user-001",
        "roles": ["user"],
    },
}


class AuthSettings(BaseSettings):
    """Authentication settings.

    Environment variables use AUTH_ prefix.
    Example: AUTH_ADMIN_TOKENS='["s3cr3t"]'
    """

    token_header: str = Field(
        default="Authorization",
        description="HTTP header containing the token",
    )
    token_scheme: str = Field(
        default="Bearer",
        description="Token authentication scheme",
    )
    admin_tokens: list[SecretStr] = Field(
        default_factory=list,
        description="Bearer tokens that identify administrators",
    )
    user_tokens: list[SecretStr] = Field(
        default_factory=list,
        description="Bearer tokens that identify regular users",
    )

    # Development convenience
    dev_persona: DevPersona | None = Field(
        default=None,
        description=(
            "Persona assumed when no token is sent (admin|user|anonymous). "
            "Ignored in production."
        ),
    )

    model_config = SettingsConfigDict(
        env_prefix="AUTH_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        frozen=True,
        extra="ignore",
        env_ignore_empty=True,
    )

    @classmethod
    def settings_customise_sources(
        cls, settings_cls, init_settings, env_settings, dotenv_settings, file_secret_settings
    ):
        """Customize settings source precedence: init > yaml > env > dotenv > secrets."""
        return (
            init_settings,
            create_auth_yaml_source(settings_cls),
            env_settings,
            dotenv_settings,
            file_secret_settings,
        )

    @field_validator("admin_tokens", "user_tokens", mode="after")
    @classmethod
    def _drop_blank_tokens(cls, v: list[SecretStr]) -> list[SecretStr]:
        """Blank tokens would match an empty header value."""
        return [token for token in v if token.get_secret_value().strip()]

    def role_for_token(self, token: str) -> str | None:
        """Return "admin", "user" or None for an unknown token.

        Every configured token is compared in constant time.
        """
        presented = token.encode()
        if _matches_any(self.admin_tokens, presented):
            return "admin"
        if _matches_any(self.user_tokens, presented):
            return "user"
        return None


def _matches_any(tokens: list[SecretStr], presented: bytes) -> bool:
    matched = False
    for t in tokens:
        matched |= hmac.compare_digest(t.get_secret_value().encode(), presented)
    return matched
