"""Caller identity schemas."""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field

ADMIN_ROLE = "admin"


class CallerIdentity(BaseModel):
    """Who is calling.

    Settings operations only care whether the caller is an administrator;
    ``user_id`` is recorded in audit columns and log context.
    """

    user_id: str | None = Field(
        default=None, max_length=255, description="Caller id, None for anonymous callers"
    )
    roles: list[str] = Field(default_factory=list, description="Roles granted to the caller")

    model_config = ConfigDict(frozen=True)

    @property
    def is_admin(self) -> bool:
        return ADMIN_ROLE in self.roles

    @property
    def is_anonymous(self) -> bool:
        return self.user_id is None

    @classmethod
    def anonymous(cls) -> CallerIdentity:
        return cls()

    @classmethod
    def admin(cls, user_id: str = "admin") -> CallerIdentity:
        return cls(user_id=user_id, roles=[ADMIN_ROLE])
