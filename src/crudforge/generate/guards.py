"""
Guard resolution.

Maps an auth level to the guard token that must wrap an operation. The
mapping is a pure function of the level string and the naming scheme.
"""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, field_validator

from crudforge.core.ir import AuthLevel
from crudforge.core.strings import pascal_case

ROLE_PLACEHOLDER = "{role}"


class GuardNaming(BaseModel):
    """
    Guard token naming scheme.

    Attributes:
        user: Token for the authenticated-user check
        admin: Token for the authenticated-admin check
        custom: Template for custom roles, ``{role}`` is the PascalCased role
    """

    user: str = "GqlAuthGuard"
    admin: str = "GqlAuthAdminGuard"
    custom: str = "GqlAuth{role}Guard"

    model_config = ConfigDict(frozen=True)

    @field_validator("custom")
    @classmethod
    def validate_custom(cls, v: str) -> str:
        if ROLE_PLACEHOLDER not in v:
            raise ValueError(f"custom guard template must contain {ROLE_PLACEHOLDER}")
        return v

    def custom_guard(self, role: str) -> str:
        """Token for a custom role name."""
        return self.custom.replace(ROLE_PLACEHOLDER, role)


DEFAULT_GUARD_NAMING = GuardNaming()


def guard_for(level: str | None, naming: GuardNaming = DEFAULT_GUARD_NAMING) -> str | None:
    """
    Resolve the guard token for an auth level.

    Args:
        level: Auth level; missing or blank means ``admin``
        naming: Guard naming scheme

    Returns:
        None for ``public``, otherwise the guard token

    Examples:
        >>> guard_for("public") is None
        True
        >>> guard_for("user")
        'GqlAuthGuard'
        >>> guard_for("content_editor")
        'GqlAuthContentEditorGuard'
    """
    if level is None or not level.strip():
        return naming.admin

    well_known = AuthLevel.lookup(level.strip())
    if well_known is AuthLevel.PUBLIC:
        return None
    if well_known is AuthLevel.USER:
        return naming.user
    if well_known is AuthLevel.ADMIN:
        return naming.admin

    role = pascal_case(level)
    if not role:
        # Nothing usable to name a guard after
        return naming.admin
    return naming.custom_guard(role)
