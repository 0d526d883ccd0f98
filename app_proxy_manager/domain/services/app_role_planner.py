"""Planning of safe app role updates."""

from __future__ import annotations

from collections.abc import Sequence

from ..entities import AppRole, AppRoleDeclaration
from ..exceptions import DuplicateAppRoleError

# Keeps group-wide assignments made before custom roles existed working.
BASELINE_USER_ROLE = AppRole(
    id="18d14569-c3bd-439b-9a66-3a2aee01d14f",
    value="",
    display_name="User",
    description="User",
    allowed_member_types=("User",),
    is_enabled=True,
)


def effective_app_roles(declared: Sequence[AppRoleDeclaration]) -> list[AppRole]:
    """
    Build the full role list an application should carry.

    The baseline ``User`` role always comes first, followed by every declared
    role, enabled and keeping its declared id.

    Raises:
        DuplicateAppRoleError: If two roles share an id or a non-empty value.
    """
    roles = [BASELINE_USER_ROLE, *(declaration.to_app_role() for declaration in declared)]

    seen_ids: set[str] = set()
    seen_values: set[str] = set()
    for role in roles:
        if role.id in seen_ids:
            msg = f"Duplicate app role id {role.id}"
            raise DuplicateAppRoleError(msg)
        seen_ids.add(role.id)
        if role.value:
            if role.value in seen_values:
                msg = f"Duplicate app role value {role.value!r}"
                raise DuplicateAppRoleError(msg)
            seen_values.add(role.value)

    return roles


def disable_all(current: Sequence[AppRole]) -> list[AppRole]:
    """Return every role unchanged except for `isEnabled`, which is cleared."""
    return [role.with_enabled(False) for role in current]


def removed_role_ids(current: Sequence[AppRole], desired: Sequence[AppRole]) -> list[str]:
    """Ids of stored roles that the desired list no longer contains."""
    desired_ids = {role.id for role in desired}
    return [role.id for role in current if role.id not in desired_ids]


def requires_disable(current: Sequence[AppRole], desired: Sequence[AppRole]) -> bool:
    """
    Check if roles must be disabled before the desired list can be written.

    Only removals need it: the directory refuses to delete an enabled role,
    while additions and edits go through directly.
    """
    return bool(removed_role_ids(current, desired))
