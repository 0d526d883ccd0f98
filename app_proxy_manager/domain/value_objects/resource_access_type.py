"""Resource access type value object."""

from enum import StrEnum


class ResourceAccessType(StrEnum):
    """Kind of permission requested from a resource application."""

    ROLE = "Role"
    SCOPE = "Scope"

    def __str__(self) -> str:
        return self.value
