"""App role entities."""

from __future__ import annotations

from dataclasses import dataclass, field, replace
from typing import Any, Self


@dataclass(frozen=True, slots=True)
class AppRole:
    """An app role definition as stored on an Entra ID application."""

    id: str
    value: str
    display_name: str
    description: str
    allowed_member_types: tuple[str, ...] = ("User",)
    is_enabled: bool = True

    def with_enabled(self, enabled: bool) -> Self:
        """Return the same role with a different enabled flag."""
        return replace(self, is_enabled=enabled)

    def to_graph(self) -> dict[str, Any]:
        """Serialize to the Graph API `appRole` shape."""
        return {
            "allowedMemberTypes": list(self.allowed_member_types),
            "description": self.description,
            "displayName": self.display_name,
            "id": self.id,
            "isEnabled": self.is_enabled,
            "value": self.value,
        }

    @classmethod
    def from_graph(cls, raw: dict[str, Any]) -> Self:
        """Build from a Graph API `appRole` item."""
        return cls(
            id=raw["id"],
            value=raw.get("value") or "",
            display_name=raw.get("displayName") or "",
            description=raw.get("description") or "",
            allowed_member_types=tuple(raw.get("allowedMemberTypes") or ()),
            is_enabled=bool(raw.get("isEnabled", True)),
        )


@dataclass(frozen=True, slots=True)
class AppRoleDeclaration:
    """A declared app role together with the groups that should hold it."""

    id: str
    value: str
    display_name: str
    description: str
    groups: tuple[str, ...] = field(default_factory=tuple)

    def to_app_role(self) -> AppRole:
        """The enabled role definition this declaration stands for."""
        return AppRole(
            id=self.id,
            value=self.value,
            display_name=self.display_name,
            description=self.description,
        )
