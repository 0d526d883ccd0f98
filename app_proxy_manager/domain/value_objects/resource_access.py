"""Resource access value object."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Self

from .resource_access_type import ResourceAccessType


@dataclass(frozen=True, slots=True)
class ResourceAccess:
    """A single permission requested from a resource application."""

    id: str
    type: ResourceAccessType

    def to_graph(self) -> dict[str, str]:
        """Serialize to the Graph API `resourceAccess` item shape."""
        return {"id": self.id, "type": self.type.value}

    @classmethod
    def from_graph(cls, raw: dict[str, Any]) -> Self:
        """Build from a Graph API `resourceAccess` item."""
        return cls(id=raw["id"], type=ResourceAccessType(raw["type"]))
