"""Merge of an application's `requiredResourceAccess` list."""

from __future__ import annotations

from collections.abc import Sequence
from typing import Any

from ..value_objects import ResourceAccess


def merge_required_resource_access(
    current: Sequence[dict[str, Any]],
    resource_app_id: str,
    desired: Sequence[ResourceAccess],
) -> list[dict[str, Any]]:
    """
    Compute the new `requiredResourceAccess` list for one resource application.

    Entries for other resources are passed through untouched. The first entry
    for ``resource_app_id`` has its `resourceAccess` replaced by ``desired``;
    when there is none a new entry is appended. Repeated permissions in
    ``desired`` are sent once. ``current`` is not mutated.

    An empty ``desired`` leaves the list as it is: permissions for a resource
    are never cleared entirely.

    Args:
        current: The application's current `requiredResourceAccess` list.
        resource_app_id: App id of the resource being reconciled.
        desired: Resolved permissions wanted on that resource.

    Returns:
        The list to PATCH onto the application.
    """
    merged = list(current)
    if not desired:
        return merged

    resource_access = [entry.to_graph() for entry in dict.fromkeys(desired)]

    for index, entry in enumerate(merged):
        if entry.get("resourceAppId") == resource_app_id:
            merged[index] = {**entry, "resourceAccess": resource_access}
            return merged

    merged.append({"resourceAppId": resource_app_id, "resourceAccess": resource_access})
    return merged
