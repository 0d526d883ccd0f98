"""Tests for ResourceAccessReconciler."""

from __future__ import annotations

import pytest
from directory_mock import InMemoryDirectory

from app_proxy_manager.application.exceptions import DirectoryOperationError
from app_proxy_manager.application.use_cases import ResourceAccessReconciler
from app_proxy_manager.domain.value_objects import MICROSOFT_GRAPH_APP_ID, PermissionCatalog

OTHER_ENTRY = {
    "resourceAppId": "00000002-0000-0ff1-ce00-000000000000",
    "resourceAccess": [{"id": "x", "type": "Scope"}],
}


@pytest.fixture
def reconciler(directory: InMemoryDirectory, graph_catalog: PermissionCatalog) -> ResourceAccessReconciler:
    """Reconciler with the Graph catalog loaded in the directory."""
    directory.catalogs[MICROSOFT_GRAPH_APP_ID] = graph_catalog
    return ResourceAccessReconciler(directory)


class TestResourceAccessReconciler:
    """Tests for ResourceAccessReconciler."""

    @pytest.mark.asyncio
    async def test_group_create_and_offline_access(
        self, directory: InMemoryDirectory, reconciler: ResourceAccessReconciler
    ) -> None:
        """A role and a scope end up in one Graph entry, role first."""
        ids = directory.add_application("app", requiredResourceAccess=[OTHER_ENTRY])

        written = await reconciler.reconcile(ids.application_id, ["Group.Create", "offline_access"])

        assert len(written) == 2
        stored = directory.applications[ids.application_id]["requiredResourceAccess"]
        assert stored[0] == OTHER_ENTRY
        assert stored[1] == {
            "resourceAppId": MICROSOFT_GRAPH_APP_ID,
            "resourceAccess": [
                {"id": "bf7b1a76-6e77-406b-b258-bf5c7720e98f", "type": "Role"},
                {"id": "7427e0e9-2fba-42fe-b0c0-848c9e6a8182", "type": "Scope"},
            ],
        }

    @pytest.mark.asyncio
    async def test_rerun_is_stable(self, directory: InMemoryDirectory, reconciler: ResourceAccessReconciler) -> None:
        """Reconciling twice leaves the same list."""
        ids = directory.add_application("app")
        await reconciler.reconcile(ids.application_id, ["User.Read"])
        first = directory.applications[ids.application_id]["requiredResourceAccess"]
        await reconciler.reconcile(ids.application_id, ["User.Read"])
        assert directory.applications[ids.application_id]["requiredResourceAccess"] == first

    @pytest.mark.asyncio
    async def test_no_permissions_is_noop(
        self, directory: InMemoryDirectory, reconciler: ResourceAccessReconciler
    ) -> None:
        """Nothing is fetched or written without declared permissions."""
        ids = directory.add_application("app")
        assert await reconciler.reconcile(ids.application_id, []) == []
        assert directory.calls == []

    @pytest.mark.asyncio
    async def test_unresolvable_permissions_are_noop(
        self, directory: InMemoryDirectory, reconciler: ResourceAccessReconciler
    ) -> None:
        """When no name resolves the application is left alone."""
        ids = directory.add_application("app")
        assert await reconciler.reconcile(ids.application_id, ["Nope.Nothing"]) == []
        assert directory.calls_to("update_application") == []

    @pytest.mark.asyncio
    async def test_catalog_failure_propagates(self, directory: InMemoryDirectory) -> None:
        """A missing catalog is an error."""
        ids = directory.add_application("app")
        with pytest.raises(DirectoryOperationError, match="status 404"):
            await ResourceAccessReconciler(directory).reconcile(ids.application_id, ["User.Read"])
