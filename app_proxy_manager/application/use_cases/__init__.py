"""Application use cases."""

from .app_roles import AppRoleLifecycleManager, AppRoleUpdate
from .client_secret import ClientSecretRotator
from .configure import ApplicationConfigurator
from .group_assignments import GroupAssignmentReconciler
from .provisioning import ApplicationProvisioner
from .reconcile_applications import ApplicationOutcome, ReconcileApplications, RunResult
from .resource_access import ResourceAccessReconciler
from .signing_certificate import SigningCertificateRotator
from .tls_certificate import PLACEHOLDER_PFX_PASSWORD, TlsCertificateInstaller
from .waiter import EventualConsistencyWaiter

__all__ = [
    "PLACEHOLDER_PFX_PASSWORD",
    "AppRoleLifecycleManager",
    "AppRoleUpdate",
    "ApplicationConfigurator",
    "ApplicationOutcome",
    "ApplicationProvisioner",
    "ClientSecretRotator",
    "EventualConsistencyWaiter",
    "GroupAssignmentReconciler",
    "ReconcileApplications",
    "ResourceAccessReconciler",
    "RunResult",
    "SigningCertificateRotator",
    "TlsCertificateInstaller",
]
