"""Application layer exceptions."""

from __future__ import annotations

import json
from typing import Any


class ApplicationError(Exception):
    """Base exception for application errors."""


class DirectoryOperationError(ApplicationError):
    """Raised when the directory answers a request with a non-success status."""

    def __init__(self, description: str, status_code: int, body: Any = None) -> None:
        self.description = description
        self.status_code = status_code
        self.body = body
        super().__init__(f"Error {description}: status {status_code}, body {json.dumps(body)}")

    @property
    def is_not_found(self) -> bool:
        """Check if the directory reported the object as missing."""
        return self.status_code == 404


class ObjectNotVisibleError(ApplicationError):
    """Raised when a newly created object never becomes readable."""


class GroupNotFoundError(ApplicationError):
    """Raised when a group name does not resolve to exactly one security group."""


class AppRoleNotFoundError(ApplicationError):
    """Raised when a service principal publishes no app role to assign."""


class ServicePrincipalMissingError(ApplicationError):
    """Raised when an application exists without its service principal."""


class AmbiguousApplicationError(ApplicationError):
    """Raised when a display name matches more than one object."""


class PaginationLimitExceededError(ApplicationError):
    """Raised when a continuation chain does not terminate."""


class SecretStoreError(ApplicationError):
    """Raised when reading or writing a Key Vault secret fails."""


class SecretNotFoundError(SecretStoreError):
    """Raised when a Key Vault secret holds no value."""


class ConfigurationError(ApplicationError):
    """Raised when configuration is invalid."""
