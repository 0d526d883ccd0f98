"""Identifiers of the application object pair."""

from dataclasses import dataclass


@dataclass(frozen=True, slots=True)
class ApplicationAndServicePrincipalId:
    """Object ids of an application registration and its service principal."""

    application_id: str
    service_principal_id: str
