"""Domain exceptions."""


class DomainError(Exception):
    """Base exception for domain errors."""


class CertificateFormatError(DomainError):
    """Raised when a PKCS#12 container cannot be parsed."""


class CertificateNotFoundError(CertificateFormatError):
    """Raised when a PKCS#12 container holds no certificate bag."""


class PrivateKeyNotFoundError(CertificateFormatError):
    """Raised when a PKCS#12 container holds no private key bag."""


class InvalidRotationPolicyError(DomainError, ValueError):
    """Raised when a credential rotation policy is invalid."""


class DuplicateAppRoleError(DomainError, ValueError):
    """Raised when declared app roles share an id or a value."""
