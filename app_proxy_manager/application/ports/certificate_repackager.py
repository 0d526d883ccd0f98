"""Port for PKCS#12 re-packaging."""

from typing import Protocol


class CertificateRepackager(Protocol):
    """Port for putting a password on a password-stripped PFX."""

    def repackage(self, pfx_base64: str, new_password: str) -> str:
        """
        Re-serialize a PFX under a new password.

        Args:
            pfx_base64: Base64 PFX, usually exported from Key Vault without a password.
            new_password: Password the new container is encrypted with.

        Returns:
            The new container, base64 encoded.

        Raises:
            CertificateFormatError: If the container is malformed or incomplete.
        """
        ...
