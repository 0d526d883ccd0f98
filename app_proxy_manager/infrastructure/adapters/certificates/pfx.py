"""PKCS#12 (PFX) re-packaging."""

from __future__ import annotations

import base64
import binascii
import logging

from asn1crypto import pkcs12 as asn1_pkcs12
from cryptography.hazmat.primitives.serialization import BestAvailableEncryption, pkcs12

from ....domain.exceptions import (
    CertificateFormatError,
    CertificateNotFoundError,
    PrivateKeyNotFoundError,
)

logger = logging.getLogger(__name__)


def _strip_mac(der: bytes) -> bytes:
    """Drop the integrity check of a PFX so it can be parsed without a password."""
    pfx = asn1_pkcs12.Pfx.load(der)
    stripped = asn1_pkcs12.Pfx({"version": pfx["version"].native, "auth_safe": pfx["auth_safe"]})
    return stripped.dump()


def _load(der: bytes) -> pkcs12.PKCS12KeyAndCertificates:
    """
    Parse a password-less PFX.

    Key Vault exports use either no password or the empty password, and some
    exports carry a MAC that neither verifies. The last resort parses the
    container with its MAC removed.
    """
    for password in (None, b""):
        try:
            return pkcs12.load_pkcs12(der, password)
        except ValueError:
            continue

    try:
        return pkcs12.load_pkcs12(_strip_mac(der), None)
    except (TypeError, ValueError) as e:
        msg = f"Unable to parse PKCS#12 container: {e}"
        raise CertificateFormatError(msg) from e


class PfxRepackager:
    """CertificateRepackager implementation using cryptography."""

    def repackage(self, pfx_base64: str, new_password: str) -> str:
        if not new_password:
            msg = "A non-empty password is required"
            raise ValueError(msg)

        try:
            der = base64.b64decode(pfx_base64, validate=True)
        except (binascii.Error, ValueError) as e:
            msg = "PFX content is not valid base64"
            raise CertificateFormatError(msg) from e

        parsed = _load(der)

        leaf = parsed.cert
        additional = list(parsed.additional_certs)
        if leaf is None and additional:
            leaf = additional.pop(0)
        if leaf is None:
            msg = "No certificate found"
            raise CertificateNotFoundError(msg)
        if parsed.key is None:
            msg = "No key found"
            raise PrivateKeyNotFoundError(msg)

        logger.debug("Re-packaging PFX with %d chain certificates", len(additional))
        repacked = pkcs12.serialize_key_and_certificates(
            leaf.friendly_name,
            parsed.key,
            leaf.certificate,
            [cert.certificate for cert in additional] or None,
            BestAvailableEncryption(new_password.encode()),
        )
        return base64.b64encode(repacked).decode("ascii")


def repackage(pfx_base64: str, new_password: str) -> str:
    """Re-serialize a base64 PFX under ``new_password``."""
    return PfxRepackager().repackage(pfx_base64, new_password)
