"""Certificate and key helpers.

Loads X.509 certificates and private keys from PEM or DER bytes, extracts the
public key used for verification and computes the key identifier under which
a signing certificate is published in DCC trust lists.
"""

import base64
import hashlib
from typing import Any, Optional

from cryptography import x509
from cryptography.hazmat.primitives import serialization
from cryptography.hazmat.primitives.asymmetric import ec, rsa

# DCC kid: leading bytes of the SHA-256 certificate fingerprint
KID_LENGTH = 8

_PEM_MARKER = b"-----BEGIN"


def load_certificate(data: bytes) -> x509.Certificate:
    """Load an X.509 certificate from PEM or DER bytes.

    Args:
        data: Certificate bytes in either encoding

    Returns:
        The parsed certificate

    Raises:
        ValueError: If the bytes are not a certificate
    """
    if data.lstrip().startswith(_PEM_MARKER):
        return x509.load_pem_x509_certificate(data)
    return x509.load_der_x509_certificate(data)


def load_private_key(data: bytes, password: Optional[bytes] = None) -> Any:
    """Load an EC or RSA private key from PEM or DER (PKCS#8 or traditional).

    Raises:
        ValueError: If the bytes are not a private key or the password is wrong
    """
    if data.lstrip().startswith(_PEM_MARKER):
        private_key = serialization.load_pem_private_key(data, password=password)
    else:
        private_key = serialization.load_der_private_key(data, password=password)

    if not isinstance(private_key, (ec.EllipticCurvePrivateKey, rsa.RSAPrivateKey)):
        raise ValueError(f"Unsupported key type: {type(private_key).__name__}")
    return private_key


def public_key_from(key_or_certificate: Any) -> Any:
    """Return the public key of a certificate, or the argument itself."""
    if isinstance(key_or_certificate, x509.Certificate):
        return key_or_certificate.public_key()
    return key_or_certificate


def compute_kid(certificate: x509.Certificate) -> str:
    """Compute the base64 key identifier of a signing certificate.

    Args:
        certificate: Document signer certificate

    Returns:
        Base64 text of the first 8 bytes of the SHA-256 hash of the
        certificate's DER encoding
    """
    der = certificate.public_bytes(serialization.Encoding.DER)
    digest = hashlib.sha256(der).digest()
    return base64.b64encode(digest[:KID_LENGTH]).decode("ascii")
