"""Verifiers for COSE Sign1 signatures.

This module provides verifier classes wrapping ``cryptography`` public keys:
- ES256Verifier: ECDSA SHA-256 over raw R||S signatures
- PS256Verifier: RSA-PSS SHA-256

``verify`` returns False when the signature does not match and raises
``VerificationError`` when the inputs cannot be checked at all.
"""

from typing import Any, Protocol, Union

from cryptography.exceptions import InvalidSignature
from cryptography.hazmat.primitives import hashes
from cryptography.hazmat.primitives.asymmetric import ec, rsa, utils

from .algorithms import Algorithm
from .exceptions import VerificationError
from .signers import pss_padding


class Verifier(Protocol):
    """Protocol for COSE Sign1 verifiers."""

    def verify(self, message: bytes, signature: bytes) -> bool:
        """Verify a signature on a message.

        Args:
            message: The message that was signed
            signature: The signature to verify

        Returns:
            True if signature is valid, False otherwise
        """

    @property
    def algorithm(self) -> Algorithm:
        """Get the COSE algorithm identifier."""


class ES256Verifier:
    """ECDSA SHA-256 verifier implementation."""

    def __init__(self, public_key: ec.EllipticCurvePublicKey):
        self.public_key = public_key

    @property
    def coordinate_size(self) -> int:
        """Byte width of one signature component for the key's curve."""
        return (self.public_key.curve.key_size + 7) // 8

    def verify(self, message: bytes, signature: bytes) -> bool:
        """Verify a raw (r||s) signature with ES256."""
        size = self.coordinate_size
        if len(signature) != 2 * size:
            raise VerificationError(
                f"ES256 signature must be {2 * size} bytes, got {len(signature)}"
            )

        try:
            # Convert raw (r||s) signature to DER format
            r = int.from_bytes(signature[:size], byteorder="big")
            s = int.from_bytes(signature[size:], byteorder="big")
            signature_der = utils.encode_dss_signature(r, s)
            self.public_key.verify(signature_der, message, ec.ECDSA(hashes.SHA256()))
            return True
        except InvalidSignature:
            return False
        except (ValueError, TypeError) as e:
            raise VerificationError(f"ES256 verification failed: {e}") from e

    @property
    def algorithm(self) -> Algorithm:
        return Algorithm.ES256


class PS256Verifier:
    """RSA-PSS SHA-256 verifier implementation."""

    def __init__(self, public_key: rsa.RSAPublicKey):
        self.public_key = public_key

    def verify(self, message: bytes, signature: bytes) -> bool:
        """Verify a signature with PS256."""
        try:
            self.public_key.verify(signature, message, pss_padding(), hashes.SHA256())
            return True
        except InvalidSignature:
            return False
        except (ValueError, TypeError) as e:
            raise VerificationError(f"PS256 verification failed: {e}") from e

    @property
    def algorithm(self) -> Algorithm:
        return Algorithm.PS256


def verifier_for_key(public_key: Any) -> Union[ES256Verifier, PS256Verifier]:
    """Create the verifier matching the kind of a public key.

    Raises:
        UnsupportedAlgorithm: If the key is neither EC nor RSA
    """
    if Algorithm.for_public_key(public_key) is Algorithm.ES256:
        return ES256Verifier(public_key)
    return PS256Verifier(public_key)
