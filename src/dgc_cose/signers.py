"""Signers for COSE Sign1 messages.

This module provides signer classes wrapping ``cryptography`` private keys:
- ES256Signer: ECDSA with SHA-256, raw fixed-width R||S output
- PS256Signer: RSA-PSS with SHA-256
"""

from typing import Any, Protocol, Union

from cryptography.hazmat.primitives import hashes
from cryptography.hazmat.primitives.asymmetric import ec, padding, rsa, utils

from .algorithms import Algorithm


class Signer(Protocol):
    """Protocol for COSE Sign1 signers."""

    def sign(self, message: bytes) -> bytes:
        """Sign a message and return the signature.

        Args:
            message: The message to sign

        Returns:
            The signature bytes
        """

    @property
    def algorithm(self) -> Algorithm:
        """Get the COSE algorithm identifier."""


def pss_padding() -> padding.PSS:
    """RSA-PSS parameters used by PS256: MGF1-SHA-256, salt of digest length."""
    return padding.PSS(mgf=padding.MGF1(hashes.SHA256()), salt_length=padding.PSS.DIGEST_LENGTH)


class ES256Signer:
    """ECDSA SHA-256 signer producing COSE raw signatures."""

    def __init__(self, private_key: ec.EllipticCurvePrivateKey):
        """Initialize ES256 signer with an EC private key.

        Args:
            private_key: EC private key; P-256 for ES256 proper
        """
        self.private_key = private_key

    @property
    def coordinate_size(self) -> int:
        """Byte width of one signature component for the key's curve."""
        return (self.private_key.curve.key_size + 7) // 8

    def sign(self, message: bytes) -> bytes:
        """Sign a message with ES256."""
        signature_der = self.private_key.sign(message, ec.ECDSA(hashes.SHA256()))

        # Convert DER to raw (r||s) format for COSE
        r, s = utils.decode_dss_signature(signature_der)
        size = self.coordinate_size
        return r.to_bytes(size, byteorder="big") + s.to_bytes(size, byteorder="big")

    @property
    def algorithm(self) -> Algorithm:
        """Get COSE algorithm identifier for ES256."""
        return Algorithm.ES256


class PS256Signer:
    """RSA-PSS SHA-256 signer."""

    def __init__(self, private_key: rsa.RSAPrivateKey):
        self.private_key = private_key

    def sign(self, message: bytes) -> bytes:
        """Sign a message with PS256."""
        return self.private_key.sign(message, pss_padding(), hashes.SHA256())

    @property
    def algorithm(self) -> Algorithm:
        """Get COSE algorithm identifier for PS256."""
        return Algorithm.PS256


def signer_for_key(private_key: Any) -> Union[ES256Signer, PS256Signer]:
    """Create the signer matching the kind of a private key.

    Args:
        private_key: EC or RSA private key

    Returns:
        ES256Signer for EC keys, PS256Signer for RSA keys

    Raises:
        UnsupportedAlgorithm: For any other key kind
    """
    if Algorithm.for_private_key(private_key) is Algorithm.ES256:
        return ES256Signer(private_key)
    return PS256Signer(private_key)
