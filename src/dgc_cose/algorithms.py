"""Supported COSE algorithms and header labels."""

from enum import IntEnum
from typing import Any

from cryptography.hazmat.primitives.asymmetric import ec, rsa

from .exceptions import UnsupportedAlgorithm

# COSE header labels (RFC 9052)
HEADER_ALG = 1
HEADER_KID = 4


class Algorithm(IntEnum):
    """COSE algorithm identifiers accepted in a Sign1 protected header."""

    ES256 = -7
    PS256 = -37

    @classmethod
    def from_header(cls, value: Any) -> "Algorithm":
        """Resolve the algorithm from a protected header ``alg`` value.

        Raises:
            UnsupportedAlgorithm: If the value is missing or not ES256/PS256
        """
        # bool is an int subclass; True/False are never algorithm identifiers
        if isinstance(value, bool) or not isinstance(value, int):
            raise UnsupportedAlgorithm(f"Algorithm not supported: {value!r}")
        try:
            return cls(value)
        except ValueError:
            raise UnsupportedAlgorithm(f"Algorithm not supported: {value}") from None

    @classmethod
    def for_private_key(cls, private_key: Any) -> "Algorithm":
        """Select the algorithm from the kind of a private key."""
        if isinstance(private_key, ec.EllipticCurvePrivateKey):
            return cls.ES256
        if isinstance(private_key, rsa.RSAPrivateKey):
            return cls.PS256
        raise UnsupportedAlgorithm(f"Unsupported key type: {type(private_key).__name__}")

    @classmethod
    def for_public_key(cls, public_key: Any) -> "Algorithm":
        """Select the algorithm from the kind of a public key."""
        if isinstance(public_key, ec.EllipticCurvePublicKey):
            return cls.ES256
        if isinstance(public_key, rsa.RSAPublicKey):
            return cls.PS256
        raise UnsupportedAlgorithm(f"Unsupported key type: {type(public_key).__name__}")
