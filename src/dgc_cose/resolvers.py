"""Resolvers for signing certificates by key identifier.

This module builds kid lookups over a set of document signer certificates
and a verifier that picks the certificate for a message from its kid. The
certificates are taken as given: no chain or validity checks are made.
"""

import logging
from typing import Callable, Iterable, Optional

from cryptography import x509

from .certificates import compute_kid
from .cose_sign1 import Sign1Message

logger = logging.getLogger(__name__)

CertificateResolver = Callable[[str], x509.Certificate]


def certificate_kid_resolver_from_pairs(
    kid_certificate_pairs: Iterable[tuple[str, x509.Certificate]],
) -> CertificateResolver:
    """Create a resolver for certificates based on key identifiers (kid).

    Args:
        kid_certificate_pairs: Tuples of base64 kid and certificate

    Returns:
        Resolver function that takes a base64 kid and returns the
        corresponding certificate

    Raises:
        ValueError: If resolver is called with a kid that doesn't match any certificate
    """
    kid_to_certificate: dict[str, x509.Certificate] = dict(kid_certificate_pairs)

    def resolve_certificate(requested_kid: str) -> x509.Certificate:
        """Resolve certificate by kid.

        Raises:
            ValueError: If kid is not found in the lookup table
        """
        if requested_kid not in kid_to_certificate:
            raise ValueError(
                f"Kid not found: {requested_kid} "
                f"Available kids: {', '.join(kid_to_certificate)}"
            )
        return kid_to_certificate[requested_kid]

    return resolve_certificate


def certificate_kid_resolver(certificates: Iterable[x509.Certificate]) -> CertificateResolver:
    """Create a resolver keyed by the computed DCC kid of each certificate.

    Args:
        certificates: Document signer certificates

    Returns:
        Resolver function that takes a base64 kid and returns the certificate
    """
    return certificate_kid_resolver_from_pairs(
        (compute_kid(certificate), certificate) for certificate in certificates
    )


class TrustListVerifier:
    """Verifies Sign1 messages against certificates looked up by kid."""

    def __init__(self, resolver: CertificateResolver):
        """Initialize with a certificate resolver.

        Args:
            resolver: Function that takes a base64 kid and returns the
                      corresponding certificate
        """
        self.resolver = resolver

    def verify(self, cose_sign1_message: bytes) -> tuple[bool, Optional[bytes]]:
        """Decode a message, resolve its signer and verify the signature.

        Args:
            cose_sign1_message: CBOR-encoded COSE Sign1 message

        Returns:
            Tuple of (is_valid, payload if verified successfully)
        """
        try:
            message = Sign1Message.decode(cose_sign1_message)
            certificate = self.resolver(message.kid or "")
            if message.verify(certificate):
                return True, message.payload
            return False, None

        except Exception as e:
            logger.debug("Trust list verification failed: %s", e, exc_info=True)
            return False, None
