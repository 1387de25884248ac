"""COSE Sign1 message model.

This module decodes, encodes, signs and verifies single-signer COSE Sign1
messages (RFC 9052) using ES256 or PS256. The wire form is::

    18([protected-header-bstr, unprotected-header-map, payload-bstr, signature-bstr])

The bytes that are signed are the CBOR encoding of the Sig_structure::

    ["Signature1", protected-header-bstr, h'', payload-bstr]
"""

import base64
import binascii
import logging
from collections.abc import Mapping
from typing import Any, Optional

from . import cbor_utils, edn_utils
from .algorithms import HEADER_ALG, HEADER_KID, Algorithm
from .certificates import public_key_from
from .exceptions import (
    CoseError,
    InvalidArity,
    MalformedEnvelope,
    MissingKeyIdentifier,
    UnsupportedAlgorithm,
)
from .signers import signer_for_key
from .verifiers import verifier_for_key

logger = logging.getLogger(__name__)

SIG_CONTEXT = "Signature1"


def build_sig_structure(protected_bytes: bytes, payload: bytes) -> bytes:
    """Encode the Sig_structure that is signed and verified.

    Args:
        protected_bytes: Protected header bytes exactly as signed
        payload: The payload bytes

    Returns:
        CBOR-encoded Sig_structure with empty external AAD
    """
    sig_structure = [
        SIG_CONTEXT,  # Context string
        protected_bytes,  # Protected header
        b"",  # External AAD
        payload,  # Payload
    ]
    return cbor_utils.encode(sig_structure)


def kid_to_bytes(kid: str) -> bytes:
    """Decode a base64 key identifier to the bytes placed in a header."""
    try:
        return base64.b64decode(kid, validate=True)
    except (binascii.Error, ValueError, TypeError) as e:
        raise CoseError(f"Key identifier is not valid base64: {kid!r}") from e


def encode_protected_header(algorithm: Algorithm, kid: str) -> bytes:
    """Encode the protected header map ``{1: alg, 4: kid}``."""
    protected_header = {
        HEADER_ALG: int(algorithm),
        HEADER_KID: kid_to_bytes(kid),
    }
    return cbor_utils.encode(protected_header, canonical=True)


def resolve_kid(*headers: Mapping[Any, Any]) -> bytes:
    """Return the kid from the first header that carries one.

    Called as ``resolve_kid(unprotected, protected)``: an unprotected kid
    takes precedence over the protected one.

    Raises:
        MalformedEnvelope: If the kid found is not a byte string
        MissingKeyIdentifier: If no header carries a kid
    """
    for header in headers:
        if HEADER_KID in header:
            kid = header[HEADER_KID]
            if not isinstance(kid, bytes):
                raise MalformedEnvelope(f"Key identifier must be a byte string, got {type(kid).__name__}")
            return kid
    raise MissingKeyIdentifier("No key identifier in unprotected or protected header")


def _decode_protected_header(protected_bytes: bytes) -> Mapping[Any, Any]:
    # A zero-length protected header stands for the empty map
    if not protected_bytes:
        return {}
    try:
        protected_header = cbor_utils.decode(protected_bytes)
    except (cbor_utils.CBORDecodeError, ValueError, TypeError) as e:
        raise MalformedEnvelope(f"Protected header is not valid CBOR: {e}") from e
    if not isinstance(protected_header, Mapping):
        raise MalformedEnvelope("Protected header is not a map")
    return protected_header


class Sign1Message:
    """A COSE Sign1 message.

    A message is either decoded from bytes with :meth:`decode`, or created
    with a payload and populated once by :meth:`sign`.
    """

    def __init__(self, payload: bytes = b""):
        self._payload = payload
        self._protected_bytes: Optional[bytes] = None
        self._signature: Optional[bytes] = None
        self._algorithm: Optional[Algorithm] = None
        self._kid: Optional[str] = None

    @property
    def payload(self) -> bytes:
        return self._payload

    @property
    def protected_bytes(self) -> Optional[bytes]:
        """Protected header bytes as decoded or as produced when signing."""
        return self._protected_bytes

    @property
    def signature(self) -> Optional[bytes]:
        return self._signature

    @property
    def algorithm(self) -> Optional[Algorithm]:
        return self._algorithm

    @property
    def kid(self) -> Optional[str]:
        """Key identifier as base64 text."""
        return self._kid

    @property
    def kid_bytes(self) -> Optional[bytes]:
        return None if self._kid is None else kid_to_bytes(self._kid)

    @classmethod
    def decode(cls, data: bytes) -> "Sign1Message":
        """Decode a COSE Sign1 message, tagged or untagged.

        Args:
            data: CBOR-encoded COSE Sign1 message

        Returns:
            The decoded message

        Raises:
            MalformedEnvelope: If the data is not a Sign1 array of the right kinds
            InvalidArity: If the array does not have four elements
            UnsupportedAlgorithm: If the algorithm is not ES256 or PS256
            MissingKeyIdentifier: If no header carries a key identifier
        """
        try:
            decoded = cbor_utils.decode(data)
        except (cbor_utils.CBORDecodeError, ValueError, TypeError) as e:
            raise MalformedEnvelope(f"Message is not valid CBOR: {e}") from e

        # Handle tagged or untagged COSE_Sign1
        if cbor_utils.is_tag(decoded):
            if not cbor_utils.is_tag(decoded, cbor_utils.COSE_SIGN1_TAG):
                raise MalformedEnvelope(
                    f"Unexpected CBOR tag {cbor_utils.get_tag_number(decoded)}, expected COSE_Sign1"
                )
            decoded = cbor_utils.get_tag_value(decoded)

        # Arrays inside a tag may decode as tuples
        if not isinstance(decoded, (list, tuple)):
            raise MalformedEnvelope("Message is not a COSE security message")
        if len(decoded) != 4:
            raise InvalidArity(f"Invalid Sign1 structure: expected 4 elements, got {len(decoded)}")

        protected_bytes, unprotected_header, payload, signature = decoded

        if not isinstance(protected_bytes, bytes):
            raise MalformedEnvelope("Protected header must be a byte string")
        if not isinstance(unprotected_header, Mapping):
            raise MalformedEnvelope("Unprotected header must be a map")
        if not isinstance(payload, bytes):
            raise MalformedEnvelope("Payload must be a byte string")
        if not isinstance(signature, bytes):
            raise MalformedEnvelope("Signature must be a byte string")

        protected_header = _decode_protected_header(protected_bytes)
        algorithm = Algorithm.from_header(protected_header.get(HEADER_ALG))
        kid = resolve_kid(unprotected_header, protected_header)

        message = cls(payload)
        message._protected_bytes = protected_bytes
        message._signature = signature
        message._algorithm = algorithm
        message._kid = base64.b64encode(kid).decode("ascii")

        logger.debug("Decoded Sign1 message: alg=%s kid=%s", algorithm.name, message._kid)
        return message

    def encode(self) -> bytes:
        """Encode the message as a tagged COSE Sign1 structure.

        The protected header is rebuilt from ``algorithm`` and ``kid`` and the
        unprotected header is always empty, so header fields other than
        alg and kid are not carried over from a decoded message.

        Returns:
            CBOR-encoded COSE Sign1 message with tag 18

        Raises:
            CoseError: If the message has not been signed or decoded
        """
        if self._algorithm is None or self._kid is None or self._signature is None:
            raise CoseError("Cannot encode a message without algorithm, kid and signature")

        cose_sign1 = [
            encode_protected_header(self._algorithm, self._kid),
            {},
            self._payload,
            self._signature,
        ]
        return cbor_utils.encode(cbor_utils.create_tag(cbor_utils.COSE_SIGN1_TAG, cose_sign1))

    def sign(self, private_key: Any, kid: str) -> None:
        """Sign the payload and populate the message.

        The algorithm follows the key kind: EC keys sign with ES256,
        RSA keys with PS256.

        Args:
            private_key: ``cryptography`` EC or RSA private key
            kid: Base64 key identifier placed in the protected header

        Raises:
            CoseError: If the message already carries protected header bytes
                or the kid is not valid base64
            UnsupportedAlgorithm: If the key is neither EC nor RSA
        """
        if self._protected_bytes is not None:
            raise CoseError("Message is already signed")

        signer = signer_for_key(private_key)
        protected_bytes = encode_protected_header(signer.algorithm, kid)
        signature = signer.sign(build_sig_structure(protected_bytes, self._payload))

        self._protected_bytes = protected_bytes
        self._signature = signature
        self._algorithm = signer.algorithm
        self._kid = kid

        logger.debug("Signed Sign1 message: alg=%s kid=%s", signer.algorithm.name, kid)

    def verify(self, key_or_certificate: Any) -> bool:
        """Verify the signature against a certificate or public key.

        Verification is done over the stored protected header bytes. Any
        failure other than an unsupported key kind yields False.

        Args:
            key_or_certificate: ``x509.Certificate`` or EC/RSA public key

        Returns:
            True if the signature is valid, False otherwise

        Raises:
            UnsupportedAlgorithm: If the public key is neither EC nor RSA
        """
        try:
            verifier = verifier_for_key(public_key_from(key_or_certificate))

            if self._protected_bytes is None or self._signature is None:
                logger.debug("Verification failed: message is not signed")
                return False

            if verifier.algorithm is not self._algorithm:
                logger.debug(
                    "Verification failed: message alg %s does not match %s key",
                    self._algorithm.name,
                    verifier.algorithm.name,
                )
                return False

            signing_input = build_sig_structure(self._protected_bytes, self._payload)
            is_valid = verifier.verify(signing_input, self._signature)
            logger.debug("Signature verification for kid=%s: %s", self._kid, is_valid)
            return is_valid

        except UnsupportedAlgorithm:
            raise
        except Exception as e:
            logger.debug("Verification failed for kid=%s: %s", self._kid, e, exc_info=True)
            return False

    def to_diagnostic(self) -> str:
        """Render the encoded message in CBOR diagnostic notation."""
        return edn_utils.cbor_to_diag(self.encode())

    def __repr__(self) -> str:
        alg = self._algorithm.name if self._algorithm is not None else None
        return f"Sign1Message(alg={alg}, kid={self._kid!r}, payload={len(self._payload)} bytes)"


def cose_sign1_sign(payload: bytes, private_key: Any, kid: str) -> bytes:
    """Create an encoded COSE Sign1 message.

    Args:
        payload: The payload to sign
        private_key: EC or RSA private key
        kid: Base64 key identifier

    Returns:
        CBOR-encoded COSE Sign1 message with tag 18
    """
    message = Sign1Message(payload)
    message.sign(private_key, kid)
    return message.encode()


def cose_sign1_verify(
    cose_sign1_message: bytes,
    key_or_certificate: Any,
) -> tuple[bool, Optional[bytes]]:
    """Decode and verify a COSE Sign1 message.

    Decode errors propagate; signature checking fails closed.

    Args:
        cose_sign1_message: CBOR-encoded COSE Sign1 message
        key_or_certificate: Certificate or public key of the signer

    Returns:
        Tuple of (verification_result, payload if verified successfully)
    """
    message = Sign1Message.decode(cose_sign1_message)
    if message.verify(key_or_certificate):
        return True, message.payload
    return False, None
