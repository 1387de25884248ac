"""Exceptions raised while decoding, encoding, signing and verifying Sign1 messages."""


class CoseError(ValueError):
    """Base class for all COSE Sign1 errors."""


class DecodeError(CoseError):
    """Input bytes do not form a usable Sign1 message."""


class MalformedEnvelope(DecodeError):
    """Top-level value or one of its elements has the wrong CBOR kind."""


class InvalidArity(DecodeError):
    """The Sign1 array does not have exactly four elements."""


class MissingKeyIdentifier(DecodeError):
    """Neither the unprotected nor the protected header carries a kid."""


class UnsupportedAlgorithm(CoseError):
    """Algorithm identifier or key kind is neither ES256 nor PS256."""


class VerificationError(CoseError):
    """The signature primitive failed for a structural reason.

    Raised by the verifier primitives only. ``Sign1Message.verify`` turns it
    into a ``False`` result.
    """
