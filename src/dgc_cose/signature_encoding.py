"""ECDSA signature representation conversion.

COSE carries ECDSA signatures as two fixed-width big-endian integers placed
back to back (R||S). The ``cryptography`` verifier expects the ASN.1 DER form::

    SEQUENCE { INTEGER r, INTEGER s }

Only the concatenated to DER direction is needed: signing always produces the
concatenated form.
"""

DER_SEQUENCE_TAG = 0x30
DER_INTEGER_TAG = 0x02

# Short-form DER length; long-form lengths are not produced here.
_MAX_SHORT_LENGTH = 0x7F


def der_integer(value: bytes) -> bytes:
    """Encode an unsigned big-endian integer as a minimal DER INTEGER.

    Leading zero bytes are stripped and a single zero byte is prepended when
    the high bit of the first remaining byte is set. An all-zero value is
    encoded as ``02 01 00``.
    """
    stripped = value.lstrip(b"\x00")
    if not stripped:
        return bytes([DER_INTEGER_TAG, 0x01, 0x00])

    if stripped[0] & 0x80:
        stripped = b"\x00" + stripped

    if len(stripped) > _MAX_SHORT_LENGTH:
        raise ValueError(f"Integer too long for short-form DER length: {len(stripped)} bytes")

    return bytes([DER_INTEGER_TAG, len(stripped)]) + stripped


def concat_to_der(concat: bytes) -> bytes:
    """Convert a concatenated (R||S) ECDSA signature to DER.

    Args:
        concat: Signature bytes, R and S of equal width back to back

    Returns:
        DER-encoded ``SEQUENCE`` of the two integers

    Raises:
        ValueError: If the input is empty or of odd length, or the encoded
            content does not fit a single length byte
    """
    if not concat or len(concat) % 2:
        raise ValueError(f"Concatenated signature must have a non-zero even length, got {len(concat)}")

    half = len(concat) // 2
    r = der_integer(concat[:half])
    s = der_integer(concat[half:])

    content_length = len(r) + len(s)
    if content_length > _MAX_SHORT_LENGTH:
        raise ValueError(f"DER signature content too long for a single length byte: {content_length}")

    return bytes([DER_SEQUENCE_TAG, content_length]) + r + s
