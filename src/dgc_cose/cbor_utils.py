"""CBOR utilities module.

This module provides a unified interface for CBOR operations, isolating the
underlying CBOR library implementation from the Sign1 message model.

Currently uses cbor2 as the underlying implementation.
"""

from io import BytesIO
from typing import Any, Union

import cbor2

# Type aliases for CBOR special values
CBORTag = cbor2.CBORTag
CBORDecodeError = cbor2.CBORDecodeError


def encode(obj: Any, canonical: bool = False) -> bytes:
    """Encode an object to CBOR bytes.

    Args:
        obj: The object to encode
        canonical: Whether to use canonical encoding (deterministic)

    Returns:
        CBOR-encoded bytes
    """
    return cbor2.dumps(obj, canonical=canonical)


def decode(data: bytes) -> Any:
    """Decode exactly one CBOR data item from bytes.

    Args:
        data: CBOR-encoded bytes

    Returns:
        The decoded object

    Raises:
        CBORDecodeError: If the data is not valid CBOR or bytes follow the item
    """
    with BytesIO(data) as fp:
        obj = cbor2.CBORDecoder(fp).decode()
        if fp.tell() != len(data):
            raise CBORDecodeError(f"{len(data) - fp.tell()} bytes of trailing data after CBOR item")
    return obj


def create_tag(tag: int, value: Any) -> CBORTag:
    """Create a CBOR tag.

    Args:
        tag: The tag number
        value: The tagged value

    Returns:
        A CBOR tag object
    """
    return CBORTag(tag, value)


def is_tag(obj: Any, tag_number: Union[int, None] = None) -> bool:
    """Check if an object is a CBOR tag.

    Args:
        obj: The object to check
        tag_number: Optional specific tag number to check for

    Returns:
        True if the object is a CBOR tag (and matches tag_number if specified)
    """
    if not isinstance(obj, CBORTag):
        return False
    if tag_number is not None:
        return obj.tag == tag_number
    return True


def get_tag_number(obj: CBORTag) -> int:
    """Get the tag number from a CBOR tag."""
    return obj.tag


def get_tag_value(obj: CBORTag) -> Any:
    """Get the tagged value from a CBOR tag."""
    return obj.value


# COSE_Sign1 semantic tag (RFC 9052)
COSE_SIGN1_TAG = 18
