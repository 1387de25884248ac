"""DGC-COSE: COSE Sign1 signing and verification for health certificates."""

# Hide module imports
from . import algorithms, certificates, cose_sign1, exceptions, resolvers, signature_encoding
from .algorithms import Algorithm
from .certificates import (
    compute_kid,
    load_certificate,
    load_private_key,
    public_key_from,
)
from .cose_sign1 import (
    Sign1Message,
    build_sig_structure,
    cose_sign1_sign,
    cose_sign1_verify,
)
from .exceptions import (
    CoseError,
    DecodeError,
    InvalidArity,
    MalformedEnvelope,
    MissingKeyIdentifier,
    UnsupportedAlgorithm,
    VerificationError,
)
from .resolvers import (
    TrustListVerifier,
    certificate_kid_resolver,
    certificate_kid_resolver_from_pairs,
)
from .signature_encoding import concat_to_der

del algorithms, certificates, cose_sign1, exceptions, resolvers, signature_encoding

__version__ = "0.1.0"


__all__ = [
    "__version__",
    # COSE Sign1 message model
    "Sign1Message",
    "Algorithm",
    "build_sig_structure",
    "cose_sign1_sign",
    "cose_sign1_verify",
    # Errors
    "CoseError",
    "DecodeError",
    "MalformedEnvelope",
    "InvalidArity",
    "MissingKeyIdentifier",
    "UnsupportedAlgorithm",
    "VerificationError",
    # Signature representation
    "concat_to_der",
    # Certificates and kid resolution
    "load_certificate",
    "load_private_key",
    "public_key_from",
    "compute_kid",
    "certificate_kid_resolver",
    "certificate_kid_resolver_from_pairs",
    "TrustListVerifier",
]
