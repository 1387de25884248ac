#!/usr/bin/env python3
"""Demo script for COSE Sign1 functionality."""

import datetime

from cryptography import x509
from cryptography.hazmat.primitives import hashes
from cryptography.hazmat.primitives.asymmetric import ec, rsa
from cryptography.x509.oid import NameOID

from dgc_cose import (
    Sign1Message,
    TrustListVerifier,
    certificate_kid_resolver,
    compute_kid,
    cose_sign1_sign,
)


def make_certificate(private_key, common_name: str) -> x509.Certificate:
    """Create a self-signed document signer certificate."""
    name = x509.Name([x509.NameAttribute(NameOID.COMMON_NAME, common_name)])
    now = datetime.datetime.now(datetime.timezone.utc)
    return (
        x509.CertificateBuilder()
        .subject_name(name)
        .issuer_name(name)
        .public_key(private_key.public_key())
        .serial_number(x509.random_serial_number())
        .not_valid_before(now)
        .not_valid_after(now + datetime.timedelta(days=30))
        .sign(private_key, hashes.SHA256())
    )


def demo_basic_sign_verify():
    """Demonstrate basic COSE Sign1 signing and verification."""
    print("=" * 60)
    print("COSE Sign1 Basic Demo")
    print("=" * 60)

    print("\n1. Generating ES256 key and certificate...")
    private_key = ec.generate_private_key(ec.SECP256R1())
    certificate = make_certificate(private_key, "Demo DSC")
    kid = compute_kid(certificate)
    print(f"   kid: {kid}")

    payload = b"HELLO"
    print(f"\n2. Signing payload: {payload.decode()}")
    message = Sign1Message(payload)
    message.sign(private_key, kid)
    encoded = message.encode()
    print(f"   Signed message size: {len(encoded)} bytes")
    print(f"   {message.to_diagnostic()}")

    print("\n3. Decoding and verifying...")
    decoded = Sign1Message.decode(encoded)
    if decoded.verify(certificate):
        print(f"   ✓ Signature is valid ({decoded.algorithm.name}, kid={decoded.kid})")
    else:
        print("   ✗ Signature verification failed!")


def demo_trust_list():
    """Demonstrate verification with the signer looked up by kid."""
    print("\n" + "=" * 60)
    print("COSE Sign1 Trust List Verification")
    print("=" * 60)

    ec_key = ec.generate_private_key(ec.SECP256R1())
    rsa_key = rsa.generate_private_key(public_exponent=65537, key_size=2048)
    ec_cert = make_certificate(ec_key, "EC DSC")
    rsa_cert = make_certificate(rsa_key, "RSA DSC")

    verifier = TrustListVerifier(certificate_kid_resolver([ec_cert, rsa_cert]))

    for key, cert in ((ec_key, ec_cert), (rsa_key, rsa_cert)):
        encoded = cose_sign1_sign(b"claims", key, compute_kid(cert))
        is_valid, payload = verifier.verify(encoded)
        alg = Sign1Message.decode(encoded).algorithm.name
        print(f"   {alg}: valid={is_valid} payload={payload!r}")


if __name__ == "__main__":
    demo_basic_sign_verify()
    demo_trust_list()
