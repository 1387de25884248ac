"""Pytest configuration and shared fixtures for dgc-cose tests."""

import datetime
from pathlib import Path

import pytest
from cryptography import x509
from cryptography.hazmat.primitives import hashes
from cryptography.hazmat.primitives.asymmetric import ec, rsa
from cryptography.hazmat.primitives.asymmetric.ec import (
    EllipticCurvePrivateKey,
    EllipticCurvePublicKey,
)
from cryptography.hazmat.primitives.asymmetric.rsa import RSAPrivateKey
from cryptography.hazmat.primitives.serialization import (
    Encoding,
    NoEncryption,
    PrivateFormat,
)
from cryptography.x509.oid import NameOID


def make_certificate(private_key, common_name: str = "DSC test") -> x509.Certificate:
    """Build a self-signed document signer certificate for a key."""
    name = x509.Name([
        x509.NameAttribute(NameOID.COUNTRY_NAME, "XX"),
        x509.NameAttribute(NameOID.COMMON_NAME, common_name),
    ])
    now = datetime.datetime.now(datetime.timezone.utc)
    return (
        x509.CertificateBuilder()
        .subject_name(name)
        .issuer_name(name)
        .public_key(private_key.public_key())
        .serial_number(x509.random_serial_number())
        .not_valid_before(now - datetime.timedelta(days=1))
        .not_valid_after(now + datetime.timedelta(days=365))
        .sign(private_key, hashes.SHA256())
    )


@pytest.fixture(scope="session")
def ec_keypair() -> tuple[EllipticCurvePrivateKey, EllipticCurvePublicKey]:
    """Generate an EC P-256 keypair for testing."""
    private_key = ec.generate_private_key(ec.SECP256R1())
    public_key = private_key.public_key()
    return private_key, public_key


@pytest.fixture(scope="session")
def ec_private_key(ec_keypair) -> EllipticCurvePrivateKey:
    return ec_keypair[0]


@pytest.fixture(scope="session")
def p384_private_key() -> EllipticCurvePrivateKey:
    return ec.generate_private_key(ec.SECP384R1())


@pytest.fixture(scope="session")
def p521_private_key() -> EllipticCurvePrivateKey:
    return ec.generate_private_key(ec.SECP521R1())


@pytest.fixture(scope="session")
def rsa_private_key() -> RSAPrivateKey:
    return rsa.generate_private_key(public_exponent=65537, key_size=2048)


@pytest.fixture(scope="session")
def ec_certificate(ec_private_key) -> x509.Certificate:
    return make_certificate(ec_private_key, "DSC EC")


@pytest.fixture(scope="session")
def rsa_certificate(rsa_private_key) -> x509.Certificate:
    return make_certificate(rsa_private_key, "DSC RSA")


@pytest.fixture(scope="session")
def unrelated_ec_certificate() -> x509.Certificate:
    return make_certificate(ec.generate_private_key(ec.SECP256R1()), "DSC other")


@pytest.fixture
def write_pem(tmp_path: Path):
    """Write keys and certificates to PEM files under tmp_path."""

    def _write(name: str, obj) -> Path:
        path = tmp_path / name
        if isinstance(obj, x509.Certificate):
            path.write_bytes(obj.public_bytes(Encoding.PEM))
        else:
            path.write_bytes(
                obj.private_bytes(Encoding.PEM, PrivateFormat.PKCS8, NoEncryption())
            )
        return path

    return _write
