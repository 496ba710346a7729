"""
Pytest configuration and fixtures for testing.
"""
import pytest
from cryptography.hazmat.primitives.asymmetric import ec, rsa
from cryptography.hazmat.primitives import serialization
from cryptography.hazmat.backends import default_backend


def _private_pem(private_key) -> str:
    return private_key.private_bytes(
        encoding=serialization.Encoding.PEM,
        format=serialization.PrivateFormat.PKCS8,
        encryption_algorithm=serialization.NoEncryption()
    ).decode('utf-8')


def _public_pem(public_key) -> str:
    return public_key.public_bytes(
        encoding=serialization.Encoding.PEM,
        format=serialization.PublicFormat.SubjectPublicKeyInfo
    ).decode('utf-8')


def _ec_key_pair(curve=None):
    private_key = ec.generate_private_key(curve or ec.SECP256R1(), default_backend())
    public_key = private_key.public_key()
    return {
        "private": _private_pem(private_key),
        "public": _public_pem(public_key),
        "public_hex": public_key.public_bytes(
            encoding=serialization.Encoding.X962,
            format=serialization.PublicFormat.UncompressedPoint
        ).hex(),
    }


@pytest.fixture(scope="session")
def es256_keys():
    """Generate a P-256 key pair as PEM text."""
    return _ec_key_pair()


@pytest.fixture(scope="session")
def other_es256_keys():
    """Generate an unrelated P-256 key pair."""
    return _ec_key_pair()


@pytest.fixture(scope="session")
def p384_keys():
    """Generate a P-384 key pair, on the wrong curve for ES256."""
    return _ec_key_pair(ec.SECP384R1())


@pytest.fixture(scope="session")
def rsa_keys():
    """Generate an RSA key pair, unusable for ES256."""
    private_key = rsa.generate_private_key(
        public_exponent=65537,
        key_size=2048,
        backend=default_backend()
    )
    return {
        "private": _private_pem(private_key),
        "public": _public_pem(private_key.public_key()),
    }
