"""
ECDSA sign/verify boundary.

Keys are PEM text or bytes and are handed to ``cryptography`` untouched.
Signatures on both sides of this module are DER-encoded.
"""
import logging
from enum import Enum
from typing import Optional, Union

from cryptography.exceptions import InvalidSignature, UnsupportedAlgorithm
from cryptography.hazmat.backends import default_backend
from cryptography.hazmat.primitives import hashes, serialization
from cryptography.hazmat.primitives.asymmetric import ec

from .exceptions import SigningFailedError, VerificationError

logger = logging.getLogger(__name__)

PEM = Union[str, bytes]

DIGESTS = {
    "SHA256": hashes.SHA256,
}


class VerifyResult(str, Enum):
    VALID = "valid"
    INVALID = "invalid"


def _pem_bytes(pem: PEM) -> bytes:
    if isinstance(pem, str):
        return pem.encode("utf-8")
    if isinstance(pem, (bytes, bytearray)):
        return bytes(pem)
    raise TypeError(f"PEM key must be str or bytes, not {type(pem).__name__}")


def _check_curve(key, curve: Optional[str]) -> None:
    if curve is not None and key.curve.name != curve:
        raise ValueError(f"Key is on curve {key.curve.name}, expected {curve}")


def _hash_for(digest: str) -> hashes.HashAlgorithm:
    try:
        return DIGESTS[digest]()
    except KeyError:
        raise ValueError(f"Unsupported digest: {digest}") from None


def sign(message: bytes, private_key: PEM, digest: str, curve: Optional[str] = None) -> bytes:
    """
    Sign a message with an EC private key.

    Args:
        message: Bytes to sign
        private_key: PEM-encoded EC private key
        digest: Digest name, e.g. "SHA256"
        curve: Required curve name, e.g. "secp256r1"; any curve when None

    Returns:
        DER-encoded ECDSA signature

    Raises:
        SigningFailedError: If the key cannot be loaded, is on the wrong curve
            or cannot be used for ECDSA
    """
    try:
        hash_alg = _hash_for(digest)
        key = serialization.load_pem_private_key(
            _pem_bytes(private_key),
            password=None,
            backend=default_backend()
        )
        if not isinstance(key, ec.EllipticCurvePrivateKey):
            raise TypeError(f"Expected an EC private key, got {type(key).__name__}")
        _check_curve(key, curve)
        return key.sign(message, ec.ECDSA(hash_alg))
    except (ValueError, TypeError, UnsupportedAlgorithm) as e:
        logger.error("ECDSA signing failed: %s", e)
        raise SigningFailedError(f"Unable to sign data: {e}") from e


def verify(
    message: bytes,
    der_signature: bytes,
    public_key: PEM,
    digest: str,
    curve: Optional[str] = None,
) -> VerifyResult:
    """
    Verify a DER signature with an EC public key.

    A signature that does not match yields ``VerifyResult.INVALID``; only a
    failure to attempt verification raises.

    Raises:
        VerificationError: If the key cannot be loaded, is not an EC key on
            the required curve, or the digest is unknown
    """
    try:
        hash_alg = _hash_for(digest)
        key = serialization.load_pem_public_key(
            _pem_bytes(public_key),
            backend=default_backend()
        )
        if not isinstance(key, ec.EllipticCurvePublicKey):
            raise TypeError(f"Expected an EC public key, got {type(key).__name__}")
        _check_curve(key, curve)
    except (ValueError, TypeError, UnsupportedAlgorithm) as e:
        logger.error("ECDSA verification could not be attempted: %s", e)
        raise VerificationError(f"Unable to verify signature: {e}") from e

    try:
        key.verify(der_signature, message, ec.ECDSA(hash_alg))
    except InvalidSignature:
        return VerifyResult.INVALID
    return VerifyResult.VALID
