"""
Minimal JWT codec for ES256 (ECDSA P-256 + SHA-256).

Tokens are signed and verified with the ``cryptography`` package; the JWS
``R || S`` signature is converted to and from DER locally, so no
general-purpose JWT library is needed.

Example usage:
    from signed_data import encode, decode, TokenExpiredError

    token = encode({"sub": "user-42", "exp": now + 60}, private_key_pem, "ES256")

    try:
        payload = decode(token, public_key_pem, "ES256")
    except TokenExpiredError:
        print("Token has expired")
"""

from .security.exceptions import (
    ErrorKind,
    JWTError,
    UnsupportedAlgorithmError,
    MalformedTokenError,
    AlgorithmMismatchError,
    MalformedSignatureError,
    SigningFailedError,
    VerificationError,
    SignatureInvalidError,
    TokenExpiredError,
    MalformedEncodingError,
    TruncatedDerError,
    MissingKeyError,
)
from .security.algorithms import ALGORITHMS, ES256, AlgorithmDescriptor
from .security.public_key import PublicKey
from .security.jwt_codec import (
    JWTCodec,
    encode,
    decode,
    get_unverified_header,
    decode_unverified,
)
from .security.key_manager import KeyManager, get_key_manager

__all__ = [
    "ErrorKind",
    "JWTError",
    "UnsupportedAlgorithmError",
    "MalformedTokenError",
    "AlgorithmMismatchError",
    "MalformedSignatureError",
    "SigningFailedError",
    "VerificationError",
    "SignatureInvalidError",
    "TokenExpiredError",
    "MalformedEncodingError",
    "TruncatedDerError",
    "MissingKeyError",
    "ALGORITHMS",
    "ES256",
    "AlgorithmDescriptor",
    "PublicKey",
    "JWTCodec",
    "encode",
    "decode",
    "get_unverified_header",
    "decode_unverified",
    "KeyManager",
    "get_key_manager",
]
