"""
Custom exceptions for the ES256 JWT codec.

Every error carries an ``ErrorKind`` so callers can dispatch on
``exc.kind`` instead of on the class hierarchy.
"""
from enum import Enum


class ErrorKind(str, Enum):
    """Machine-readable error kinds surfaced by the codec."""
    UNSUPPORTED_ALGORITHM = "UNSUPPORTED_ALGORITHM"
    MALFORMED_TOKEN = "MALFORMED_TOKEN"
    ALGORITHM_MISMATCH = "ALGORITHM_MISMATCH"
    MALFORMED_SIGNATURE = "MALFORMED_SIGNATURE"
    SIGNING_FAILED = "SIGNING_FAILED"
    VERIFICATION_ERROR = "VERIFICATION_ERROR"
    SIGNATURE_INVALID = "SIGNATURE_INVALID"
    TOKEN_EXPIRED = "TOKEN_EXPIRED"
    MALFORMED_ENCODING = "MALFORMED_ENCODING"
    TRUNCATED_DER = "TRUNCATED_DER"
    MISSING_KEY = "MISSING_KEY"


class JWTError(Exception):
    """Base exception for JWT-related errors."""
    kind: ErrorKind

    def __init__(self, message: str, kind: ErrorKind):
        self.message = message
        self.kind = kind
        super().__init__(self.message)


class UnsupportedAlgorithmError(JWTError):
    """Requested algorithm is not in the algorithm table."""
    def __init__(self, message: str = "Algorithm not supported."):
        super().__init__(message, ErrorKind.UNSUPPORTED_ALGORITHM)


class MalformedTokenError(JWTError):
    """Token structure, encoding or header is invalid."""
    def __init__(self, message: str = "Token is malformed."):
        super().__init__(message, ErrorKind.MALFORMED_TOKEN)


class AlgorithmMismatchError(JWTError):
    """Header algorithm differs from the algorithm requested by the caller."""
    def __init__(self, message: str = "Incorrect key for this algorithm."):
        super().__init__(message, ErrorKind.ALGORITHM_MISMATCH)


class MalformedSignatureError(JWTError):
    """Signature could not be converted between raw and DER form."""
    def __init__(self, message: str = "Signature is malformed."):
        super().__init__(message, ErrorKind.MALFORMED_SIGNATURE)


class SigningFailedError(JWTError):
    """The signing primitive reported failure."""
    def __init__(self, message: str = "Unable to sign data."):
        super().__init__(message, ErrorKind.SIGNING_FAILED)


class VerificationError(JWTError):
    """The verification primitive could not complete."""
    def __init__(self, message: str = "Unable to verify signature."):
        super().__init__(message, ErrorKind.VERIFICATION_ERROR)


class SignatureInvalidError(JWTError):
    """Token signature is invalid."""
    def __init__(self, message: str = "Signature verification failed."):
        super().__init__(message, ErrorKind.SIGNATURE_INVALID)


class TokenExpiredError(JWTError):
    """Token has expired."""
    def __init__(self, message: str = "Expired token."):
        super().__init__(message, ErrorKind.TOKEN_EXPIRED)


class MalformedEncodingError(JWTError):
    """Input is not valid unpadded base64url."""
    def __init__(self, message: str = "Invalid base64url encoding."):
        super().__init__(message, ErrorKind.MALFORMED_ENCODING)


class TruncatedDerError(JWTError):
    """DER object extends past the end of its buffer."""
    def __init__(self, message: str = "DER data is truncated."):
        super().__init__(message, ErrorKind.TRUNCATED_DER)


class MissingKeyError(JWTError):
    """Requested key material is not configured."""
    def __init__(self, message: str = "Key is not configured."):
        super().__init__(message, ErrorKind.MISSING_KEY)
