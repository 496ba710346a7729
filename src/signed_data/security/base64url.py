"""
Unpadded URL-safe base64, as required by JWS compact serialization.
"""
import base64
import binascii
import re

from .exceptions import MalformedEncodingError

_ALPHABET_RE = re.compile(r"[A-Za-z0-9_-]*")


def encode(data: bytes) -> str:
    """Base64url encode without padding."""
    return base64.urlsafe_b64encode(data).rstrip(b"=").decode("ascii")


def decode(text: str) -> bytes:
    """
    Base64url decode, adding back any missing padding.

    Raises:
        MalformedEncodingError: If the text contains characters outside the
            base64url alphabet, its length cannot be padded to a valid one,
            or its unused trailing bits are not zero
    """
    if not isinstance(text, str) or _ALPHABET_RE.fullmatch(text) is None:
        raise MalformedEncodingError("Invalid characters in base64url input.")
    if len(text) % 4 == 1:
        raise MalformedEncodingError("Invalid base64url length.")

    padded = text + "=" * (-len(text) % 4)
    try:
        data = base64.urlsafe_b64decode(padded.encode("ascii"))
    except binascii.Error as e:
        raise MalformedEncodingError(f"Invalid base64url input: {e}") from e

    # unused trailing bits must be zero
    if encode(data) != text:
        raise MalformedEncodingError("Non-canonical base64url input.")
    return data
