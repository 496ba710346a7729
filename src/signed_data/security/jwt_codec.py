"""
JWT encoding, verification and decoding using ES256.

Tokens use JWS compact serialization: three base64url segments holding the
header JSON, the payload JSON and the raw ``R || S`` signature.
"""
import json
import logging
import time
from typing import Any, Callable, Dict, Mapping, Tuple, Union

from . import base64url
from .algorithms import get_algorithm
from .exceptions import (
    AlgorithmMismatchError,
    MalformedEncodingError,
    MalformedSignatureError,
    MalformedTokenError,
    SignatureInvalidError,
    TokenExpiredError,
    VerificationError,
)
from .public_key import PublicKey
from .signature_format import der_to_raw, raw_to_der
from .signer import PEM, VerifyResult, sign, verify

logger = logging.getLogger(__name__)


def _to_json(value: Mapping[str, Any]) -> bytes:
    return json.dumps(dict(value), separators=(",", ":"), allow_nan=False).encode("utf-8")


def _from_json(data: bytes) -> Dict[str, Any]:
    value = json.loads(data.decode("utf-8"))
    if not isinstance(value, dict):
        raise ValueError("JSON value is not an object")
    return value


def _split(token: str) -> Tuple[str, str, str]:
    if not isinstance(token, str):
        raise MalformedTokenError("Token must be a string")
    parts = token.split(".")
    if len(parts) != 3:
        raise MalformedTokenError("Wrong number of segments")
    return parts[0], parts[1], parts[2]


def _decode_segment(segment: str, what: str) -> Dict[str, Any]:
    try:
        return _from_json(base64url.decode(segment))
    except (MalformedEncodingError, ValueError, RecursionError) as e:
        raise MalformedTokenError(f"Invalid {what} encoding") from e


class JWTCodec:
    """
    Stateless ES256 JWT codec.

    The only state is the clock used for the ``exp`` check, so one instance
    can be shared freely between threads.
    """

    def __init__(self, clock: Callable[[], float] = time.time):
        """
        Args:
            clock: Returns the current Unix time in seconds
        """
        self._clock = clock

    def encode(self, payload: Mapping[str, Any], private_key: PEM, algorithm: str) -> str:
        """
        Encode a payload as a signed JWT.

        Args:
            payload: Claims to sign; serialized as-is, in iteration order
            private_key: PEM-encoded EC private key
            algorithm: Signing algorithm, e.g. "ES256"

        Returns:
            The JWT string

        Raises:
            UnsupportedAlgorithmError: If the algorithm is not supported
            SigningFailedError: If the private key cannot be used to sign, or
                is not on the algorithm's curve
        """
        alg = get_algorithm(algorithm)

        header = {"typ": "JWT", "alg": alg.name}
        segments = [
            base64url.encode(_to_json(header)),
            base64url.encode(_to_json(payload)),
        ]
        signing_input = ".".join(segments).encode("ascii")

        der_signature = sign(signing_input, private_key, alg.digest, alg.curve)
        segments.append(base64url.encode(der_to_raw(der_signature, alg.key_size)))

        logger.debug("Encoded %s token", alg.name)
        return ".".join(segments)

    def decode(
        self,
        token: str,
        public_key: Union[PEM, PublicKey],
        algorithm: str,
    ) -> Dict[str, Any]:
        """
        Verify a JWT and return its payload.

        Expiry is only checked once the signature is known to be valid, so a
        tampered token is reported as invalid even when it is also expired.

        Args:
            token: JWT string
            public_key: PEM-encoded EC public key, or a PublicKey
            algorithm: Expected algorithm, e.g. "ES256"

        Returns:
            The decoded payload, unchanged

        Raises:
            UnsupportedAlgorithmError: If the algorithm is not supported
            MalformedTokenError: If the token structure or encoding is invalid
            AlgorithmMismatchError: If the token or key uses another algorithm
            MalformedSignatureError: If the signature has the wrong size
            VerificationError: If verification could not be attempted
            SignatureInvalidError: If the signature does not match
            TokenExpiredError: If the token has expired
        """
        alg = get_algorithm(algorithm)

        if isinstance(public_key, PublicKey):
            if public_key.algorithm != alg.name:
                raise AlgorithmMismatchError(
                    f"Key is for {public_key.algorithm}, not {alg.name}"
                )
            try:
                public_key = public_key.to_pem()
            except ValueError as e:
                raise VerificationError(f"Unusable public key: {e}") from e

        head_b64, body_b64, sig_b64 = _split(token)
        header = _decode_segment(head_b64, "header")
        payload = _decode_segment(body_b64, "claims")

        if not header.get("alg"):
            raise MalformedTokenError("Empty algorithm")
        if header["alg"] != alg.name:
            raise AlgorithmMismatchError("Incorrect key for this algorithm")

        try:
            raw_signature = base64url.decode(sig_b64)
        except MalformedEncodingError as e:
            raise MalformedTokenError("Invalid signature encoding") from e
        if len(raw_signature) != 2 * alg.key_bytes:
            raise MalformedSignatureError(
                f"Signature must be {2 * alg.key_bytes} bytes, got {len(raw_signature)}"
            )

        message = f"{head_b64}.{body_b64}".encode("ascii")
        result = verify(message, raw_to_der(raw_signature), public_key, alg.digest, alg.curve)
        if result is not VerifyResult.VALID:
            logger.warning("JWT signature verification failed")
            raise SignatureInvalidError("Signature verification failed")

        if "exp" in payload:
            exp = payload["exp"]
            if isinstance(exp, bool) or not isinstance(exp, (int, float)):
                raise MalformedTokenError("Invalid exp claim")
            if self._clock() >= exp:
                logger.info("Rejected expired JWT (exp=%s)", exp)
                raise TokenExpiredError("Expired token")

        return payload

    def get_unverified_header(self, token: str) -> Dict[str, Any]:
        """
        Decode the token header WITHOUT verification.

        Raises:
            MalformedTokenError: If the token cannot be decoded
        """
        head_b64, _, _ = _split(token)
        return _decode_segment(head_b64, "header")

    def decode_unverified(self, token: str) -> Dict[str, Any]:
        """
        Decode the token payload WITHOUT verification.

        WARNING: neither the signature nor the claims are checked. Use only
        for debugging and troubleshooting.

        Raises:
            MalformedTokenError: If the token cannot be decoded
        """
        head_b64, body_b64, _ = _split(token)
        _decode_segment(head_b64, "header")
        return _decode_segment(body_b64, "claims")


_default_codec = JWTCodec()

encode = _default_codec.encode
decode = _default_codec.decode
get_unverified_header = _default_codec.get_unverified_header
decode_unverified = _default_codec.decode_unverified
