"""
Conversion between the fixed-width JWS ECDSA signature (R || S) and the
DER ``SEQUENCE { INTEGER r, INTEGER s }`` used by ECDSA sign/verify.
"""
from typing import List

from . import asn1
from .exceptions import MalformedSignatureError, TruncatedDerError


def raw_to_der(sig: bytes) -> bytes:
    """
    Convert a raw ``R || S`` signature to DER.

    The signature is split at ``len(sig) // 2``; an odd trailing byte is
    ignored.

    Raises:
        MalformedSignatureError: If a component is too long to encode
    """
    half = len(sig) // 2
    r, s = sig[:half], sig[half:2 * half]
    try:
        return asn1.encode_sequence(asn1.encode_integer(r) + asn1.encode_integer(s))
    except ValueError as e:
        raise MalformedSignatureError(f"Signature too long for DER: {e}") from e


def der_to_raw(der: bytes, key_size_bits: int) -> bytes:
    """
    Convert a DER signature to raw ``R || S``, each padded to the key size.

    Args:
        der: DER-encoded ``SEQUENCE { INTEGER r, INTEGER s }``
        key_size_bits: Curve size in bits (256 for ES256)

    Returns:
        ``2 * key_size_bits // 8`` bytes

    Raises:
        MalformedSignatureError: If the DER is not exactly a sequence of two
            non-negative integers that fit the key size
    """
    width = key_size_bits // 8
    try:
        integers = _read_integer_pair(der)
    except TruncatedDerError as e:
        raise MalformedSignatureError(f"Invalid DER signature: {e.message}") from e

    raw = b""
    for value in integers:
        if value and value[0] & 0x80:
            raise MalformedSignatureError("Negative integer in DER signature.")
        value = value.lstrip(b"\x00")
        if len(value) > width:
            raise MalformedSignatureError(
                f"Integer of {len(value)} bytes exceeds key size of {width} bytes."
            )
        raw += value.rjust(width, b"\x00")
    return raw


def _read_integer_pair(der: bytes) -> List[bytes]:
    sequence = asn1.read_header(der, 0)
    if not sequence.constructed or sequence.type != asn1.ASN1_SEQUENCE:
        raise MalformedSignatureError("DER signature is not a SEQUENCE.")
    if sequence.end != len(der):
        raise MalformedSignatureError("Trailing bytes after DER signature.")

    integers = []
    offset = sequence.content_offset
    while offset < sequence.end:
        child = asn1.read_header(der, offset)
        if child.constructed or child.type != asn1.ASN1_INTEGER:
            raise MalformedSignatureError("DER signature contains a non-INTEGER.")
        if child.end > sequence.end:
            raise MalformedSignatureError("INTEGER extends past its SEQUENCE.")
        offset, value = asn1.read_object(der, offset)
        integers.append(value)

    if len(integers) != 2:
        raise MalformedSignatureError(
            f"Expected 2 integers in DER signature, found {len(integers)}."
        )
    return integers
