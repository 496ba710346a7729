"""
Minimal ASN.1 DER reader/writer.

Only what ECDSA signatures need is written: INTEGER and SEQUENCE with
short-form lengths. The reader understands any tag with short or long form
lengths and bounds-checks every read against the buffer.
"""
from typing import NamedTuple, Optional, Tuple

from .exceptions import TruncatedDerError

ASN1_INTEGER = 0x02
ASN1_BIT_STRING = 0x03
ASN1_SEQUENCE = 0x10

CONSTRUCTED = 0x20
MAX_SHORT_LENGTH = 0x7F
# Longest accepted long-form length, in bytes
MAX_LENGTH_BYTES = 4


class DerHeader(NamedTuple):
    """Parsed identifier and length octets of one DER object."""
    tag: int
    constructed: bool
    type: int
    length: int
    content_offset: int

    @property
    def end(self) -> int:
        return self.content_offset + self.length


def _encode(type_: int, content: bytes) -> bytes:
    if len(content) > MAX_SHORT_LENGTH:
        raise ValueError(
            f"DER content of {len(content)} bytes needs a long-form length"
        )
    tag = type_
    if type_ == ASN1_SEQUENCE:
        tag |= CONSTRUCTED
    return bytes([tag, len(content)]) + content


def encode_integer(value: bytes) -> bytes:
    """
    Encode big-endian unsigned bytes as a minimal DER INTEGER.

    Leading zero bytes are stripped, and a single zero byte is prepended when
    the high bit of the first remaining byte is set so the value stays
    non-negative. An all-zero (or empty) value encodes as the integer 0.

    Raises:
        ValueError: If the content does not fit a short-form length
    """
    content = value.lstrip(b"\x00")
    if not content or content[0] & 0x80:
        content = b"\x00" + content
    return _encode(ASN1_INTEGER, content)


def encode_sequence(children: bytes) -> bytes:
    """
    Wrap already-encoded children in a DER SEQUENCE.

    Raises:
        ValueError: If the content does not fit a short-form length
    """
    return _encode(ASN1_SEQUENCE, children)


def read_header(buffer: bytes, offset: int = 0) -> DerHeader:
    """
    Parse the tag and length of the DER object starting at ``offset``.

    Raises:
        TruncatedDerError: If the header or the content it announces runs
            past the end of the buffer, or the length form is not valid DER
    """
    size = len(buffer)
    if offset < 0 or offset + 2 > size:
        raise TruncatedDerError(f"No DER header at offset {offset}.")

    tag = buffer[offset]
    pos = offset + 1
    length = buffer[pos]
    pos += 1

    if length & 0x80:
        num_bytes = length & 0x7F
        if num_bytes == 0:
            raise TruncatedDerError("Indefinite length form is not valid DER.")
        if num_bytes > MAX_LENGTH_BYTES:
            raise TruncatedDerError(f"Length of {num_bytes} bytes is too large.")
        if pos + num_bytes > size:
            raise TruncatedDerError("DER length bytes are truncated.")
        length = int.from_bytes(buffer[pos:pos + num_bytes], "big")
        pos += num_bytes

    if pos + length > size:
        raise TruncatedDerError(
            f"DER object needs {length} bytes at offset {pos}, "
            f"buffer has {size - pos}."
        )

    return DerHeader(
        tag=tag,
        constructed=bool((tag >> 5) & 0x01),
        type=tag & 0x1F,
        length=length,
        content_offset=pos,
    )


def read_object(buffer: bytes, offset: int = 0) -> Tuple[int, Optional[bytes]]:
    """
    Read one DER object.

    Args:
        buffer: DER-encoded data
        offset: Position of the object's tag byte

    Returns:
        ``(next_offset, value)``. For primitive objects ``value`` is the
        content and ``next_offset`` points past it. For constructed objects
        ``value`` is None and ``next_offset`` points at the first child, so
        the caller can recurse into it.

    Raises:
        TruncatedDerError: If the object runs past the end of the buffer
    """
    header = read_header(buffer, offset)
    pos = header.content_offset

    if header.type == ASN1_BIT_STRING and not header.constructed:
        if header.length < 1:
            raise TruncatedDerError("BIT STRING is missing its unused-bits byte.")
        # skip the unused-bits byte
        return header.end, bytes(buffer[pos + 1:header.end])

    if header.constructed:
        return pos, None

    return header.end, bytes(buffer[pos:header.end])
