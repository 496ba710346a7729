"""
Unit tests for raw (R || S) <-> DER signature conversion.
"""
import os

import pytest
from cryptography.hazmat.primitives.asymmetric.utils import (
    decode_dss_signature,
    encode_dss_signature,
)

from signed_data.security.exceptions import ErrorKind, MalformedSignatureError
from signed_data.security.signature_format import der_to_raw, raw_to_der


def pad32(value: bytes) -> bytes:
    return value.rjust(32, b"\x00")


COMPONENTS = [
    pytest.param(b"", b"\x01", id="r-empty"),
    pytest.param(b"\x00" * 32, os.urandom(32), id="r-all-zero"),
    pytest.param(os.urandom(32), b"\x00" * 32, id="s-all-zero"),
    pytest.param(b"\x80" + os.urandom(31), b"\x01" * 32, id="r-high-bit"),
    pytest.param(b"\x7f" * 32, b"\xff" * 32, id="s-high-bit"),
    pytest.param(b"\x12" * 32, b"\x34" * 32, id="full-width-no-leading-zero"),
    pytest.param(b"\x00\x00\x81", b"\x00\x7f", id="short-with-leading-zeros"),
    pytest.param(b"\x01", b"\x80", id="single-byte"),
]


class TestRawToDer:
    """Tests for raw to DER conversion."""

    def test_known_encoding(self):
        """Test the exact DER produced for small components."""
        raw = pad32(b"\x01") + pad32(b"\x80")
        assert raw_to_der(raw) == b"\x30\x07\x02\x01\x01\x02\x02\x00\x80"

    @pytest.mark.parametrize("r,s", COMPONENTS)
    def test_matches_cryptography_encoding(self, r, s):
        """Test that our DER is byte-identical to cryptography's."""
        raw = pad32(r) + pad32(s)
        expected = encode_dss_signature(int.from_bytes(r, "big"), int.from_bytes(s, "big"))
        assert raw_to_der(raw) == expected

    def test_odd_length_split_floors(self):
        """Test that an odd trailing byte is ignored."""
        assert raw_to_der(b"\x01\x02\x03") == raw_to_der(b"\x01\x02")

    def test_empty_signature(self):
        """Test that an empty signature encodes two zero integers."""
        assert raw_to_der(b"") == b"\x30\x06\x02\x01\x00\x02\x01\x00"

    def test_oversized_component_rejected(self):
        """Test components too long for short-form DER."""
        with pytest.raises(MalformedSignatureError):
            raw_to_der(b"\x01" * 400)


class TestDerToRaw:
    """Tests for DER to raw conversion."""

    @pytest.mark.parametrize("r,s", COMPONENTS)
    def test_inverse(self, r, s):
        """Test der_to_raw(raw_to_der(x)) == x for padded components."""
        raw = pad32(r) + pad32(s)
        assert der_to_raw(raw_to_der(raw), 256) == raw

    def test_random_inverse(self):
        """Test the inverse property on random signatures."""
        for _ in range(200):
            raw = os.urandom(64)
            assert der_to_raw(raw_to_der(raw), 256) == raw

    def test_cryptography_signature(self):
        """Test converting DER produced by cryptography."""
        r, s = 2 ** 255 + 7, 12345
        raw = der_to_raw(encode_dss_signature(r, s), 256)
        assert len(raw) == 64
        assert int.from_bytes(raw[:32], "big") == r
        assert int.from_bytes(raw[32:], "big") == s

    def test_der_round_trip(self):
        """Test DER -> raw -> DER for DER produced by this codec."""
        der = raw_to_der(pad32(b"\x80\x01") + pad32(b"\x05"))
        assert raw_to_der(der_to_raw(der, 256)) == der
        assert decode_dss_signature(der) == (0x8001, 5)

    @pytest.mark.parametrize("der", [
        pytest.param(b"\x02\x01\x01", id="not-a-sequence"),
        pytest.param(b"\x30\x03\x02\x01\x01", id="one-integer"),
        pytest.param(b"\x30\x09\x02\x01\x01\x02\x01\x02\x02\x01\x03", id="three-integers"),
        pytest.param(b"\x30\x06\x02\x01\x01\x02\x01\x02\x00", id="trailing-bytes"),
        pytest.param(b"\x30\x06\x02\x01\x01\x04\x01\x02", id="non-integer-child"),
        pytest.param(b"\x30\x08\x02\x01\x01\x30\x03\x02\x01\x02", id="nested-sequence"),
        pytest.param(b"\x30\x06\x02\x01\x01\x02\x01\x80", id="negative-integer"),
        pytest.param(b"\x30\x06\x02\x01\x01\x02\x05\x02", id="child-past-sequence"),
        pytest.param(b"\x30\x08\x02\x01\x01", id="truncated"),
        pytest.param(b"", id="empty"),
    ])
    def test_rejects_malformed_structure(self, der):
        """Test that anything but SEQUENCE{INTEGER, INTEGER} is rejected."""
        with pytest.raises(MalformedSignatureError) as exc_info:
            der_to_raw(der, 256)
        assert exc_info.value.kind is ErrorKind.MALFORMED_SIGNATURE

    def test_rejects_integer_wider_than_key(self):
        """Test that an integer over 32 bytes is rejected."""
        der = encode_dss_signature(2 ** 264, 1)
        with pytest.raises(MalformedSignatureError):
            der_to_raw(der, 256)

    def test_accepts_sign_padded_full_width(self):
        """Test that a 33-byte INTEGER with a sign byte still fits."""
        der = encode_dss_signature(2 ** 256 - 1, 2 ** 256 - 1)
        assert der_to_raw(der, 256) == b"\xff" * 64
