"""
Public key value object as delivered by a key provider.
"""
from typing import ClassVar, Optional

from cryptography.hazmat.primitives import serialization
from cryptography.hazmat.primitives.asymmetric import ec
from pydantic import BaseModel, ConfigDict, Field


class PublicKey(BaseModel):
    """
    Public key material together with the algorithm it is meant for.

    ``key`` is either PEM text or, for ``HEX`` encoding, the hex of an
    uncompressed EC point.
    """
    model_config = ConfigDict(frozen=True)

    ENCODING_FORMAT_PEM: ClassVar[str] = "PEM"
    ENCODING_FORMAT_HEX: ClassVar[str] = "HEX"
    ALGORITHM_ES256: ClassVar[str] = "ES256"
    ALGORITHM_EDDSA: ClassVar[str] = "EdDSA"

    key: str = Field(..., description="Key material")
    algorithm: str = Field(default="ES256", description="Algorithm the key is used with")
    encoding_format: str = Field(default="PEM", description="PEM or HEX")
    project: Optional[str] = Field(default=None, description="Project the key belongs to")

    def to_pem(self) -> str:
        """
        Return the key as SubjectPublicKeyInfo PEM text.

        Raises:
            ValueError: If the encoding/algorithm combination is unsupported
                or the key material is invalid
        """
        if self.encoding_format == self.ENCODING_FORMAT_PEM:
            return self.key

        if self.encoding_format == self.ENCODING_FORMAT_HEX and self.algorithm == self.ALGORITHM_ES256:
            point = bytes.fromhex(self.key)
            public_key = ec.EllipticCurvePublicKey.from_encoded_point(ec.SECP256R1(), point)
            return public_key.public_bytes(
                encoding=serialization.Encoding.PEM,
                format=serialization.PublicFormat.SubjectPublicKeyInfo
            ).decode("utf-8")

        raise ValueError(
            f"Cannot convert {self.encoding_format} key for {self.algorithm} to PEM"
        )
