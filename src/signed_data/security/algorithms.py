"""
Supported JWS algorithms and their digest / key size parameters.
"""
from dataclasses import dataclass
from types import MappingProxyType
from typing import Mapping

from .exceptions import UnsupportedAlgorithmError


@dataclass(frozen=True)
class AlgorithmDescriptor:
    name: str
    digest: str
    key_size: int
    curve: str

    @property
    def key_bytes(self) -> int:
        """Width of each signature component in bytes."""
        return self.key_size // 8


ES256 = "ES256"

ALGORITHMS: Mapping[str, AlgorithmDescriptor] = MappingProxyType({
    ES256: AlgorithmDescriptor(name=ES256, digest="SHA256", key_size=256, curve="secp256r1"),
})


def get_algorithm(name: str) -> AlgorithmDescriptor:
    """
    Look up an algorithm descriptor.

    Raises:
        UnsupportedAlgorithmError: If the algorithm is not supported
    """
    try:
        return ALGORITHMS[name]
    except (KeyError, TypeError):
        raise UnsupportedAlgorithmError(f"Algorithm not supported: {name}") from None
