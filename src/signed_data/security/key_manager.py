"""
Key manager supplying the configured signing and verification keys.
"""
from functools import lru_cache

from signed_data.config.codec_config import CodecConfig, get_codec_config

from .exceptions import MissingKeyError
from .public_key import PublicKey


class KeyManager:
    """
    Hands out PEM key material for the configured algorithm.

    Keys are kept as text and are not parsed here; the signer loads them.
    """

    def __init__(self, config: CodecConfig):
        self.algorithm = config.algorithm
        self._private_key_pem = config.private_key
        self._public_key = None
        if config.public_key:
            self._public_key = PublicKey(
                key=config.public_key,
                algorithm=config.algorithm,
                encoding_format=config.public_key_encoding,
                project=config.project,
            )

    def get_private_key(self) -> str:
        """
        Get the PEM private key for signing.

        Raises:
            MissingKeyError: If no private key is configured
        """
        if not self._private_key_pem:
            raise MissingKeyError("No private key configured (JWT_PRIVATE_KEY)")
        return self._private_key_pem

    def get_public_key(self) -> PublicKey:
        """
        Get the public key for verification.

        Raises:
            MissingKeyError: If no public key is configured
        """
        if self._public_key is None:
            raise MissingKeyError("No public key configured (JWT_PUBLIC_KEY)")
        return self._public_key


@lru_cache()
def get_key_manager() -> KeyManager:
    """
    Get a cached KeyManager built from the codec configuration.
    """
    return KeyManager(get_codec_config())
