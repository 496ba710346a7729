"""Codec configuration from environment variables or a YAML file."""
import os
from functools import lru_cache
from typing import Any, Dict, Optional

import yaml
from pydantic import BaseModel, Field, field_validator

from signed_data.security.algorithms import ALGORITHMS, ES256


def _unescape_pem(value: Optional[str]) -> Optional[str]:
    # PEM values in env files usually carry literal "\n" sequences
    if not value:
        return None
    return value.replace("\\n", "\n")


class CodecConfig(BaseModel):
    """
    Configuration for signing and verifying tokens.
    """
    algorithm: str = Field(default=ES256, description="JWS algorithm for signing and verification")
    private_key: Optional[str] = Field(default=None, description="PEM private key used to sign tokens")
    public_key: Optional[str] = Field(default=None, description="Public key used to verify tokens")
    public_key_encoding: str = Field(default="PEM", description="Encoding of public_key: PEM or HEX")
    project: Optional[str] = Field(default=None, description="Project the keys belong to")

    @field_validator("algorithm")
    @classmethod
    def _check_algorithm(cls, value: str) -> str:
        if value not in ALGORITHMS:
            raise ValueError(f"Unsupported algorithm: {value}")
        return value

    @classmethod
    def _from_mapping(cls, data: Dict[str, Any]) -> "CodecConfig":
        return cls(
            algorithm=data.get("JWT_ALGORITHM") or ES256,
            private_key=_unescape_pem(data.get("JWT_PRIVATE_KEY")),
            public_key=_unescape_pem(data.get("JWT_PUBLIC_KEY")),
            public_key_encoding=data.get("JWT_PUBLIC_KEY_ENCODING") or "PEM",
            project=data.get("JWT_PROJECT") or None,
        )

    @classmethod
    def from_env(cls) -> "CodecConfig":
        """
        Load codec configuration from environment variables.

        Environment variables:
            JWT_ALGORITHM: Signing algorithm (default ES256)
            JWT_PRIVATE_KEY: PEM private key
            JWT_PUBLIC_KEY: Public key, PEM or hex
            JWT_PUBLIC_KEY_ENCODING: PEM or HEX (default PEM)
            JWT_PROJECT: Project the keys belong to

        Returns:
            CodecConfig instance
        """
        return cls._from_mapping(dict(os.environ))

    @classmethod
    def from_yaml(cls, config_path: Optional[str] = None) -> "CodecConfig":
        """
        Load codec configuration from a YAML file.

        Args:
            config_path: Path to the YAML file. If None, uses the
                CODEC_CONFIG_PATH env var or defaults to ./codec.yaml

        Returns:
            CodecConfig instance; defaults when the file does not exist
        """
        if config_path is None:
            config_path = os.getenv("CODEC_CONFIG_PATH", "codec.yaml")

        if not os.path.exists(config_path):
            return cls()

        with open(config_path, "r") as f:
            config_data = yaml.safe_load(f) or {}
        if not isinstance(config_data, dict):
            raise ValueError(f"{config_path} must contain a mapping")

        return cls._from_mapping(config_data)


@lru_cache()
def get_codec_config() -> CodecConfig:
    """
    Get cached codec configuration, from the YAML file when CODEC_CONFIG_PATH
    is set and from the environment otherwise.
    """
    if os.getenv("CODEC_CONFIG_PATH"):
        return CodecConfig.from_yaml()
    return CodecConfig.from_env()
