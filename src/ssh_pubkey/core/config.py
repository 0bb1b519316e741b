"""Codec configuration."""

import logging
from pathlib import Path

import yaml
from pydantic import BaseModel, Field, ValidationError, field_validator

from .errors import ConfigurationError
from .models import HashAlg

logger = logging.getLogger(__name__)


class CodecConfig(BaseModel):
    """Options controlling how public keys are decoded and written."""

    preserve_comments: bool = Field(
        default=True, description="Keep key comments; when False comments are discarded"
    )
    default_hash_alg: HashAlg = Field(
        default=HashAlg.SHA256, description="Hash algorithm for fingerprints"
    )
    line_ending: str = Field(default="\n", description="Terminator for written key files")

    @field_validator("line_ending")
    @classmethod
    def check_line_ending(cls, v: str) -> str:
        if v not in ("\n", "\r\n"):
            raise ValueError("line_ending must be '\\n' or '\\r\\n'")
        return v

    def public_key_class(self):
        """Public key type for this configuration.

        Returns:
            PublicKey, or CommentlessPublicKey when comments are not preserved
        """
        from ..public.public_key import CommentlessPublicKey, PublicKey

        return PublicKey if self.preserve_comments else CommentlessPublicKey

    @classmethod
    def from_yaml(cls, config_path: str | Path) -> "CodecConfig":
        """Load configuration from a YAML file.

        Args:
            config_path: Path to YAML config file

        Returns:
            CodecConfig instance

        Raises:
            ConfigurationError: If the file cannot be read or is invalid
        """
        config_path = Path(config_path)
        if not config_path.exists():
            raise ConfigurationError(f"Config file not found: {config_path}")

        try:
            with open(config_path, "r") as f:
                data = yaml.safe_load(f) or {}
            config = cls.model_validate(data)
        except (OSError, yaml.YAMLError, ValidationError) as e:
            raise ConfigurationError(f"Failed to load config: {e}") from e

        logger.debug("Loaded codec config from %s: %s", config_path, config)
        return config

    def save(self, config_path: str | Path) -> None:
        """Save configuration to a YAML file."""
        with open(Path(config_path), "w") as f:
            yaml.safe_dump(
                self.model_dump(mode="json"),
                f,
                default_flow_style=False,
                sort_keys=False,
                width=float("inf"),
            )


DEFAULT_CONFIG = CodecConfig()
