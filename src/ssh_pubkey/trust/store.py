"""Allowed signers: which keys may sign for which principals."""

import logging
from pathlib import Path
from typing import Optional

import yaml
from pydantic import BaseModel, Field, ValidationError

from ..core.config import DEFAULT_CONFIG, CodecConfig
from ..core.errors import ConfigurationError
from ..integrations.pydantic import OpenSshPublicKey
from ..public.key_data import KeyData
from ..public.public_key import PublicKey

logger = logging.getLogger(__name__)


class AllowedSigner(BaseModel):
    """A public key trusted to sign for a principal."""

    principal: str = Field(description="Signer identity (e.g. email address)")
    public_key: OpenSshPublicKey = Field(description="Signer's public key")
    namespaces: list[str] = Field(
        default_factory=list, description="Permitted namespaces; empty allows any"
    )
    enabled: bool = Field(default=True, description="Whether the signer is enabled")

    def allows_namespace(self, namespace: str) -> bool:
        return not self.namespaces or namespace in self.namespaces


class AllowedSignersConfig(BaseModel):
    """Allowed signers file contents."""

    version: str = Field(default="1.0")
    signers: list[AllowedSigner] = Field(default_factory=list)


class AllowedSigners:
    """Manages the public keys allowed to sign for each principal."""

    def __init__(self):
        """Initialize an empty allowed signers store."""
        self._signers: dict[str, list[AllowedSigner]] = {}

    def add_signer(
        self,
        principal: str,
        public_key: PublicKey | str,
        namespaces: Optional[list[str]] = None,
        enabled: bool = True,
    ) -> AllowedSigner:
        """Allow a key to sign for a principal.

        Args:
            principal: Signer identity (e.g. "user@example.com")
            public_key: Public key or OpenSSH formatted key line
            namespaces: Namespaces the key may sign in (default any)
            enabled: Whether the entry is enabled (default True)

        Returns:
            The new entry
        """
        signer = AllowedSigner(
            principal=principal,
            public_key=public_key,
            namespaces=namespaces or [],
            enabled=enabled,
        )
        self._signers.setdefault(principal, []).append(signer)
        return signer

    def remove_signer(self, principal: str, public_key: Optional[PublicKey] = None) -> None:
        """Remove a principal's keys, or only the entry for `public_key`.

        Keys are matched by key data; comments are ignored.
        """
        if public_key is None:
            self._signers.pop(principal, None)
            return

        remaining = [
            s for s in self._signers.get(principal, []) if s.public_key.key_data != public_key.key_data
        ]
        if remaining:
            self._signers[principal] = remaining
        else:
            self._signers.pop(principal, None)

    def get_signers(self, principal: str) -> list[AllowedSigner]:
        """Enabled entries for a principal."""
        return [s for s in self._signers.get(principal, []) if s.enabled]

    def find_key(self, principal: str, key_data: KeyData) -> Optional[AllowedSigner]:
        """Enabled entry of `principal` holding `key_data`, if any."""
        for signer in self.get_signers(principal):
            if signer.public_key.key_data == key_data:
                return signer
        return None

    def is_allowed(self, principal: str) -> bool:
        return bool(self.get_signers(principal))

    def list_signers(self) -> list[AllowedSigner]:
        """All entries, including disabled ones."""
        return [s for signers in self._signers.values() for s in signers]

    @classmethod
    def from_config(
        cls, config_path: str | Path, config: CodecConfig = DEFAULT_CONFIG
    ) -> "AllowedSigners":
        """Load allowed signers from a YAML file.

        Args:
            config_path: Path to YAML file
            config: Codec configuration used to build the keys

        Returns:
            AllowedSigners instance

        Raises:
            ConfigurationError: If the file cannot be loaded or parsed
        """
        config_path = Path(config_path)
        if not config_path.exists():
            raise ConfigurationError(f"Allowed signers file not found: {config_path}")

        try:
            with open(config_path, "r") as f:
                data = yaml.safe_load(f) or {}
            parsed = AllowedSignersConfig.model_validate(
                data, context={"human_readable": True}
            )
        except (OSError, yaml.YAMLError, ValidationError) as e:
            raise ConfigurationError(f"Failed to load allowed signers: {e}") from e

        key_class = config.public_key_class()
        store = cls()
        for signer in parsed.signers:
            store.add_signer(
                principal=signer.principal,
                public_key=key_class(signer.public_key.key_data, signer.public_key.comment),
                namespaces=signer.namespaces,
                enabled=signer.enabled,
            )

        logger.debug(
            "Loaded %d allowed signers from %s", len(store.list_signers()), config_path
        )
        return store

    def save(self, config_path: str | Path) -> None:
        """Save allowed signers to a YAML file."""
        data = AllowedSignersConfig(signers=self.list_signers()).model_dump(mode="json")

        with open(Path(config_path), "w") as f:
            # Keep each OpenSSH line on a single line
            yaml.safe_dump(
                data, f, default_flow_style=False, sort_keys=False, width=float("inf")
            )
