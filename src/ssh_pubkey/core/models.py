"""Core data models for ssh-pubkey."""

import base64
import hashlib
from datetime import datetime
from enum import Enum
from typing import Optional

from pydantic import BaseModel, Field, model_validator

from .encoding import decode_base64
from .errors import Base64Error, FormatError


class HashAlg(str, Enum):
    """Hash functions used for fingerprints and SSHSIG message digests."""

    SHA256 = "sha256"
    SHA512 = "sha512"

    @classmethod
    def parse(cls, name: str) -> "HashAlg":
        """Look up a hash algorithm by its SSH name (e.g. "sha512")."""
        try:
            return cls(name)
        except ValueError:
            raise FormatError(f"Unsupported hash algorithm: {name!r}") from None

    @property
    def prefix(self) -> str:
        """Fingerprint prefix, e.g. "SHA256"."""
        return self.value.upper()

    @property
    def digest_size(self) -> int:
        return hashlib.new(self.value).digest_size

    def digest(self, data: bytes) -> bytes:
        return hashlib.new(self.value, data).digest()


class Fingerprint(BaseModel):
    """Key fingerprint: a hash algorithm and the digest of the key blob."""

    algorithm: HashAlg = Field(description="Hash algorithm used")
    digest: bytes = Field(description="Digest of the encoded key data")

    model_config = {"frozen": True}

    @model_validator(mode="after")
    def check_digest_size(self) -> "Fingerprint":
        if len(self.digest) != self.algorithm.digest_size:
            raise ValueError(
                f"{self.algorithm.prefix} digest must be {self.algorithm.digest_size} bytes"
            )
        return self

    @classmethod
    def compute(cls, algorithm: HashAlg, key_blob: bytes) -> "Fingerprint":
        """Fingerprint an encoded key blob."""
        return cls(algorithm=algorithm, digest=algorithm.digest(key_blob))

    @classmethod
    def parse(cls, text: str) -> "Fingerprint":
        """Parse the OpenSSH form, e.g. "SHA256:nThbg6kXUpJWGl7E1IGOCspRomTxdCARLviKw6E5SY8".

        Raises:
            FormatError: If the prefix or digest is invalid
        """
        prefix, sep, encoded = text.strip().partition(":")
        if not sep:
            raise FormatError(f"Invalid fingerprint: {text!r}")

        try:
            algorithm = HashAlg(prefix.lower())
        except ValueError:
            raise FormatError(f"Unsupported fingerprint algorithm: {prefix!r}") from None

        padded = encoded + "=" * (-len(encoded) % 4)
        try:
            digest = decode_base64(padded)
        except Base64Error as e:
            raise FormatError(f"Invalid fingerprint digest: {e}") from e

        if len(digest) != algorithm.digest_size:
            raise FormatError(
                f"{algorithm.prefix} digest must be {algorithm.digest_size} bytes"
            )
        return cls(algorithm=algorithm, digest=digest)

    def __str__(self) -> str:
        encoded = base64.b64encode(self.digest).decode("ascii").rstrip("=")
        return f"{self.algorithm.prefix}:{encoded}"


class ValidationResult(BaseModel):
    """Result of verifying a signature against allowed signers."""

    valid: bool = Field(description="Whether verification succeeded")
    error: Optional[str] = Field(default=None, description="Error message if invalid")

    # If valid, extracted information
    principal: Optional[str] = Field(default=None, description="Signer principal")
    namespace: Optional[str] = Field(default=None, description="Signature namespace")
    fingerprint: Optional[str] = Field(
        default=None, description="Fingerprint of the signing key"
    )

    validated_at: datetime = Field(
        default_factory=datetime.now, description="Validation timestamp"
    )

    def __bool__(self) -> bool:
        """Allow using ValidationResult in boolean context."""
        return self.valid
