"""Structured serialization of public keys.

Human-readable targets (JSON, YAML, TOML) get the OpenSSH line including the
comment. Binary targets get the raw key blob, so the comment is dropped; to
keep it with a binary format, serialize `PublicKey.to_openssh()` instead.
"""

from .public_key import PublicKey


class PublicKeySerde:
    """Converts public keys to and from a serialization target's native type."""

    def __init__(self, human_readable: bool, key_class: type[PublicKey] = PublicKey):
        """Initialize adapter.

        Args:
            human_readable: Whether the target format is human-readable
            key_class: PublicKey class to construct on deserialization
        """
        self.human_readable = human_readable
        self.key_class = key_class

    def serialize(self, public_key: PublicKey) -> str | bytes:
        if self.human_readable:
            return public_key.to_openssh()
        return public_key.to_bytes()

    def deserialize(self, value: str | bytes) -> PublicKey:
        """Decode a value produced by `serialize`.

        Raises:
            TypeError: If the value type does not fit the target kind
            SshKeyError: If the value is not a valid public key
        """
        if self.human_readable:
            if not isinstance(value, str):
                raise TypeError("Human-readable public keys must be strings")
            return self.key_class.from_openssh(value)

        if not isinstance(value, (bytes, bytearray, memoryview)):
            raise TypeError("Binary public keys must be bytes")
        return self.key_class.from_bytes(bytes(value))
