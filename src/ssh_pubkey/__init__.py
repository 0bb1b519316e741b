"""ssh-pubkey - OpenSSH public key codec and SSHSIG signature verification."""

from .core import (
    CodecConfig,
    Fingerprint,
    HashAlg,
    SshKeyError,
    ValidationResult,
)
from .core.crypto import key_data_from_public_key, load_public_key
from .public import (
    Algorithm,
    Comment,
    CommentlessPublicKey,
    KeyData,
    PublicKey,
    PublicKeySerde,
)
from .signature import Signature, SshSig
from .trust import AllowedSigners
from .validator import SignatureVerifier

__version__ = "0.1.0"

__all__ = [
    # Core
    "CodecConfig",
    "Fingerprint",
    "HashAlg",
    "SshKeyError",
    "ValidationResult",
    "key_data_from_public_key",
    "load_public_key",
    # Public keys
    "Algorithm",
    "Comment",
    "CommentlessPublicKey",
    "KeyData",
    "PublicKey",
    "PublicKeySerde",
    # Signatures
    "Signature",
    "SshSig",
    # Trust
    "AllowedSigners",
    # Validator
    "SignatureVerifier",
]
