"""Core functionality for ssh-pubkey."""

from .config import DEFAULT_CONFIG, CodecConfig
from .encoding import Reader, Writer, decode_base64
from .errors import (
    SshKeyError,
    FormatError,
    Base64Error,
    LengthError,
    TrailingDataError,
    CharacterEncodingError,
    MpintError,
    AlgorithmError,
    AlgorithmUnknownError,
    AlgorithmMismatchError,
    VerificationError,
    PublicKeyMismatchError,
    NamespaceMismatchError,
    InvalidSignatureError,
    ConfigurationError,
)
from .models import Fingerprint, HashAlg, ValidationResult

__all__ = [
    # Config
    "CodecConfig",
    "DEFAULT_CONFIG",
    # Encoding
    "Reader",
    "Writer",
    "decode_base64",
    # Errors
    "SshKeyError",
    "FormatError",
    "Base64Error",
    "LengthError",
    "TrailingDataError",
    "CharacterEncodingError",
    "MpintError",
    "AlgorithmError",
    "AlgorithmUnknownError",
    "AlgorithmMismatchError",
    "VerificationError",
    "PublicKeyMismatchError",
    "NamespaceMismatchError",
    "InvalidSignatureError",
    "ConfigurationError",
    # Models
    "Fingerprint",
    "HashAlg",
    "ValidationResult",
]
