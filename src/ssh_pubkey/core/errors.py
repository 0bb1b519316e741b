"""Exception hierarchy for ssh-pubkey."""


class SshKeyError(Exception):
    """Base exception for all ssh-pubkey errors."""

    pass


# Format errors
class FormatError(SshKeyError):
    """Malformed text envelope, binary blob, or signature container."""

    pass


class Base64Error(FormatError):
    """Invalid or non-canonical Base64 data."""

    pass


class LengthError(FormatError):
    """Input ended early, a length prefix is out of range, or a buffer is too small."""

    pass


class TrailingDataError(FormatError):
    """Unconsumed bytes remain after decoding."""

    pass


class CharacterEncodingError(FormatError):
    """Bytes are not valid UTF-8 where text is required."""

    pass


class MpintError(FormatError):
    """Negative or non-minimally encoded multiple precision integer."""

    pass


# Algorithm errors
class AlgorithmError(SshKeyError):
    """Base exception for algorithm identifier errors."""

    pass


class AlgorithmUnknownError(AlgorithmError):
    """Algorithm identifier is not supported and cannot be kept as opaque."""

    pass


class AlgorithmMismatchError(AlgorithmError):
    """Two algorithm identifiers describing the same key disagree."""

    pass


# Verification errors
class VerificationError(SshKeyError):
    """Base exception for signature verification failures."""

    pass


class PublicKeyMismatchError(VerificationError):
    """Signature was made by a different key than the verifying one."""

    pass


class NamespaceMismatchError(VerificationError):
    """Signature was made for a different namespace."""

    pass


class InvalidSignatureError(VerificationError):
    """Cryptographic signature check failed."""

    pass


# Configuration errors
class ConfigurationError(SshKeyError):
    """Configuration or allowed-signers file could not be loaded."""

    pass
