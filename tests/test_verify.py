"""Tests for PublicKey.verify key and namespace binding."""

import pytest
from cryptography.hazmat.primitives.asymmetric import ed25519

from ssh_pubkey import PublicKey, SshSig, key_data_from_public_key
from ssh_pubkey.core.errors import (
    InvalidSignatureError,
    NamespaceMismatchError,
    PublicKeyMismatchError,
    VerificationError,
)


class RecordingSignature:
    """Stands in for SshSig and records whether it was asked to verify."""

    def __init__(self, signature: SshSig):
        self.public_key = signature.public_key
        self.namespace = signature.namespace
        self.verified = False

    def verify(self, message: bytes) -> None:
        self.verified = True


def test_verify(ed25519_public_key, ed25519_signature):
    """Test the happy path."""
    ed25519_public_key.verify("example", b"testing", ed25519_signature)


def test_wrong_namespace(ed25519_public_key, ed25519_signature):
    """Test that the namespace must match exactly."""
    with pytest.raises(NamespaceMismatchError):
        ed25519_public_key.verify("other", b"testing", ed25519_signature)


def test_wrong_key(ed25519_signature):
    """Test that a signature made by another key is rejected."""
    other = PublicKey(key_data_from_public_key(ed25519.Ed25519PrivateKey.generate().public_key()))

    with pytest.raises(PublicKeyMismatchError):
        other.verify("example", b"testing", ed25519_signature)


def test_wrong_key_algorithm(rsa_private_key, ed25519_signature):
    """Test that a key of another algorithm is rejected."""
    other = PublicKey(key_data_from_public_key(rsa_private_key.public_key()))

    with pytest.raises(PublicKeyMismatchError):
        other.verify("example", b"testing", ed25519_signature)


def test_wrong_message(ed25519_public_key, ed25519_signature):
    """Test that tampered messages fail the cryptographic check."""
    with pytest.raises(InvalidSignatureError):
        ed25519_public_key.verify("example", b"testing!", ed25519_signature)


def test_errors_share_base_class(ed25519_public_key, ed25519_signature):
    """Test that all verification failures can be caught together."""
    with pytest.raises(VerificationError):
        ed25519_public_key.verify("other", b"testing", ed25519_signature)


def test_mismatch_skips_cryptography(ed25519_public_key, ed25519_signature):
    """Test that key and namespace checks happen before verification."""
    recording = RecordingSignature(ed25519_signature)

    with pytest.raises(NamespaceMismatchError):
        ed25519_public_key.verify("other", b"testing", recording)
    assert not recording.verified

    ed25519_public_key.verify("example", b"testing", recording)
    assert recording.verified


def test_comment_does_not_affect_verification(ed25519_public_key, ed25519_signature):
    """Test that keys with a different comment still verify."""
    ed25519_public_key.comment = "renamed"
    ed25519_public_key.verify("example", b"testing", ed25519_signature)


def test_generated_key_round_trip(sign, ed25519_private_key):
    """Test verification of a freshly generated signature."""
    public_key = PublicKey(key_data_from_public_key(ed25519_private_key.public_key()))
    signature = sign(ed25519_private_key, "file", b"payload")

    public_key.verify("file", b"payload", signature)


if __name__ == "__main__":
    pytest.main([__file__, "-v"])
