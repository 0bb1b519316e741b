"""Tests for the OpenSSH public key line format."""

import pytest

from ssh_pubkey.core.errors import FormatError, LengthError
from ssh_pubkey.public import Ed25519PublicKey, SshFormat

KEY = Ed25519PublicKey(bytes(range(32)))


def test_decode_three_fields():
    """Test splitting a line with a comment."""
    envelope = SshFormat.decode("ssh-ed25519 AAAA user@example.com")

    assert envelope.algorithm_id == "ssh-ed25519"
    assert envelope.base64_data == b"AAAA"
    assert envelope.comment == b"user@example.com"


def test_decode_without_comment():
    """Test that the comment is optional."""
    envelope = SshFormat.decode("ssh-ed25519 AAAA")

    assert envelope.comment == b""


def test_comment_may_contain_spaces():
    """Test that everything after the key data is the comment."""
    envelope = SshFormat.decode("ssh-ed25519 AAAA my laptop key")

    assert envelope.comment == b"my laptop key"


def test_trailing_whitespace_is_ignored():
    """Test that trailing whitespace, including newlines, is trimmed."""
    envelope = SshFormat.decode("ssh-ed25519 AAAA user@example.com \r\n")

    assert envelope.comment == b"user@example.com"


def test_leading_whitespace_is_not_ignored():
    """Test that leading whitespace is not tolerated."""
    with pytest.raises(FormatError):
        SshFormat.decode(" ssh-ed25519 AAAA")


def test_missing_key_data():
    """Test that algorithm id and key data are mandatory."""
    with pytest.raises(FormatError):
        SshFormat.decode("ssh-ed25519")

    with pytest.raises(FormatError):
        SshFormat.decode("ssh-ed25519 ")

    with pytest.raises(FormatError):
        SshFormat.decode("")


def test_invalid_base64_characters():
    """Test that the key data field is restricted to Base64 characters."""
    with pytest.raises(FormatError):
        SshFormat.decode("ssh-ed25519 AA*A")


def test_encode_string():
    """Test encoding with and without comment."""
    with_comment = SshFormat.encode_string("ssh-ed25519", KEY, "user@example.com")
    without_comment = SshFormat.encode_string("ssh-ed25519", KEY, "")

    assert with_comment == without_comment + " user@example.com"
    assert not without_comment.endswith(" ")
    assert SshFormat.decode(with_comment).algorithm_id == "ssh-ed25519"


def test_encode_into_buffer():
    """Test encoding into a caller-provided buffer."""
    out = bytearray(256)
    line = SshFormat.encode("ssh-ed25519", KEY, "host", out)

    assert bytes(out[: len(line)]) == line.encode("utf-8")


def test_encode_buffer_too_small():
    """Test that a short buffer is reported."""
    with pytest.raises(LengthError):
        SshFormat.encode("ssh-ed25519", KEY, "host", bytearray(16))


if __name__ == "__main__":
    pytest.main([__file__, "-v"])
