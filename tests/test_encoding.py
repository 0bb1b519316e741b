"""Tests for RFC 4251 readers and writers."""

import pytest

from ssh_pubkey.core.encoding import Reader, Writer, decode_base64, encode_mpint
from ssh_pubkey.core.errors import (
    Base64Error,
    CharacterEncodingError,
    LengthError,
    MpintError,
    TrailingDataError,
)


def test_read_string_and_u32():
    """Test reading length-prefixed strings and integers."""
    reader = Reader(b"\x00\x00\x00\x03abc\x00\x00\x01\x00")

    assert reader.read_string() == b"abc"
    assert reader.read_u32() == 256
    assert reader.is_finished


def test_truncated_string():
    """Test that a length prefix longer than the input is rejected."""
    reader = Reader(b"\x00\x00\x00\x05abc")

    with pytest.raises(LengthError):
        reader.read_string()


def test_oversized_length_prefix():
    """Test that absurd length prefixes are rejected before reading."""
    reader = Reader(b"\xff\xff\xff\xff")

    with pytest.raises(LengthError):
        reader.read_string()


def test_read_str_rejects_invalid_utf8():
    """Test that text fields must be UTF-8."""
    reader = Reader(b"\x00\x00\x00\x01\xff")

    with pytest.raises(CharacterEncodingError):
        reader.read_str()


def test_mpint_encoding():
    """Test mpint encoding examples from RFC 4251."""
    assert encode_mpint(0) == b""
    assert encode_mpint(0x9A378F9B2E332A7) == bytes.fromhex("09a378f9b2e332a7")
    assert encode_mpint(0x80) == b"\x00\x80"

    with pytest.raises(MpintError):
        encode_mpint(-1)


def test_read_mpint():
    """Test mpint decoding and canonical form checks."""
    assert Reader(b"\x00\x00\x00\x00").read_mpint() == 0
    assert Reader(b"\x00\x00\x00\x02\x00\x80").read_mpint() == 0x80

    # Negative
    with pytest.raises(MpintError):
        Reader(b"\x00\x00\x00\x01\x80").read_mpint()

    # Unnecessary leading zero
    with pytest.raises(MpintError):
        Reader(b"\x00\x00\x00\x02\x00\x7f").read_mpint()


def test_writer():
    """Test the writer produces the same layout the reader consumes."""
    writer = Writer()
    writer.write_str("ssh-ed25519").write_mpint(65537).write_u8(1).write_u32(7)

    reader = Reader(writer.getvalue())
    assert reader.read_str() == "ssh-ed25519"
    assert reader.read_mpint() == 65537
    assert reader.read_u8() == 1
    assert reader.read_u32() == 7
    assert reader.finish("done") == "done"


def test_finish_rejects_trailing_bytes():
    """Test that unconsumed input is an error."""
    reader = Reader(b"\x00\x00\x00\x00\x01")
    reader.read_string()

    with pytest.raises(TrailingDataError):
        reader.finish(None)


def test_read_prefixed_and_drain():
    """Test nested readers and skipping strings."""
    reader = Reader(b"\x00\x00\x00\x02hi\x00\x00\x00\x03xyz")

    nested = reader.read_prefixed()
    assert nested.read(2) == b"hi"
    assert reader.drain_prefixed() == 3
    assert reader.is_finished


def test_decode_base64_strict():
    """Test that only canonical Base64 is accepted."""
    assert decode_base64("aGVsbG8=") == b"hello"

    with pytest.raises(Base64Error):
        decode_base64("aGVsbG8")  # missing padding

    with pytest.raises(Base64Error):
        decode_base64("aGVsbG9=")  # non-zero trailing bits

    with pytest.raises(Base64Error):
        decode_base64("aGVs*G8=")


if __name__ == "__main__":
    pytest.main([__file__, "-v"])
