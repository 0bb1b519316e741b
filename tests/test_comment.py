"""Tests for key comments."""

import pytest

from ssh_pubkey.core.encoding import Reader, Writer
from ssh_pubkey.core.errors import CharacterEncodingError
from ssh_pubkey.public import Comment, DiscardedComment


def test_comment_from_str_and_bytes():
    """Test that text and bytes produce the same comment."""
    assert Comment("user@example.com") == Comment(b"user@example.com")
    assert Comment() == b""
    assert not Comment()


def test_rejects_non_text_values():
    """Test that integers and other objects are not turned into bytes."""
    with pytest.raises(TypeError):
        Comment(5)

    with pytest.raises(TypeError):
        DiscardedComment(5)

    assert Comment(bytearray(b"abc")) == b"abc"


def test_binary_comment_round_trip():
    """Test that non-UTF-8 comments survive the binary encoding exactly."""
    comment = Comment(b"\xff\xfe\x00raw")
    writer = Writer()
    comment.encode(writer)

    reader = Reader(writer.getvalue())
    decoded = reader.finish(Comment.decode(reader))

    assert decoded == comment
    assert decoded.as_bytes() == b"\xff\xfe\x00raw"


def test_lossy_text_rendering():
    """Test that invalid UTF-8 is replaced only in the text view."""
    comment = Comment(b"host\xff")

    assert comment.as_str_lossy() == "host�"
    assert comment.as_bytes() == b"host\xff"

    with pytest.raises(CharacterEncodingError):
        comment.as_str()


def test_ordering_and_hashing():
    """Test that comments can be sorted and used in sets."""
    comments = [Comment("b"), Comment("a"), Comment("a")]

    assert sorted(comments)[0] == Comment("a")
    assert len(set(comments)) == 2


def test_discarded_comment_drains_input():
    """Test that the stub consumes a comment without keeping it."""
    writer = Writer()
    Comment("user@example.com").encode(writer)
    writer.write_u32(42)

    reader = Reader(writer.getvalue())
    comment = DiscardedComment.decode(reader)

    assert comment.is_empty()
    assert reader.read_u32() == 42


def test_discarded_comment_encodes_nothing():
    """Test that the stub writes nothing and ignores assigned values."""
    comment = DiscardedComment("user@example.com")
    writer = Writer()
    comment.encode(writer)

    assert comment.as_bytes() == b""
    assert len(writer) == 0


if __name__ == "__main__":
    pytest.main([__file__, "-v"])
