"""Key comments.

A comment is an arbitrary label on a key, usually an email address. Inside
private keys and other binary structures it is an RFC 4251 `string`, which
may hold any bytes, so it is stored as bytes and only rendered as text for the
OpenSSH line format.
"""

import functools

from ..core.encoding import Reader, Writer
from ..core.errors import CharacterEncodingError


@functools.total_ordering
class Comment:
    """Binary-safe key comment."""

    __slots__ = ("_value",)

    def __init__(self, value: "bytes | str | Comment" = b""):
        """Initialize comment.

        Raises:
            TypeError: If `value` is not bytes, str, or a Comment
        """
        if isinstance(value, Comment):
            value = value.as_bytes()
        elif isinstance(value, str):
            value = value.encode("utf-8")
        elif not isinstance(value, (bytes, bytearray, memoryview)):
            raise TypeError(f"Comment must be bytes or str, not {type(value).__name__}")
        self._value = bytes(value)

    @classmethod
    def decode(cls, reader: Reader) -> "Comment":
        """Read a length-prefixed comment without validating its contents."""
        return cls(reader.read_string())

    def encode(self, writer: Writer) -> None:
        writer.write_string(self._value)

    def as_bytes(self) -> bytes:
        return self._value

    def as_str(self) -> str:
        """Comment as text.

        Raises:
            CharacterEncodingError: If the comment is not valid UTF-8
        """
        try:
            return self._value.decode("utf-8")
        except UnicodeDecodeError as e:
            raise CharacterEncodingError(f"Comment is not valid UTF-8: {e}") from e

    def as_str_lossy(self) -> str:
        """Comment as text, with U+FFFD in place of invalid UTF-8 sequences.

        Only for display and the OpenSSH line format; the bytes returned by
        `as_bytes` are the canonical value.
        """
        return self._value.decode("utf-8", errors="replace")

    def is_empty(self) -> bool:
        return not self._value

    def __bool__(self) -> bool:
        return bool(self._value)

    def __len__(self) -> int:
        return len(self._value)

    def __eq__(self, other) -> bool:
        if isinstance(other, Comment):
            return self._value == other._value
        if isinstance(other, bytes):
            return self._value == other
        return NotImplemented

    def __lt__(self, other) -> bool:
        if not isinstance(other, Comment):
            return NotImplemented
        return self._value < other._value

    def __hash__(self) -> int:
        return hash(self._value)

    def __str__(self) -> str:
        return self.as_str_lossy()

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self._value!r})"


class DiscardedComment(Comment):
    """Comment stub for configurations that do not keep comments.

    Decoding consumes the length-prefixed bytes and drops them, encoding writes
    nothing, and the value is always empty.
    """

    __slots__ = ()

    def __init__(self, value: "bytes | str | Comment" = b""):
        super().__init__(value)
        self._value = b""

    @classmethod
    def decode(cls, reader: Reader) -> "DiscardedComment":
        reader.drain_prefixed()
        return cls()

    def encode(self, writer: Writer) -> None:
        pass
