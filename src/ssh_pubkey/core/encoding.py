"""RFC 4251 data type readers and writers.

Wire types used by SSH public keys and signatures:
- uint32: 4 bytes, big-endian
- string: uint32 length + data
- mpint: uint32 length + big-endian two's complement integer, minimal form
"""

import base64
import binascii
import struct
from typing import TypeVar

from .errors import (
    Base64Error,
    CharacterEncodingError,
    LengthError,
    MpintError,
    TrailingDataError,
)

T = TypeVar("T")

# Upper bound on any single length prefix
MAX_SIZE = 0x100000


def decode_base64(data: bytes | str) -> bytes:
    """Strictly decode standard Base64.

    Rejects characters outside the alphabet, bad padding, and encodings with
    non-zero trailing bits, so every accepted input has exactly one decoding.

    Args:
        data: Base64 text

    Returns:
        Decoded bytes

    Raises:
        Base64Error: If the input is not canonical Base64
    """
    if isinstance(data, str):
        try:
            data = data.encode("ascii")
        except UnicodeEncodeError as e:
            raise Base64Error("Base64 data contains non-ASCII characters") from e

    try:
        decoded = base64.b64decode(data, validate=True)
    except (binascii.Error, ValueError) as e:
        raise Base64Error(f"Invalid Base64 data: {e}") from e

    if base64.b64encode(decoded) != bytes(data):
        raise Base64Error("Non-canonical Base64 encoding")

    return decoded


class Reader:
    """Cursor over an RFC 4251 encoded byte buffer."""

    def __init__(self, data: bytes):
        """Initialize reader.

        Args:
            data: Encoded bytes
        """
        self._data = bytes(data)
        self._offset = 0

    @classmethod
    def from_base64(cls, data: bytes | str) -> "Reader":
        """Create a reader over Base64 encoded data."""
        return cls(decode_base64(data))

    @property
    def remaining_len(self) -> int:
        """Number of bytes not yet consumed."""
        return len(self._data) - self._offset

    @property
    def is_finished(self) -> bool:
        """Whether every byte has been consumed."""
        return self.remaining_len == 0

    def read(self, length: int) -> bytes:
        """Read exactly `length` bytes.

        Raises:
            LengthError: If fewer bytes remain
        """
        if length > self.remaining_len:
            raise LengthError(
                f"Unexpected end of input: need {length} bytes, have {self.remaining_len}"
            )
        chunk = self._data[self._offset : self._offset + length]
        self._offset += length
        return chunk

    def read_u8(self) -> int:
        return self.read(1)[0]

    def read_u32(self) -> int:
        return struct.unpack(">I", self.read(4))[0]

    def read_length(self) -> int:
        """Read a uint32 length prefix and check it against the input."""
        length = self.read_u32()
        if length > MAX_SIZE:
            raise LengthError(f"Length prefix too large: {length}")
        if length > self.remaining_len:
            raise LengthError(
                f"Truncated string: need {length} bytes, have {self.remaining_len}"
            )
        return length

    def read_string(self) -> bytes:
        """Read a length-prefixed byte string."""
        return self.read(self.read_length())

    def read_str(self) -> str:
        """Read a length-prefixed UTF-8 string.

        Raises:
            CharacterEncodingError: If the bytes are not valid UTF-8
        """
        raw = self.read_string()
        try:
            return raw.decode("utf-8")
        except UnicodeDecodeError as e:
            raise CharacterEncodingError(f"Invalid UTF-8 in string: {e}") from e

    def read_mpint(self) -> int:
        """Read a non-negative multiple precision integer.

        Raises:
            MpintError: If the value is negative or not minimally encoded
        """
        raw = self.read_string()
        if not raw:
            return 0
        if raw[0] & 0x80:
            raise MpintError("Negative mpint values are not supported")
        if raw[0] == 0 and (len(raw) == 1 or not raw[1] & 0x80):
            raise MpintError("Non-minimal mpint encoding")
        return int.from_bytes(raw, "big")

    def read_prefixed(self) -> "Reader":
        """Read a length-prefixed string and return a reader over its contents."""
        return Reader(self.read_string())

    def drain_prefixed(self) -> int:
        """Skip a length-prefixed string.

        Returns:
            Number of payload bytes skipped
        """
        length = self.read_length()
        self._offset += length
        return length

    def finish(self, value: T) -> T:
        """Return `value` if the input is fully consumed.

        Raises:
            TrailingDataError: If bytes remain
        """
        if not self.is_finished:
            raise TrailingDataError(f"{self.remaining_len} trailing bytes after decode")
        return value


def encode_mpint(value: int) -> bytes:
    """Encode a non-negative integer as mpint payload (without length prefix)."""
    if value < 0:
        raise MpintError("Negative mpint values are not supported")
    if value == 0:
        return b""
    # One extra byte when the high bit would otherwise be set
    return value.to_bytes(value.bit_length() // 8 + 1, "big")


class Writer:
    """Accumulates RFC 4251 encoded data."""

    def __init__(self):
        self._buf = bytearray()

    def __len__(self) -> int:
        return len(self._buf)

    def write(self, data: bytes) -> "Writer":
        self._buf += data
        return self

    def write_u8(self, value: int) -> "Writer":
        return self.write(struct.pack(">B", value))

    def write_u32(self, value: int) -> "Writer":
        return self.write(struct.pack(">I", value))

    def write_string(self, data: bytes) -> "Writer":
        self.write_u32(len(data))
        return self.write(data)

    def write_str(self, text: str) -> "Writer":
        return self.write_string(text.encode("utf-8"))

    def write_mpint(self, value: int) -> "Writer":
        return self.write_string(encode_mpint(value))

    def getvalue(self) -> bytes:
        return bytes(self._buf)

    def to_base64(self) -> str:
        return base64.b64encode(self._buf).decode("ascii")
