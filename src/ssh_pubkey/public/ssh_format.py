"""OpenSSH public key line format.

    <algorithm-id> <base64 key blob> [comment]

Fields are separated by single spaces. The comment is everything after the
second separator and may itself contain spaces.
"""

import base64
from dataclasses import dataclass
from typing import TYPE_CHECKING

from ..core.errors import FormatError, LengthError

if TYPE_CHECKING:
    from .key_data import KeyData

_BASE64_CHARS = frozenset(
    b"ABCDEFGHIJKLMNOPQRSTUVWXYZabcdefghijklmnopqrstuvwxyz0123456789+/="
)


@dataclass(frozen=True)
class SshFormat:
    """The three fields of an OpenSSH public key line."""

    algorithm_id: str
    base64_data: bytes
    comment: bytes = b""

    @classmethod
    def decode(cls, line: str | bytes) -> "SshFormat":
        """Split an OpenSSH public key line into its fields.

        Trailing whitespace is ignored; leading whitespace is not. The Base64
        payload is returned undecoded.

        Args:
            line: OpenSSH formatted public key

        Returns:
            SshFormat with the algorithm id, Base64 payload, and comment bytes

        Raises:
            FormatError: If the algorithm id or key data field is missing or
                contains invalid characters
        """
        if isinstance(line, str):
            data = line.rstrip().encode("utf-8")
        else:
            data = bytes(line).rstrip()

        algorithm_id, sep, rest = data.partition(b" ")
        if not algorithm_id:
            raise FormatError("Missing algorithm identifier")
        if not sep:
            raise FormatError("Missing Base64 key data")

        base64_data, _, comment = rest.partition(b" ")
        if not base64_data:
            raise FormatError("Missing Base64 key data")

        if any(b < 0x21 or b > 0x7E or b == 0x2C for b in algorithm_id):
            raise FormatError("Invalid character in algorithm identifier")
        if not _BASE64_CHARS.issuperset(base64_data):
            raise FormatError("Invalid character in Base64 key data")

        return cls(
            algorithm_id=algorithm_id.decode("ascii"),
            base64_data=base64_data,
            comment=comment,
        )

    @staticmethod
    def encode_string(algorithm_id: str, key_data: "KeyData", comment: str = "") -> str:
        """Encode an OpenSSH public key line.

        Args:
            algorithm_id: Algorithm identifier for the first field
            key_data: Key whose binary encoding becomes the Base64 field
            comment: Comment text; omitted with its separator when empty

        Returns:
            Encoded line without a line terminator
        """
        encoded_key = base64.b64encode(key_data.to_bytes()).decode("ascii")
        if comment:
            return f"{algorithm_id} {encoded_key} {comment}"
        return f"{algorithm_id} {encoded_key}"

    @classmethod
    def encode(
        cls,
        algorithm_id: str,
        key_data: "KeyData",
        comment: str,
        out: bytearray | memoryview,
    ) -> str:
        """Encode an OpenSSH public key line into a caller-provided buffer.

        Args:
            algorithm_id: Algorithm identifier
            key_data: Key data to encode
            comment: Comment text
            out: Writable buffer; the encoded line is written at its start

        Returns:
            The encoded line

        Raises:
            LengthError: If `out` is too small
        """
        line = cls.encode_string(algorithm_id, key_data, comment)
        encoded = line.encode("utf-8")
        if len(encoded) > len(out):
            raise LengthError(
                f"Output buffer too small: need {len(encoded)} bytes, have {len(out)}"
            )
        out[: len(encoded)] = encoded
        return line
