"""SSH public keys."""

import functools
import logging
from pathlib import Path
from typing import IO, TYPE_CHECKING

from ..core.config import DEFAULT_CONFIG, CodecConfig
from ..core.encoding import Reader, Writer
from ..core.errors import (
    AlgorithmMismatchError,
    CharacterEncodingError,
    NamespaceMismatchError,
    PublicKeyMismatchError,
)
from ..core.models import Fingerprint, HashAlg
from .algorithm import Algorithm, AlgorithmName
from .comment import Comment, DiscardedComment
from .key_data import KeyData
from .ssh_format import SshFormat

if TYPE_CHECKING:
    from ..signature.sshsig import SshSig

logger = logging.getLogger(__name__)


@functools.total_ordering
class PublicKey:
    """SSH public key: key data plus an optional comment.

    The OpenSSH encoding of a public key looks like the following:

        ssh-ed25519 AAAAC3NzaC1lZDI1NTE5AAAAILM+rvN+ot98qgEN796jTiQfZfG1KaT0PtFDJ/XFSqti user@example.com

    It consists of the algorithm identifier, the key data encoded as Base64,
    and an optional comment (usually an email address).

    The comment belongs to the text encoding and to keys embedded in larger
    binary structures. It is not part of `to_bytes()` and does not affect the
    fingerprint. Comments are stored as bytes; non-UTF-8 comments only lose
    information when written in the OpenSSH text format.
    """

    __slots__ = ("_key_data", "_comment")

    _comment_type: type[Comment] = Comment

    def __init__(self, key_data: KeyData, comment: bytes | str | Comment = b""):
        """Initialize public key.

        Args:
            key_data: Algorithm-specific key material
            comment: Comment on the key (default empty)
        """
        if not isinstance(key_data, KeyData):
            raise TypeError(f"key_data must be KeyData, not {type(key_data).__name__}")
        self._key_data = key_data
        self._comment = self._comment_type(comment)

    @classmethod
    def from_key_data(cls, key_data: KeyData) -> "PublicKey":
        """Create a public key with an empty comment."""
        return cls(key_data)

    @classmethod
    def from_openssh(cls, public_key: str | bytes) -> "PublicKey":
        """Parse an OpenSSH-formatted public key.

        Args:
            public_key: Line such as "ssh-ed25519 AAAA... user@example.com"

        Returns:
            Decoded public key with its comment

        Raises:
            FormatError: If the line, Base64, or key blob is malformed, or the
                blob has trailing bytes
            AlgorithmMismatchError: If the algorithm in the text does not match
                the algorithm inside the Base64 key blob
            AlgorithmUnknownError: If the key algorithm is not supported
        """
        encapsulation = SshFormat.decode(public_key)
        reader = Reader.from_base64(encapsulation.base64_data)
        key_data = KeyData.decode(reader)

        # The outer label must match the algorithm in the Base64-encoded data
        if encapsulation.algorithm_id != key_data.algorithm_id:
            raise AlgorithmMismatchError(
                f"Algorithm {encapsulation.algorithm_id!r} does not match "
                f"key data algorithm {key_data.algorithm_id!r}"
            )

        return reader.finish(cls(key_data, encapsulation.comment))

    @classmethod
    def from_bytes(cls, data: bytes) -> "PublicKey":
        """Parse a raw binary SSH public key blob.

        The blob carries no comment, so the result has an empty one.

        Raises:
            FormatError: If the blob is malformed or has trailing bytes
            AlgorithmUnknownError: If the key algorithm is not supported
        """
        return cls(KeyData.from_bytes(data))

    def encode_openssh(self, out: bytearray | memoryview) -> str:
        """Encode the OpenSSH line into `out`.

        Raises:
            LengthError: If `out` is too small
        """
        return SshFormat.encode(
            self.algorithm_id, self._key_data, self._comment.as_str_lossy(), out
        )

    def to_openssh(self) -> str:
        """Encode an OpenSSH-formatted public key."""
        return SshFormat.encode_string(
            self.algorithm_id, self._key_data, self._comment.as_str_lossy()
        )

    def to_bytes(self) -> bytes:
        """Serialize the key data as a raw binary blob (comment excluded)."""
        return self._key_data.to_bytes()

    def decode_comment(self, reader: Reader) -> None:
        """Read a comment that follows the key inside a larger structure."""
        self._comment = self._comment_type.decode(reader)

    def encode_comment(self, writer: Writer) -> None:
        """Write the comment as an RFC 4251 string."""
        self._comment.encode(writer)

    def verify(self, namespace: str, message: bytes, signature: "SshSig") -> None:
        """Verify an SSHSIG signature over `message` made by this key.

        The signature must carry this exact key and the given namespace;
        both are checked before any cryptographic work is done.

        Args:
            namespace: Usage context the signature must be bound to (e.g. "file")
            message: Signed message
            signature: Parsed signature

        Raises:
            PublicKeyMismatchError: If the signature was made by another key
            NamespaceMismatchError: If the signature is for another namespace
            InvalidSignatureError: If the cryptographic check fails
        """
        if self._key_data != signature.public_key:
            logger.debug(
                "Rejecting signature: key %s does not match signing key",
                self.algorithm_id,
            )
            raise PublicKeyMismatchError("Signature was not made by this public key")

        if namespace != signature.namespace:
            logger.debug(
                "Rejecting signature: namespace %r, expected %r",
                signature.namespace,
                namespace,
            )
            raise NamespaceMismatchError(
                f"Signature namespace {signature.namespace!r} does not match {namespace!r}"
            )

        signature.verify(message)

    @classmethod
    def read_openssh(cls, reader: IO) -> "PublicKey":
        """Read a public key from an OpenSSH-formatted stream (text or binary)."""
        data = reader.read()
        if isinstance(data, bytes):
            try:
                data = data.decode("utf-8")
            except UnicodeDecodeError as e:
                raise CharacterEncodingError(f"Public key is not valid UTF-8: {e}") from e
        return cls.from_openssh(data)

    @classmethod
    def read_openssh_file(cls, path: str | Path) -> "PublicKey":
        """Read a public key from an OpenSSH-formatted file."""
        with open(path, "rb") as f:
            return cls.read_openssh(f)

    def write_openssh(self, writer: IO[str], line_ending: str = "\n") -> None:
        """Write the OpenSSH line followed by `line_ending` to a text stream."""
        writer.write(self.to_openssh() + line_ending)

    def write_openssh_file(self, path: str | Path, config: CodecConfig = DEFAULT_CONFIG) -> None:
        """Write the key to an OpenSSH-formatted file.

        Args:
            path: Destination file
            config: Codec configuration providing the line ending
        """
        with open(path, "w", encoding="utf-8", newline="") as f:
            self.write_openssh(f, config.line_ending)

    @property
    def algorithm(self) -> Algorithm | AlgorithmName:
        """Algorithm of the key, derived from the key data."""
        return self._key_data.algorithm

    @property
    def algorithm_id(self) -> str:
        return self._key_data.algorithm_id

    @property
    def key_data(self) -> KeyData:
        return self._key_data

    @property
    def comment(self) -> Comment:
        return self._comment

    @comment.setter
    def comment(self, value: bytes | str | Comment) -> None:
        self.set_comment(value)

    def set_comment(self, comment: bytes | str | Comment) -> None:
        self._comment = self._comment_type(comment)

    def fingerprint(self, hash_alg: HashAlg = HashAlg.SHA256) -> Fingerprint:
        """Compute the key fingerprint (SHA-256 unless specified)."""
        return self._key_data.fingerprint(hash_alg)

    def _fields(self) -> tuple:
        return (self._key_data, self._comment)

    def __eq__(self, other) -> bool:
        if not isinstance(other, PublicKey):
            return NotImplemented
        return self._fields() == other._fields()

    def __lt__(self, other) -> bool:
        if not isinstance(other, PublicKey):
            return NotImplemented
        return self._fields() < other._fields()

    def __hash__(self) -> int:
        return hash(self._fields())

    def __str__(self) -> str:
        return self.to_openssh()

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self._key_data!r}, {self._comment.as_bytes()!r})"


class CommentlessPublicKey(PublicKey):
    """Public key for configurations that do not keep comments.

    Comments are discarded on every decode path and never written.
    """

    __slots__ = ()

    _comment_type = DiscardedComment
