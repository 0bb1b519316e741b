"""SSHSIG signatures, as produced by `ssh-keygen -Y sign`.

Binary layout (see OpenSSH PROTOCOL.sshsig):

    byte[6]   "SSHSIG"
    uint32    version (1)
    string    public key blob
    string    namespace
    string    reserved
    string    hash algorithm ("sha256" or "sha512")
    string    signature blob

The signature covers "SSHSIG" || string namespace || string reserved ||
string hash algorithm || string H(message).
"""

import base64
import logging
import textwrap
from dataclasses import dataclass
from typing import Optional

from ..core.crypto import signature_algorithms, verify_signature
from ..core.encoding import Reader, Writer, decode_base64
from ..core.errors import AlgorithmMismatchError, FormatError
from ..core.models import HashAlg
from ..public.key_data import KeyData
from ..public.public_key import PublicKey

logger = logging.getLogger(__name__)

MAGIC_PREAMBLE = b"SSHSIG"
VERSION = 1
PEM_HEADER = "-----BEGIN SSH SIGNATURE-----"
PEM_FOOTER = "-----END SSH SIGNATURE-----"
PEM_LINE_WIDTH = 70

SK_SIGNATURE_ALGORITHMS = frozenset(
    {"sk-ssh-ed25519@openssh.com", "sk-ecdsa-sha2-nistp256@openssh.com"}
)


@dataclass(frozen=True)
class Signature:
    """Signature blob: algorithm name plus algorithm-specific data.

    Security key signatures additionally carry the authenticator flags and
    signature counter.
    """

    algorithm: str
    data: bytes
    flags: Optional[int] = None
    counter: Optional[int] = None

    def __post_init__(self):
        is_sk = self.algorithm in SK_SIGNATURE_ALGORITHMS
        if is_sk and (self.flags is None or self.counter is None):
            raise FormatError(f"{self.algorithm} signatures require flags and counter")
        if not is_sk and (self.flags is not None or self.counter is not None):
            raise FormatError(f"{self.algorithm} signatures have no flags or counter")

    @classmethod
    def decode(cls, reader: Reader) -> "Signature":
        algorithm = reader.read_str()
        data = reader.read_string()
        if algorithm in SK_SIGNATURE_ALGORITHMS:
            return cls(algorithm, data, flags=reader.read_u8(), counter=reader.read_u32())
        return cls(algorithm, data)

    @classmethod
    def from_bytes(cls, data: bytes) -> "Signature":
        reader = Reader(data)
        return reader.finish(cls.decode(reader))

    def encode(self, writer: Writer) -> None:
        writer.write_str(self.algorithm)
        writer.write_string(self.data)
        if self.flags is not None:
            writer.write_u8(self.flags)
            writer.write_u32(self.counter)

    def to_bytes(self) -> bytes:
        writer = Writer()
        self.encode(writer)
        return writer.getvalue()


class SshSig:
    """Detached signature over a message, bound to a key and a namespace."""

    __slots__ = ("_public_key", "_namespace", "_reserved", "_hash_alg", "_signature")

    def __init__(
        self,
        public_key: KeyData | PublicKey,
        namespace: str,
        signature: Signature,
        hash_alg: HashAlg = HashAlg.SHA512,
        reserved: bytes = b"",
    ):
        """Initialize signature.

        Args:
            public_key: Key that made the signature
            namespace: Usage context of the signature (e.g. "file", "git")
            signature: Signature blob
            hash_alg: Hash applied to the message before signing
            reserved: Reserved field, empty in current OpenSSH

        Raises:
            FormatError: If the namespace is empty
            AlgorithmMismatchError: If the signature algorithm does not fit the key
        """
        if isinstance(public_key, PublicKey):
            public_key = public_key.key_data
        if not namespace:
            raise FormatError("SSHSIG namespace must not be empty")
        if signature.algorithm not in signature_algorithms(public_key):
            raise AlgorithmMismatchError(
                f"Signature algorithm {signature.algorithm!r} does not match "
                f"key algorithm {public_key.algorithm_id!r}"
            )

        self._public_key = public_key
        self._namespace = namespace
        self._reserved = bytes(reserved)
        self._hash_alg = HashAlg(hash_alg)
        self._signature = signature

    @classmethod
    def from_bytes(cls, data: bytes) -> "SshSig":
        """Decode the binary SSHSIG encoding.

        Raises:
            FormatError: If the data is malformed or has trailing bytes
        """
        reader = Reader(data)
        if reader.read(len(MAGIC_PREAMBLE)) != MAGIC_PREAMBLE:
            raise FormatError("Missing SSHSIG magic preamble")

        version = reader.read_u32()
        if version != VERSION:
            raise FormatError(f"Unsupported SSHSIG version: {version}")

        public_key = KeyData.from_bytes(reader.read_string())
        namespace = reader.read_str()
        reserved = reader.read_string()
        hash_alg = HashAlg.parse(reader.read_str())
        signature = Signature.from_bytes(reader.read_string())

        return reader.finish(
            cls(public_key, namespace, signature, hash_alg=hash_alg, reserved=reserved)
        )

    @classmethod
    def from_pem(cls, pem: str | bytes) -> "SshSig":
        """Decode a PEM armoured signature ("-----BEGIN SSH SIGNATURE-----").

        Raises:
            FormatError: If the armour or contents are malformed
        """
        if isinstance(pem, bytes):
            pem = pem.decode("ascii", errors="replace")

        lines = pem.strip().splitlines()
        if len(lines) < 2 or lines[0].strip() != PEM_HEADER or lines[-1].strip() != PEM_FOOTER:
            raise FormatError("Invalid SSH signature PEM armour")

        body = "".join(line.strip() for line in lines[1:-1])
        return cls.from_bytes(decode_base64(body))

    def to_bytes(self) -> bytes:
        writer = Writer()
        writer.write(MAGIC_PREAMBLE)
        writer.write_u32(VERSION)
        writer.write_string(self._public_key.to_bytes())
        writer.write_str(self._namespace)
        writer.write_string(self._reserved)
        writer.write_str(self._hash_alg.value)
        writer.write_string(self._signature.to_bytes())
        return writer.getvalue()

    def to_pem(self) -> str:
        body = base64.b64encode(self.to_bytes()).decode("ascii")
        lines = textwrap.wrap(body, PEM_LINE_WIDTH)
        return "\n".join([PEM_HEADER, *lines, PEM_FOOTER]) + "\n"

    @staticmethod
    def signed_data(
        namespace: str, hash_alg: HashAlg, message: bytes, reserved: bytes = b""
    ) -> bytes:
        """Bytes a signer signs for `message` in `namespace`."""
        writer = Writer()
        writer.write(MAGIC_PREAMBLE)
        writer.write_str(namespace)
        writer.write_string(reserved)
        writer.write_str(hash_alg.value)
        writer.write_string(hash_alg.digest(message))
        return writer.getvalue()

    def verify(self, message: bytes) -> None:
        """Check the signature cryptographically.

        This does not check which key or namespace the signature is bound to;
        use `PublicKey.verify` for that.

        Raises:
            InvalidSignatureError: If the signature does not verify
        """
        data = self.signed_data(self._namespace, self._hash_alg, message, self._reserved)
        verify_signature(self._public_key, self._signature, data)
        logger.debug(
            "Verified %s signature in namespace %r", self._signature.algorithm, self._namespace
        )

    @property
    def public_key(self) -> KeyData:
        return self._public_key

    @property
    def namespace(self) -> str:
        return self._namespace

    @property
    def reserved(self) -> bytes:
        return self._reserved

    @property
    def hash_alg(self) -> HashAlg:
        return self._hash_alg

    @property
    def signature(self) -> Signature:
        return self._signature

    def __eq__(self, other) -> bool:
        if not isinstance(other, SshSig):
            return NotImplemented
        return self.to_bytes() == other.to_bytes()

    def __hash__(self) -> int:
        return hash(self.to_bytes())

    def __repr__(self) -> str:
        return (
            f"SshSig(algorithm={self._signature.algorithm!r}, "
            f"namespace={self._namespace!r}, hash_alg={self._hash_alg.value!r})"
        )
