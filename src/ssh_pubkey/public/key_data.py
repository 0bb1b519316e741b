"""Algorithm-specific public key material.

`KeyData` is a closed set of variants, one per supported algorithm, plus
`OpaquePublicKey` for vendor extension algorithms. The variant is the source
of truth for the key's algorithm.
"""

import functools
from dataclasses import dataclass

from ..core.encoding import Reader, Writer
from ..core.errors import AlgorithmMismatchError, FormatError
from ..core.models import Fingerprint, HashAlg
from .algorithm import Algorithm, AlgorithmName, EcdsaCurve, parse_algorithm

ED25519_KEY_SIZE = 32


@functools.total_ordering
class KeyData:
    """Base class of the public key data variants."""

    __slots__ = ()

    @property
    def algorithm(self) -> Algorithm | AlgorithmName:
        raise NotImplementedError

    @property
    def algorithm_id(self) -> str:
        """Algorithm identifier as written on the wire."""
        return str(self.algorithm)

    @classmethod
    def decode(cls, reader: Reader) -> "KeyData":
        """Decode an algorithm identifier followed by the matching key fields.

        Args:
            reader: Reader positioned at the start of a key blob

        Returns:
            Decoded key data variant

        Raises:
            FormatError: If the blob is malformed
            AlgorithmUnknownError: If the algorithm is not supported
        """
        algorithm = parse_algorithm(reader.read_str())
        variant = _VARIANTS.get(algorithm, OpaquePublicKey)
        return variant.decode_as(reader, algorithm)

    @classmethod
    def decode_as(cls, reader: Reader, algorithm: Algorithm | AlgorithmName) -> "KeyData":
        """Decode the fields following the algorithm identifier."""
        raise NotImplementedError

    @classmethod
    def from_bytes(cls, data: bytes) -> "KeyData":
        """Decode a complete key blob."""
        reader = Reader(data)
        return reader.finish(cls.decode(reader))

    def encode_body(self, writer: Writer) -> None:
        raise NotImplementedError

    def encode(self, writer: Writer) -> None:
        writer.write_str(self.algorithm_id)
        self.encode_body(writer)

    def to_bytes(self) -> bytes:
        """Canonical binary encoding of the key."""
        writer = Writer()
        self.encode(writer)
        return writer.getvalue()

    def fingerprint(self, hash_alg: HashAlg = HashAlg.SHA256) -> Fingerprint:
        return Fingerprint.compute(hash_alg, self.to_bytes())

    def _sort_key(self) -> tuple:
        return (_ORDER.index(type(self)), self.algorithm_id, self.to_bytes())

    def __lt__(self, other):
        if not isinstance(other, KeyData):
            return NotImplemented
        return self._sort_key() < other._sort_key()


def _check_point(curve: EcdsaCurve, point: bytes) -> None:
    """Check that `point` is a SEC1 encoded point of the curve's size."""
    size = curve.field_size
    if point[:1] == b"\x04" and len(point) == 1 + 2 * size:
        return
    if point[:1] in (b"\x02", b"\x03") and len(point) == 1 + size:
        return
    raise FormatError(f"Invalid {curve} point encoding ({len(point)} bytes)")


def _check_curve(reader: Reader, expected: EcdsaCurve) -> None:
    curve_id = reader.read_str()
    if curve_id != expected.value:
        raise AlgorithmMismatchError(
            f"Curve {curve_id!r} does not match algorithm curve {expected.value!r}"
        )


@dataclass(frozen=True)
class DsaPublicKey(KeyData):
    """Digital Signature Algorithm public key."""

    p: int
    q: int
    g: int
    y: int

    @property
    def algorithm(self) -> Algorithm:
        return Algorithm.DSA

    @classmethod
    def decode_as(cls, reader: Reader, algorithm) -> "DsaPublicKey":
        return cls(
            p=reader.read_mpint(),
            q=reader.read_mpint(),
            g=reader.read_mpint(),
            y=reader.read_mpint(),
        )

    def encode_body(self, writer: Writer) -> None:
        writer.write_mpint(self.p)
        writer.write_mpint(self.q)
        writer.write_mpint(self.g)
        writer.write_mpint(self.y)


@dataclass(frozen=True)
class EcdsaPublicKey(KeyData):
    """ECDSA/NIST public key with a SEC1 encoded point."""

    curve: EcdsaCurve
    point: bytes

    def __post_init__(self):
        object.__setattr__(self, "curve", EcdsaCurve(self.curve))
        _check_point(self.curve, self.point)

    @property
    def algorithm(self) -> Algorithm:
        return self.curve.algorithm

    @classmethod
    def decode_as(cls, reader: Reader, algorithm) -> "EcdsaPublicKey":
        curve = EcdsaCurve.from_algorithm(algorithm)
        _check_curve(reader, curve)
        return cls(curve=curve, point=reader.read_string())

    def encode_body(self, writer: Writer) -> None:
        writer.write_str(self.curve.value)
        writer.write_string(self.point)


@dataclass(frozen=True)
class Ed25519PublicKey(KeyData):
    """Ed25519 public key (32 bytes)."""

    key: bytes

    def __post_init__(self):
        if len(self.key) != ED25519_KEY_SIZE:
            raise FormatError(
                f"Ed25519 public key must be {ED25519_KEY_SIZE} bytes, got {len(self.key)}"
            )

    @property
    def algorithm(self) -> Algorithm:
        return Algorithm.ED25519

    @classmethod
    def decode_as(cls, reader: Reader, algorithm) -> "Ed25519PublicKey":
        return cls(key=reader.read_string())

    def encode_body(self, writer: Writer) -> None:
        writer.write_string(self.key)


@dataclass(frozen=True)
class RsaPublicKey(KeyData):
    """RSA public key: exponent and modulus."""

    e: int
    n: int

    def __post_init__(self):
        if self.e <= 0 or self.n <= 0:
            raise FormatError("RSA exponent and modulus must be positive")

    @property
    def algorithm(self) -> Algorithm:
        return Algorithm.RSA

    @property
    def key_size(self) -> int:
        return self.n.bit_length()

    @classmethod
    def decode_as(cls, reader: Reader, algorithm) -> "RsaPublicKey":
        return cls(e=reader.read_mpint(), n=reader.read_mpint())

    def encode_body(self, writer: Writer) -> None:
        writer.write_mpint(self.e)
        writer.write_mpint(self.n)


@dataclass(frozen=True)
class SkEcdsaSha2NistP256(KeyData):
    """Security key ECDSA/NIST P-256 public key with FIDO application string."""

    point: bytes
    application: str

    def __post_init__(self):
        _check_point(EcdsaCurve.NISTP256, self.point)

    @property
    def algorithm(self) -> Algorithm:
        return Algorithm.SK_ECDSA_SHA2_NISTP256

    @classmethod
    def decode_as(cls, reader: Reader, algorithm) -> "SkEcdsaSha2NistP256":
        _check_curve(reader, EcdsaCurve.NISTP256)
        return cls(point=reader.read_string(), application=reader.read_str())

    def encode_body(self, writer: Writer) -> None:
        writer.write_str(EcdsaCurve.NISTP256.value)
        writer.write_string(self.point)
        writer.write_str(self.application)


@dataclass(frozen=True)
class SkEd25519(KeyData):
    """Security key Ed25519 public key with FIDO application string."""

    key: bytes
    application: str

    def __post_init__(self):
        if len(self.key) != ED25519_KEY_SIZE:
            raise FormatError(
                f"Ed25519 public key must be {ED25519_KEY_SIZE} bytes, got {len(self.key)}"
            )

    @property
    def algorithm(self) -> Algorithm:
        return Algorithm.SK_ED25519

    @classmethod
    def decode_as(cls, reader: Reader, algorithm) -> "SkEd25519":
        return cls(key=reader.read_string(), application=reader.read_str())

    def encode_body(self, writer: Writer) -> None:
        writer.write_string(self.key)
        writer.write_str(self.application)


@dataclass(frozen=True)
class OpaquePublicKey(KeyData):
    """Key for an extension algorithm, kept as an uninterpreted string."""

    name: AlgorithmName
    key: bytes

    def __post_init__(self):
        if self.name in _KNOWN_NAMES:
            raise AlgorithmMismatchError(f"{self.name} has a dedicated key data variant")
        # Normalise plain strings; raises for names that are not extensions
        object.__setattr__(self, "name", AlgorithmName(self.name))

    @property
    def algorithm(self) -> AlgorithmName:
        return self.name

    @classmethod
    def decode_as(cls, reader: Reader, algorithm) -> "OpaquePublicKey":
        return cls(name=algorithm, key=reader.read_string())

    def encode_body(self, writer: Writer) -> None:
        writer.write_string(self.key)


_VARIANTS: dict[Algorithm, type[KeyData]] = {
    Algorithm.DSA: DsaPublicKey,
    Algorithm.ECDSA_SHA2_NISTP256: EcdsaPublicKey,
    Algorithm.ECDSA_SHA2_NISTP384: EcdsaPublicKey,
    Algorithm.ECDSA_SHA2_NISTP521: EcdsaPublicKey,
    Algorithm.ED25519: Ed25519PublicKey,
    Algorithm.RSA: RsaPublicKey,
    Algorithm.SK_ECDSA_SHA2_NISTP256: SkEcdsaSha2NistP256,
    Algorithm.SK_ED25519: SkEd25519,
}

_KNOWN_NAMES = frozenset(a.value for a in Algorithm)

_ORDER: list[type[KeyData]] = [
    DsaPublicKey,
    EcdsaPublicKey,
    Ed25519PublicKey,
    RsaPublicKey,
    SkEcdsaSha2NistP256,
    SkEd25519,
    OpaquePublicKey,
]
