"""SSH public key algorithm identifiers."""

from enum import Enum

from cryptography.hazmat.primitives import hashes
from cryptography.hazmat.primitives.asymmetric import ec

from ..core.errors import AlgorithmUnknownError

MAX_ALGORITHM_NAME_SIZE = 64


class Algorithm(str, Enum):
    """Public key algorithms with a dedicated key data variant."""

    DSA = "ssh-dss"
    ECDSA_SHA2_NISTP256 = "ecdsa-sha2-nistp256"
    ECDSA_SHA2_NISTP384 = "ecdsa-sha2-nistp384"
    ECDSA_SHA2_NISTP521 = "ecdsa-sha2-nistp521"
    ED25519 = "ssh-ed25519"
    RSA = "ssh-rsa"
    SK_ECDSA_SHA2_NISTP256 = "sk-ecdsa-sha2-nistp256@openssh.com"
    SK_ED25519 = "sk-ssh-ed25519@openssh.com"

    def __str__(self) -> str:
        return self.value


class EcdsaCurve(str, Enum):
    """NIST curves supported for ECDSA keys."""

    NISTP256 = "nistp256"
    NISTP384 = "nistp384"
    NISTP521 = "nistp521"

    def __str__(self) -> str:
        return self.value

    @classmethod
    def from_algorithm(cls, algorithm: Algorithm) -> "EcdsaCurve":
        return cls(algorithm.value.rsplit("-", 1)[-1])

    @property
    def algorithm(self) -> Algorithm:
        return Algorithm(f"ecdsa-sha2-{self.value}")

    @property
    def field_size(self) -> int:
        """Size of one encoded coordinate in bytes."""
        return {"nistp256": 32, "nistp384": 48, "nistp521": 66}[self.value]

    @property
    def curve(self) -> ec.EllipticCurve:
        return {
            "nistp256": ec.SECP256R1,
            "nistp384": ec.SECP384R1,
            "nistp521": ec.SECP521R1,
        }[self.value]()

    @property
    def hash(self) -> hashes.HashAlgorithm:
        """Hash function paired with the curve for signatures."""
        return {
            "nistp256": hashes.SHA256,
            "nistp384": hashes.SHA384,
            "nistp521": hashes.SHA512,
        }[self.value]()


class AlgorithmName(str):
    """Name of an algorithm without a dedicated key data variant.

    Only vendor extension names of the form `name@domain` are accepted, as
    described in RFC 4251 section 6.
    """

    def __new__(cls, name: str) -> "AlgorithmName":
        if not _is_extension_name(name):
            raise AlgorithmUnknownError(f"Unknown algorithm: {name!r}")
        return super().__new__(cls, name)

    def __repr__(self) -> str:
        return f"AlgorithmName({str.__repr__(self)})"


def _is_extension_name(name: str) -> bool:
    if not name or len(name) > MAX_ALGORITHM_NAME_SIZE:
        return False
    if any(not 0x21 <= ord(c) <= 0x7E or c == "," for c in name):
        return False
    local, sep, domain = name.partition("@")
    return bool(sep and local and domain) and "@" not in domain


def parse_algorithm(name: str) -> Algorithm | AlgorithmName:
    """Look up an algorithm identifier.

    Args:
        name: Identifier as it appears on the wire

    Returns:
        The matching Algorithm, or an AlgorithmName for extension algorithms

    Raises:
        AlgorithmUnknownError: If the name is neither known nor a valid
            extension name
    """
    try:
        return Algorithm(name)
    except ValueError:
        return AlgorithmName(name)
