"""SSH public key encoding and decoding."""

from .algorithm import Algorithm, AlgorithmName, EcdsaCurve, parse_algorithm
from .comment import Comment, DiscardedComment
from .key_data import (
    DsaPublicKey,
    EcdsaPublicKey,
    Ed25519PublicKey,
    KeyData,
    OpaquePublicKey,
    RsaPublicKey,
    SkEcdsaSha2NistP256,
    SkEd25519,
)
from .public_key import CommentlessPublicKey, PublicKey
from .serde import PublicKeySerde
from .ssh_format import SshFormat

__all__ = [
    "Algorithm",
    "AlgorithmName",
    "EcdsaCurve",
    "parse_algorithm",
    "Comment",
    "DiscardedComment",
    "KeyData",
    "DsaPublicKey",
    "EcdsaPublicKey",
    "Ed25519PublicKey",
    "OpaquePublicKey",
    "RsaPublicKey",
    "SkEcdsaSha2NistP256",
    "SkEd25519",
    "PublicKey",
    "CommentlessPublicKey",
    "PublicKeySerde",
    "SshFormat",
]
