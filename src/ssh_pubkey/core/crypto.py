"""Signature verification using the `cryptography` package."""

import hashlib
import struct
from typing import TYPE_CHECKING

from cryptography.exceptions import InvalidSignature
from cryptography.hazmat.primitives import hashes, serialization
from cryptography.hazmat.primitives.asymmetric import dsa, ec, ed25519, padding, rsa
from cryptography.hazmat.primitives.asymmetric.utils import encode_dss_signature

from ..public.algorithm import EcdsaCurve
from ..public.key_data import (
    DsaPublicKey,
    EcdsaPublicKey,
    Ed25519PublicKey,
    KeyData,
    RsaPublicKey,
    SkEcdsaSha2NistP256,
    SkEd25519,
)
from .encoding import Reader
from .errors import (
    AlgorithmMismatchError,
    AlgorithmUnknownError,
    FormatError,
    InvalidSignatureError,
)

if TYPE_CHECKING:
    from ..signature.sshsig import Signature

RSA_HASHES = {
    "rsa-sha2-256": hashes.SHA256,
    "rsa-sha2-512": hashes.SHA512,
}

DSA_SIGNATURE_SIZE = 40

_CURVES_BY_NAME = {
    "secp256r1": EcdsaCurve.NISTP256,
    "secp384r1": EcdsaCurve.NISTP384,
    "secp521r1": EcdsaCurve.NISTP521,
}


def signature_algorithms(key_data: KeyData) -> tuple[str, ...]:
    """Signature algorithm names that may be used with a key.

    Args:
        key_data: Public key

    Returns:
        Accepted signature algorithm identifiers
    """
    if isinstance(key_data, RsaPublicKey):
        return tuple(RSA_HASHES)
    return (key_data.algorithm_id,)


def load_public_key(key_data: KeyData):
    """Convert key data into a `cryptography` public key.

    Security key variants yield the underlying Ed25519 or P-256 key.

    Raises:
        AlgorithmUnknownError: For opaque keys
        FormatError: If `cryptography` rejects the key material
    """
    try:
        if isinstance(key_data, (Ed25519PublicKey, SkEd25519)):
            return ed25519.Ed25519PublicKey.from_public_bytes(key_data.key)
        if isinstance(key_data, RsaPublicKey):
            return rsa.RSAPublicNumbers(key_data.e, key_data.n).public_key()
        if isinstance(key_data, DsaPublicKey):
            parameters = dsa.DSAParameterNumbers(key_data.p, key_data.q, key_data.g)
            return dsa.DSAPublicNumbers(key_data.y, parameters).public_key()
        if isinstance(key_data, EcdsaPublicKey):
            return ec.EllipticCurvePublicKey.from_encoded_point(
                key_data.curve.curve, key_data.point
            )
        if isinstance(key_data, SkEcdsaSha2NistP256):
            return ec.EllipticCurvePublicKey.from_encoded_point(ec.SECP256R1(), key_data.point)
    except ValueError as e:
        raise FormatError(f"Invalid {key_data.algorithm_id} key: {e}") from e

    raise AlgorithmUnknownError(f"No public key support for {key_data.algorithm_id}")


def key_data_from_public_key(public_key) -> KeyData:
    """Convert a `cryptography` public key into key data.

    Args:
        public_key: Ed25519, RSA, DSA, or NIST curve ECDSA public key

    Returns:
        Matching key data variant

    Raises:
        AlgorithmUnknownError: For unsupported key types or curves
    """
    if isinstance(public_key, ed25519.Ed25519PublicKey):
        raw = public_key.public_bytes(
            encoding=serialization.Encoding.Raw, format=serialization.PublicFormat.Raw
        )
        return Ed25519PublicKey(raw)

    if isinstance(public_key, rsa.RSAPublicKey):
        numbers = public_key.public_numbers()
        return RsaPublicKey(e=numbers.e, n=numbers.n)

    if isinstance(public_key, dsa.DSAPublicKey):
        numbers = public_key.public_numbers()
        parameters = numbers.parameter_numbers
        return DsaPublicKey(p=parameters.p, q=parameters.q, g=parameters.g, y=numbers.y)

    if isinstance(public_key, ec.EllipticCurvePublicKey):
        curve = _CURVES_BY_NAME.get(public_key.curve.name)
        if curve is None:
            raise AlgorithmUnknownError(f"Unsupported curve: {public_key.curve.name}")
        point = public_key.public_bytes(
            encoding=serialization.Encoding.X962,
            format=serialization.PublicFormat.UncompressedPoint,
        )
        return EcdsaPublicKey(curve=curve, point=point)

    raise AlgorithmUnknownError(f"Unsupported public key type: {type(public_key).__name__}")


def sk_signed_data(application: str, flags: int, counter: int, data: bytes) -> bytes:
    """Data actually signed by a FIDO security key for `data`."""
    return (
        hashlib.sha256(application.encode("utf-8")).digest()
        + struct.pack(">BI", flags, counter)
        + hashlib.sha256(data).digest()
    )


def _ecdsa_der_signature(blob: bytes) -> bytes:
    # SSH ECDSA signature blob: mpint r, mpint s
    reader = Reader(blob)
    r = reader.read_mpint()
    s = reader.read_mpint()
    return reader.finish(encode_dss_signature(r, s))


def verify_signature(key_data: KeyData, signature: "Signature", data: bytes) -> None:
    """Verify a raw SSH signature over `data`.

    Args:
        key_data: Public key expected to have made the signature
        signature: Decoded signature blob
        data: Exact bytes that were signed

    Raises:
        AlgorithmMismatchError: If the signature algorithm does not fit the key
        AlgorithmUnknownError: If the key algorithm has no verifier
        FormatError: If the signature blob is malformed
        InvalidSignatureError: If the signature does not verify
    """
    if signature.algorithm not in signature_algorithms(key_data):
        raise AlgorithmMismatchError(
            f"Signature algorithm {signature.algorithm!r} cannot be used "
            f"with {key_data.algorithm_id} keys"
        )

    public_key = load_public_key(key_data)

    try:
        if isinstance(key_data, Ed25519PublicKey):
            public_key.verify(signature.data, data)

        elif isinstance(key_data, SkEd25519):
            public_key.verify(
                signature.data,
                sk_signed_data(key_data.application, signature.flags, signature.counter, data),
            )

        elif isinstance(key_data, RsaPublicKey):
            # Leading zero bytes may have been stripped by the signer
            size = (key_data.n.bit_length() + 7) // 8
            sig = signature.data.rjust(size, b"\x00")
            public_key.verify(
                sig, data, padding.PKCS1v15(), RSA_HASHES[signature.algorithm]()
            )

        elif isinstance(key_data, DsaPublicKey):
            if len(signature.data) != DSA_SIGNATURE_SIZE:
                raise FormatError(f"DSA signature must be {DSA_SIGNATURE_SIZE} bytes")
            r = int.from_bytes(signature.data[:20], "big")
            s = int.from_bytes(signature.data[20:], "big")
            public_key.verify(encode_dss_signature(r, s), data, hashes.SHA1())

        elif isinstance(key_data, EcdsaPublicKey):
            public_key.verify(
                _ecdsa_der_signature(signature.data),
                data,
                ec.ECDSA(key_data.curve.hash),
            )

        elif isinstance(key_data, SkEcdsaSha2NistP256):
            public_key.verify(
                _ecdsa_der_signature(signature.data),
                sk_signed_data(key_data.application, signature.flags, signature.counter, data),
                ec.ECDSA(hashes.SHA256()),
            )

    except InvalidSignature as e:
        raise InvalidSignatureError(
            f"{signature.algorithm} signature verification failed"
        ) from e
