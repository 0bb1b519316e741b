"""Shared fixtures for ssh-pubkey tests."""

import pytest
from cryptography.hazmat.primitives import hashes
from cryptography.hazmat.primitives.asymmetric import dsa, ec, ed25519, padding, rsa
from cryptography.hazmat.primitives.asymmetric.utils import decode_dss_signature

from ssh_pubkey import HashAlg, PublicKey, Signature, SshSig, key_data_from_public_key
from ssh_pubkey.core.encoding import Writer

# Key and signature from `ssh-keygen -Y sign -n example` over b"testing"
ED25519_OPENSSH = (
    "ssh-ed25519 AAAAC3NzaC1lZDI1NTE5AAAAILM+rvN+ot98qgEN796jTiQfZfG1KaT0PtFDJ/XFSqti"
    " user@example.com"
)

ED25519_SIGNATURE_PEM = """-----BEGIN SSH SIGNATURE-----
U1NIU0lHAAAAAQAAADMAAAALc3NoLWVkMjU1MTkAAAAgsz6u836i33yqAQ3v3qNOJB9l8b
UppPQ+0UMn9cVKq2IAAAAHZXhhbXBsZQAAAAAAAAAGc2hhNTEyAAAAUwAAAAtzc2gtZWQy
NTUxOQAAAEBPEav+tMGNnox4MuzM7rlHyVBajCn8B0kAyiOWwPKprNsG3i6X+voz/WCSik
/FowYwqhgCABUJSvRX3AERVBUP
-----END SSH SIGNATURE-----
"""


def sign_sshsig(private_key, namespace: str, message: bytes, hash_alg=HashAlg.SHA512) -> SshSig:
    """Produce an SSHSIG signature with a `cryptography` private key."""
    key_data = key_data_from_public_key(private_key.public_key())
    data = SshSig.signed_data(namespace, hash_alg, message)

    if isinstance(private_key, ed25519.Ed25519PrivateKey):
        signature = Signature("ssh-ed25519", private_key.sign(data))
    elif isinstance(private_key, rsa.RSAPrivateKey):
        signature = Signature(
            "rsa-sha2-512", private_key.sign(data, padding.PKCS1v15(), hashes.SHA512())
        )
    elif isinstance(private_key, dsa.DSAPrivateKey):
        # ssh-dss signatures are r || s, 20 bytes each
        r, s = decode_dss_signature(private_key.sign(data, hashes.SHA1()))
        signature = Signature("ssh-dss", r.to_bytes(20, "big") + s.to_bytes(20, "big"))
    elif isinstance(private_key, ec.EllipticCurvePrivateKey):
        r, s = decode_dss_signature(private_key.sign(data, ec.ECDSA(key_data.curve.hash)))
        blob = Writer().write_mpint(r).write_mpint(s).getvalue()
        signature = Signature(key_data.algorithm_id, blob)
    else:
        raise TypeError(f"Unsupported private key: {type(private_key).__name__}")

    return SshSig(key_data, namespace, signature, hash_alg=hash_alg)


@pytest.fixture
def sign():
    return sign_sshsig


@pytest.fixture
def ed25519_public_key() -> PublicKey:
    return PublicKey.from_openssh(ED25519_OPENSSH)


@pytest.fixture
def ed25519_signature() -> SshSig:
    return SshSig.from_pem(ED25519_SIGNATURE_PEM)


@pytest.fixture
def ed25519_private_key():
    return ed25519.Ed25519PrivateKey.generate()


@pytest.fixture(scope="session")
def rsa_private_key():
    return rsa.generate_private_key(public_exponent=65537, key_size=2048)


@pytest.fixture(scope="session")
def dsa_private_key():
    return dsa.generate_private_key(key_size=1024)


@pytest.fixture
def ec_private_key():
    return ec.generate_private_key(ec.SECP256R1())
