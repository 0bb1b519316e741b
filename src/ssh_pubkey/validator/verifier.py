"""Verifier for signatures made by allowed signers."""

import logging

from ..core.config import DEFAULT_CONFIG, CodecConfig
from ..core.errors import SshKeyError
from ..core.models import ValidationResult
from ..signature.sshsig import SshSig
from ..trust.store import AllowedSigners

logger = logging.getLogger(__name__)


class SignatureVerifier:
    """Verifies SSHSIG signatures against an allowed signers store."""

    def __init__(self, allowed_signers: AllowedSigners, config: CodecConfig = DEFAULT_CONFIG):
        """Initialize verifier.

        Args:
            allowed_signers: Keys allowed to sign for each principal
            config: Codec configuration (fingerprint hash algorithm)
        """
        self.allowed_signers = allowed_signers
        self.config = config

    def verify(
        self,
        principal: str,
        namespace: str,
        message: bytes,
        signature: SshSig | str | bytes,
    ) -> ValidationResult:
        """Verify that `principal` signed `message` in `namespace`.

        Args:
            principal: Expected signer identity
            namespace: Expected signature namespace
            message: Signed message
            signature: Parsed signature or PEM armoured signature

        Returns:
            ValidationResult with verification outcome
        """
        try:
            if not isinstance(signature, SshSig):
                signature = SshSig.from_pem(signature)

            if not self.allowed_signers.is_allowed(principal):
                return ValidationResult(valid=False, error=f"Unknown principal: {principal}")

            signer = self.allowed_signers.find_key(principal, signature.public_key)
            if signer is None:
                return ValidationResult(
                    valid=False, error=f"Signature key is not allowed for principal: {principal}"
                )

            if not signer.allows_namespace(namespace):
                return ValidationResult(
                    valid=False,
                    error=f"Key is not allowed to sign in namespace: {namespace}",
                )

            signer.public_key.verify(namespace, message, signature)
            return ValidationResult(
                valid=True,
                principal=principal,
                namespace=namespace,
                fingerprint=str(signer.public_key.fingerprint(self.config.default_hash_alg)),
            )

        except SshKeyError as e:
            logger.debug("Signature verification for %s failed: %s", principal, e)
            return ValidationResult(valid=False, error=str(e))

    def is_valid(
        self,
        principal: str,
        namespace: str,
        message: bytes,
        signature: SshSig | str | bytes,
    ) -> bool:
        """Check whether a signature is valid for `principal`."""
        return self.verify(principal, namespace, message, signature).valid
