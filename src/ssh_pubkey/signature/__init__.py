"""SSHSIG detached signatures."""

from .sshsig import Signature, SshSig

__all__ = ["Signature", "SshSig"]
