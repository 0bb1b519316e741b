"""Allowed signers management."""

from .store import AllowedSigner, AllowedSigners

__all__ = ["AllowedSigner", "AllowedSigners"]
