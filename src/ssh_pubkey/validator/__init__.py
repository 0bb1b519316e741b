"""Verification of signatures against allowed signers."""

from .verifier import SignatureVerifier

__all__ = ["SignatureVerifier"]
