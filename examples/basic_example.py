#!/usr/bin/env python3
"""
Basic example demonstrating the ssh-pubkey workflow:
1. Parse an OpenSSH public key and compute its fingerprint
2. Sign a message in the SSHSIG format
3. Verify the signature against an allowed signers list
"""

from cryptography.hazmat.primitives.asymmetric import ed25519

from ssh_pubkey import (
    AllowedSigners,
    HashAlg,
    PublicKey,
    Signature,
    SignatureVerifier,
    SshSig,
    key_data_from_public_key,
)


def main():
    print("=== ssh-pubkey - Basic Example ===\n")

    # ============================================================================
    # STEP 1: Generate a key and render it as an OpenSSH line
    # ============================================================================
    print("1. Generating Ed25519 key...")
    private_key = ed25519.Ed25519PrivateKey.generate()
    public_key = PublicKey(key_data_from_public_key(private_key.public_key()), "alice@example.com")
    line = public_key.to_openssh()
    print(f"   ✓ {line}\n")

    # ============================================================================
    # STEP 2: Parse the line back and fingerprint it
    # ============================================================================
    print("2. Parsing OpenSSH public key...")
    parsed = PublicKey.from_openssh(line)
    print(f"   ✓ Algorithm: {parsed.algorithm}")
    print(f"   - Comment: {parsed.comment}")
    print(f"   - Fingerprint: {parsed.fingerprint()}\n")

    # ============================================================================
    # STEP 3: Sign a message
    # ============================================================================
    print("3. Signing message in namespace 'file'...")
    message = b"release-1.0.tar.gz contents"
    signed_data = SshSig.signed_data("file", HashAlg.SHA512, message)
    signature = SshSig(
        parsed,
        "file",
        Signature("ssh-ed25519", private_key.sign(signed_data)),
    )
    print(signature.to_pem())

    # ============================================================================
    # STEP 4: Set up allowed signers
    # ============================================================================
    print("4. Setting up allowed signers...")
    allowed_signers = AllowedSigners()
    allowed_signers.add_signer("alice@example.com", parsed, namespaces=["file"])
    print(f"   ✓ {len(allowed_signers.list_signers())} signer(s) allowed\n")

    # ============================================================================
    # STEP 5: Verify
    # ============================================================================
    print("5. Verifying signature...")
    verifier = SignatureVerifier(allowed_signers)

    result = verifier.verify("alice@example.com", "file", message, signature.to_pem())
    if result:
        print(f"   ✓ Valid signature from {result.principal} ({result.fingerprint})")
    else:
        print(f"   ✗ Invalid signature: {result.error}")

    # ============================================================================
    # STEP 6: Tampered message and wrong namespace are rejected
    # ============================================================================
    print("\n6. Checking rejections...")
    tampered = verifier.verify("alice@example.com", "file", message + b"!", signature)
    print(f"   - Tampered message: valid={tampered.valid} ({tampered.error})")

    wrong_namespace = verifier.verify("alice@example.com", "git", message, signature)
    print(f"   - Wrong namespace: valid={wrong_namespace.valid} ({wrong_namespace.error})")

    print("\n=== Example Complete ===")


if __name__ == "__main__":
    main()
