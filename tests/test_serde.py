"""Tests for structured serialization and the pydantic field type."""

import json

import pytest
from pydantic import BaseModel, ValidationError

from ssh_pubkey import CommentlessPublicKey, PublicKey, PublicKeySerde
from ssh_pubkey.integrations.pydantic import OpenSshPublicKey

from conftest import ED25519_OPENSSH


class Host(BaseModel):
    name: str
    key: OpenSshPublicKey


def test_human_readable_serde(ed25519_public_key):
    """Test that text targets keep the OpenSSH line and comment."""
    serde = PublicKeySerde(human_readable=True)
    value = serde.serialize(ed25519_public_key)

    assert value == ED25519_OPENSSH
    assert serde.deserialize(value) == ed25519_public_key


def test_binary_serde_drops_comment(ed25519_public_key):
    """Test that binary targets carry only the key blob."""
    serde = PublicKeySerde(human_readable=False)
    value = serde.serialize(ed25519_public_key)

    assert value == ed25519_public_key.to_bytes()
    decoded = serde.deserialize(value)
    assert decoded.key_data == ed25519_public_key.key_data
    assert decoded.comment.is_empty()


def test_serde_type_checks(ed25519_public_key):
    """Test that each target kind accepts only its native type."""
    with pytest.raises(TypeError):
        PublicKeySerde(human_readable=True).deserialize(ed25519_public_key.to_bytes())

    with pytest.raises(TypeError):
        PublicKeySerde(human_readable=False).deserialize(ED25519_OPENSSH)


def test_serde_key_class():
    """Test that the key class can be configured."""
    serde = PublicKeySerde(human_readable=True, key_class=CommentlessPublicKey)
    public_key = serde.deserialize(ED25519_OPENSSH)

    assert isinstance(public_key, CommentlessPublicKey)
    assert public_key.comment.is_empty()


def test_pydantic_json(ed25519_public_key):
    """Test that JSON output uses the OpenSSH line."""
    host = Host(name="server", key=ED25519_OPENSSH)
    data = json.loads(host.model_dump_json())

    assert data["key"] == ED25519_OPENSSH
    assert Host.model_validate_json(host.model_dump_json()).key == ed25519_public_key


def test_pydantic_python_mode(ed25519_public_key):
    """Test that python mode output is the binary blob."""
    host = Host(name="server", key=ed25519_public_key)
    data = host.model_dump()

    assert data["key"] == ed25519_public_key.to_bytes()
    assert Host.model_validate(data).key.key_data == ed25519_public_key.key_data


def test_pydantic_context_flag(ed25519_public_key):
    """Test that the context decides the representation when given."""
    host = Host(name="server", key=ed25519_public_key)

    assert host.model_dump(context={"human_readable": True})["key"] == ED25519_OPENSSH

    with pytest.raises(ValidationError):
        Host.model_validate(
            {"name": "server", "key": ED25519_OPENSSH}, context={"human_readable": False}
        )


def test_pydantic_accepts_instances(ed25519_public_key):
    """Test that PublicKey instances pass through unchanged."""
    host = Host(name="server", key=ed25519_public_key)

    assert host.key is ed25519_public_key
    assert isinstance(host.key, PublicKey)


def test_pydantic_rejects_invalid_keys():
    """Test that malformed keys become validation errors."""
    with pytest.raises(ValidationError):
        Host(name="server", key="ssh-ed25519 AAAA")

    with pytest.raises(ValidationError):
        Host(name="server", key=12345)


def test_json_schema():
    """Test that the field is described as a string."""
    schema = Host.model_json_schema()

    assert schema["properties"]["key"]["type"] == "string"


if __name__ == "__main__":
    pytest.main([__file__, "-v"])
