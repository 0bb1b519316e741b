"""Pydantic integration for ssh-pubkey.

`OpenSshPublicKey` can be used as a field type:

    class Host(BaseModel):
        name: str
        key: OpenSshPublicKey

Whether a target is human-readable is taken from the `human_readable` key of
the pydantic context when present. Otherwise JSON mode counts as
human-readable (OpenSSH text) and python mode as binary (raw key bytes).
"""

from typing import Annotated, Any, Optional

from pydantic import PlainSerializer, PlainValidator, WithJsonSchema
from pydantic_core.core_schema import SerializationInfo, ValidationInfo

from ..core.errors import SshKeyError
from ..public.public_key import PublicKey
from ..public.serde import PublicKeySerde


def _context_flag(context: Optional[dict]) -> Optional[bool]:
    if context and "human_readable" in context:
        return bool(context["human_readable"])
    return None


def _validate(value: Any, info: ValidationInfo) -> PublicKey:
    if isinstance(value, PublicKey):
        return value

    human_readable = _context_flag(info.context)
    if human_readable is None:
        # Python mode input may be either representation
        human_readable = info.mode == "json" or isinstance(value, str)

    try:
        return PublicKeySerde(human_readable).deserialize(value)
    except (SshKeyError, TypeError) as e:
        raise ValueError(f"Invalid SSH public key: {e}") from e


def _serialize(value: PublicKey, info: SerializationInfo) -> str | bytes:
    human_readable = _context_flag(info.context)
    if human_readable is None:
        human_readable = info.mode_is_json()
    return PublicKeySerde(human_readable).serialize(value)


OpenSshPublicKey = Annotated[
    PublicKey,
    PlainValidator(_validate),
    PlainSerializer(_serialize),
    WithJsonSchema({"type": "string", "description": "OpenSSH formatted public key"}),
]
