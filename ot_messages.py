"""Wire records exchanged between the OT sender and receiver.

Every record is an ordered pair (or a single key) whose slot position is the
only carrier of the receiver's choice, so encoding keeps slot 0 before slot 1
and never adds a tag that distinguishes the slots. The byte form is UTF-8
JSON with base64 fields, leaving framing and delivery to the transport.
"""

import base64
import json
from dataclasses import dataclass

from cryptography.hazmat.primitives.asymmetric import rsa

from capability_provider import public_key_from_bytes, public_key_to_bytes

PROTO_VERSION = "1.0"

__all__ = [
    "PROTO_VERSION",
    "PublicKeyBundle", "CiphertextPair", "MaskedMessagePair", "SenderPublicKey",
    "b64encode_bytes", "b64decode_bytes",
]


def b64encode_bytes(data):
    if not isinstance(data, (bytes, bytearray)):
        raise TypeError("b64encode_bytes expects bytes")
    return base64.b64encode(bytes(data)).decode("ascii")


def b64decode_bytes(s):
    if not isinstance(s, str):
        raise TypeError("b64decode_bytes expects str")
    return base64.b64decode(s.encode("ascii"), validate=True)


def _check_envelope(obj, type_name, fields):
    if not isinstance(obj, dict):
        raise TypeError(f"{type_name} payload must be a JSON object")
    if obj.get("type") != type_name:
        raise ValueError(f"expected message type {type_name!r}, got {obj.get('type')!r}")
    if obj.get("version") != PROTO_VERSION:
        raise ValueError(f"unsupported protocol version {obj.get('version')!r}")
    missing = [k for k in fields if k not in obj]
    if missing:
        raise ValueError(f"missing required field(s): {missing}")


class _WireMessage:
    TYPE = ""

    def to_dict(self):
        raise NotImplementedError

    @classmethod
    def from_dict(cls, obj):
        raise NotImplementedError

    def to_json(self):
        return json.dumps(self.to_dict(), separators=(",", ":"))

    @classmethod
    def from_json(cls, text):
        return cls.from_dict(json.loads(text))

    def to_bytes(self):
        return self.to_json().encode("utf-8")

    @classmethod
    def from_bytes(cls, data):
        return cls.from_json(bytes(data).decode("utf-8"))


class _SlotPair(_WireMessage):
    FIELDS = ()

    def _slots(self):
        return tuple(getattr(self, name) for name in self.FIELDS)

    def __getitem__(self, index):
        if index not in (0, 1):
            raise IndexError(f"slot index must be 0 or 1, got {index!r}")
        return self._slots()[index]

    def __iter__(self):
        return iter(self._slots())

    def __len__(self):
        return 2

    def _encode_slot(self, value):
        return b64encode_bytes(value)

    @classmethod
    def _decode_slot(cls, text):
        return b64decode_bytes(text)

    def to_dict(self):
        return {
            "type": self.TYPE,
            "version": PROTO_VERSION,
            "slots": [self._encode_slot(v) for v in self._slots()],
        }

    @classmethod
    def from_dict(cls, obj):
        _check_envelope(obj, cls.TYPE, ("slots",))
        slots = obj["slots"]
        if not isinstance(slots, list) or len(slots) != 2:
            raise ValueError(f"{cls.TYPE} must carry exactly two slots")
        return cls(*(cls._decode_slot(s) for s in slots))


@dataclass(frozen=True)
class PublicKeyBundle(_SlotPair):
    """Receiver -> sender (key blinding): one RSA public key per message slot."""
    pk_for_choice_0: rsa.RSAPublicKey
    pk_for_choice_1: rsa.RSAPublicKey

    TYPE = "public_key_bundle"
    FIELDS = ("pk_for_choice_0", "pk_for_choice_1")

    def _encode_slot(self, value):
        return b64encode_bytes(public_key_to_bytes(value))

    @classmethod
    def _decode_slot(cls, text):
        return public_key_from_bytes(b64decode_bytes(text))


@dataclass(frozen=True)
class CiphertextPair(_SlotPair):
    c0: bytes
    c1: bytes

    TYPE = "ciphertext_pair"
    FIELDS = ("c0", "c1")


@dataclass(frozen=True)
class MaskedMessagePair(_SlotPair):
    """Sender -> receiver (XOR masking): ``(v0 ^ m0, v1 ^ m1)``."""
    k0: bytes
    k1: bytes

    TYPE = "masked_message_pair"
    FIELDS = ("k0", "k1")


@dataclass(frozen=True)
class SenderPublicKey(_WireMessage):
    public_key: rsa.RSAPublicKey

    TYPE = "sender_public_key"

    def to_dict(self):
        return {
            "type": self.TYPE,
            "version": PROTO_VERSION,
            "public_key": b64encode_bytes(public_key_to_bytes(self.public_key)),
        }

    @classmethod
    def from_dict(cls, obj):
        _check_envelope(obj, cls.TYPE, ("public_key",))
        return cls(public_key_from_bytes(b64decode_bytes(obj["public_key"])))
