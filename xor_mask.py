import struct

from ot_errors import MaskLengthMismatch, MessageTooLarge

FRAME_HEADER_SIZE = 2
_FRAME_HEADER = struct.Struct(">H")


def xor_bytes(a, b):
    if not isinstance(a, (bytes, bytearray)) or not isinstance(b, (bytes, bytearray)):
        raise TypeError("xor_bytes expects bytes operands")
    if len(a) != len(b):
        raise MaskLengthMismatch(len(a), len(b))
    return bytes(x ^ y for x, y in zip(a, b))


def mask(message, pad):
    return xor_bytes(message, pad)


def unmask(masked, pad):
    return xor_bytes(masked, pad)


def frame_message(message, size):
    """Place ``message`` in a ``size``-byte block: length header, body, zero fill.

    Lets messages shorter than the mask value be XOR-combined with it without
    relaxing the equal-length rule of :func:`xor_bytes`.
    """
    limit = min(size - FRAME_HEADER_SIZE, 0xFFFF)
    if len(message) > limit:
        raise MessageTooLarge(len(message), limit)
    body = _FRAME_HEADER.pack(len(message)) + bytes(message)
    return body + bytes(size - len(body))


def unframe_message(block):
    if len(block) < FRAME_HEADER_SIZE:
        raise MaskLengthMismatch(len(block), FRAME_HEADER_SIZE)
    (length,) = _FRAME_HEADER.unpack_from(block)
    if length > len(block) - FRAME_HEADER_SIZE:
        raise MaskLengthMismatch(length, len(block) - FRAME_HEADER_SIZE)
    return bytes(block[FRAME_HEADER_SIZE:FRAME_HEADER_SIZE + length])
