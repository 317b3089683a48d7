import os

import pytest

from ot_errors import MaskLengthMismatch, MessageTooLarge
from xor_mask import FRAME_HEADER_SIZE, frame_message, mask, unframe_message, unmask, xor_bytes


class TestXorBytes:
    def test_known_values(self):
        a = bytes([0x12, 0x34, 0x56])
        b = bytes([0xAB, 0xCD, 0xEF])
        assert xor_bytes(a, b) == bytes([0x12 ^ 0xAB, 0x34 ^ 0xCD, 0x56 ^ 0xEF])

    def test_unmask_inverts_mask(self):
        for length in (0, 1, 16, 117):
            a = os.urandom(length)
            b = os.urandom(length)
            assert unmask(mask(a, b), b) == a

    def test_self_xor_is_zero(self):
        a = os.urandom(32)
        assert xor_bytes(a, a) == bytes(32)

    def test_accepts_bytearray(self):
        assert xor_bytes(bytearray(b"\x0f"), b"\xf0") == b"\xff"

    def test_length_mismatch_is_rejected(self):
        with pytest.raises(MaskLengthMismatch) as info:
            xor_bytes(b"\x12\x34", b"\xab\xcd\xef")
        assert (info.value.left, info.value.right) == (2, 3)

    def test_mask_does_not_pad(self):
        with pytest.raises(MaskLengthMismatch):
            mask(b"short", os.urandom(16))
        with pytest.raises(MaskLengthMismatch):
            unmask(os.urandom(16), b"short")

    def test_non_bytes_operand(self):
        with pytest.raises(TypeError):
            xor_bytes("abc", b"abc")


class TestFraming:
    def test_frame_has_requested_size(self):
        block = frame_message(b"Hello Bob!!", 64)
        assert len(block) == 64
        assert unframe_message(block) == b"Hello Bob!!"

    def test_empty_message(self):
        assert unframe_message(frame_message(b"", 8)) == b""

    def test_message_at_limit(self):
        message = os.urandom(30)
        block = frame_message(message, 30 + FRAME_HEADER_SIZE)
        assert unframe_message(block) == message

    def test_message_over_limit(self):
        with pytest.raises(MessageTooLarge) as info:
            frame_message(os.urandom(31), 30 + FRAME_HEADER_SIZE)
        assert info.value.limit == 30

    def test_corrupt_header(self):
        with pytest.raises(MaskLengthMismatch):
            unframe_message(b"\xff\xff" + bytes(10))

    def test_truncated_block(self):
        with pytest.raises(MaskLengthMismatch):
            unframe_message(b"\x00")
