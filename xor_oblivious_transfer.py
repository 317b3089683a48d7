"""XOR-masking 1-out-of-2 OT.

The sender owns the only keypair. The receiver encrypts a secret value ``x``
in its chosen slot and an unrelated decoy ``r`` in the other; the sender
decrypts both and masks each framed message with its slot's value, so only
the slot holding ``x`` can be opened by the receiver.
"""

import logging

from capability_provider import default_provider
from oblivious_transfer import Choice, check_message_size
from ot_errors import MessageTooLarge, ProtocolStateError
from ot_messages import CiphertextPair, MaskedMessagePair, SenderPublicKey
from xor_mask import FRAME_HEADER_SIZE, frame_message, mask, unframe_message, unmask

logger = logging.getLogger(__name__)


def resolve_value_size(provider, value_size=None):
    limit = provider.max_plaintext_size()
    if value_size is None:
        return limit
    if value_size <= FRAME_HEADER_SIZE:
        raise ValueError(f"value_size must exceed the {FRAME_HEADER_SIZE}-byte frame header, got {value_size}")
    if value_size > limit:
        raise MessageTooLarge(value_size, limit)
    return value_size


class XorOTSender:
    def __init__(self, m0, m1, provider=None, value_size=None):
        self.provider = provider or default_provider()
        self.value_size = resolve_value_size(self.provider, value_size)
        self.max_message_size = self.value_size - FRAME_HEADER_SIZE
        self.m0 = check_message_size(m0, self.max_message_size)
        self.m1 = check_message_size(m1, self.max_message_size)
        self.private_key = None

    def generate_keys(self):
        keypair = self.provider.generate_keypair()
        self.private_key = keypair.private_key
        logger.debug("published sender public key")
        return SenderPublicKey(keypair.public_key)

    def create_masked_messages(self, pair):
        if self.private_key is None:
            raise ProtocolStateError("generate_keys() must run before create_masked_messages()")
        masked = [
            mask(frame_message(message, self.value_size), self.provider.decrypt(self.private_key, ciphertext))
            for message, ciphertext in zip((self.m0, self.m1), pair)
        ]
        logger.debug("masked both messages with the decrypted receiver values")
        return MaskedMessagePair(*masked)


class XorOTReceiver:
    def __init__(self, choice, provider=None, value_size=None):
        self.choice = Choice.from_bit(choice)
        self.provider = provider or default_provider()
        self.value_size = resolve_value_size(self.provider, value_size)
        self.secret_value = None

    def generate_encrypted_values(self, sender_pk):
        public_key = sender_pk.public_key if isinstance(sender_pk, SenderPublicKey) else sender_pk

        values = [None, None]
        values[self.choice] = self.provider.random_bytes(self.value_size)
        values[self.choice.other] = self.provider.random_bytes(self.value_size)
        pair = CiphertextPair(*(self.provider.encrypt(public_key, v) for v in values))

        # keep x only; the decoy dies with this frame
        self.secret_value = values[self.choice]
        logger.debug("encrypted secret and decoy values (%d bytes each)", self.value_size)
        return pair

    def extract_message(self, pair):
        if self.secret_value is None:
            raise ProtocolStateError("generate_encrypted_values() must run before extract_message()")
        return unframe_message(unmask(pair[self.choice], self.secret_value))


def xor_oblivious_transfer(messages, choice, provider=None):
    provider = provider or default_provider()
    sender = XorOTSender(messages[0], messages[1], provider=provider)
    receiver = XorOTReceiver(choice, provider=provider)

    # Step 1
    sender_pk = sender.generate_keys()

    # Step 2
    pair = receiver.generate_encrypted_values(sender_pk)

    # Step 3
    masked = sender.create_masked_messages(pair)

    # Step 4
    return receiver.extract_message(masked)
