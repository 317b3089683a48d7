import logging
from enum import IntEnum

from capability_provider import default_provider
from ot_errors import InvalidChoice, MessageTooLarge, ProtocolStateError
from ot_messages import CiphertextPair, PublicKeyBundle

logger = logging.getLogger(__name__)


class Choice(IntEnum):
    ZERO = 0
    ONE = 1

    @classmethod
    def from_bit(cls, bit):
        if isinstance(bit, int) and bit in (0, 1):
            return cls(int(bit))
        raise InvalidChoice(f"invalid choice bit: {bit!r}")

    def to_bit(self):
        return int(self)

    @property
    def other(self):
        return Choice(1 - self)


def check_message_size(message, limit):
    if not isinstance(message, (bytes, bytearray)):
        raise TypeError("OT messages must be bytes")
    if len(message) > limit:
        raise MessageTooLarge(len(message), limit)
    return bytes(message)


def _fake_public_key(provider):
    # only the public half leaves this scope
    return provider.generate_keypair().public_key


class OTSender:
    """Key-blinding sender: encrypts ``m_i`` under whatever key sits in slot ``i``."""

    def __init__(self, m0, m1, provider=None):
        self.provider = provider or default_provider()
        limit = self.provider.max_plaintext_size()
        self.m0 = check_message_size(m0, limit)
        self.m1 = check_message_size(m1, limit)

    def encrypt_messages(self, bundle):
        c0 = self.provider.encrypt(bundle.pk_for_choice_0, self.m0)
        c1 = self.provider.encrypt(bundle.pk_for_choice_1, self.m1)
        logger.debug("encrypted both messages under the receiver's key bundle")
        return CiphertextPair(c0, c1)


class OTReceiver:
    """Key-blinding receiver.

    Publishes its real public key in the chosen slot and a fake one, whose
    private half was never kept, in the other. Only the chosen ciphertext is
    ever decrypted.
    """

    def __init__(self, choice, provider=None):
        self.choice = Choice.from_bit(choice)
        self.provider = provider or default_provider()
        self.private_key = None
        self.public_keys = None

    def generate_public_keys(self):
        real = self.provider.generate_keypair()
        fake_public_key = _fake_public_key(self.provider)

        slots = [fake_public_key, fake_public_key]
        slots[self.choice] = real.public_key
        self.private_key = real.private_key
        self.public_keys = PublicKeyBundle(*slots)
        logger.debug("published public key bundle")
        return self.public_keys

    def decrypt_message(self, pair):
        if self.private_key is None:
            raise ProtocolStateError("generate_public_keys() must run before decrypt_message()")
        return self.provider.decrypt(self.private_key, pair[self.choice])


def oblivious_transfer(messages, choice, provider=None):
    provider = provider or default_provider()
    sender = OTSender(messages[0], messages[1], provider=provider)
    receiver = OTReceiver(choice, provider=provider)

    # Step 1
    bundle = receiver.generate_public_keys()

    # Step 2
    pair = sender.encrypt_messages(bundle)

    # Step 3
    return receiver.decrypt_message(pair)
