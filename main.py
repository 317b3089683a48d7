import logging
import os
import sys

from capability_provider import DEFAULT_KEY_SIZE, DEFAULT_PADDING, RSAProvider
from oblivious_transfer import Choice, OTReceiver, OTSender
from ot_errors import ObliviousTransferError
from ot_messages import CiphertextPair, MaskedMessagePair, PublicKeyBundle, SenderPublicKey
from xor_oblivious_transfer import XorOTReceiver, XorOTSender

USAGE = "Usage: python main.py [egl|xor] [0|1] [message0] [message1]"

logger = logging.getLogger("main")


def run_egl(provider, m0, m1, choice):
    sender = OTSender(m0, m1, provider=provider)
    receiver = OTReceiver(choice, provider=provider)

    wire = receiver.generate_public_keys().to_bytes()
    wire = sender.encrypt_messages(PublicKeyBundle.from_bytes(wire)).to_bytes()
    return receiver.decrypt_message(CiphertextPair.from_bytes(wire))


def run_xor(provider, m0, m1, choice):
    sender = XorOTSender(m0, m1, provider=provider)
    receiver = XorOTReceiver(choice, provider=provider)

    wire = sender.generate_keys().to_bytes()
    wire = receiver.generate_encrypted_values(SenderPublicKey.from_bytes(wire)).to_bytes()
    wire = sender.create_masked_messages(CiphertextPair.from_bytes(wire)).to_bytes()
    return receiver.extract_message(MaskedMessagePair.from_bytes(wire))


VARIANTS = {
    "egl": run_egl,
    "xor": run_xor,
}


def main(argv=None):
    argv = sys.argv[1:] if argv is None else argv
    if len(argv) not in (2, 4) or argv[0] not in VARIANTS or argv[1] not in ("0", "1"):
        print(USAGE)
        return 1

    level = os.environ.get("OT_LOG_LEVEL", "WARNING").upper()
    if not isinstance(logging.getLevelName(level), int):
        print(f"Unknown OT_LOG_LEVEL {level!r}")
        print(USAGE)
        return 1

    logging.basicConfig(
        level=level,
        format="%(asctime)s %(name)s %(levelname)s %(message)s",
    )

    variant, choice = argv[0], Choice.from_bit(int(argv[1]))
    m0, m1 = (argv[2].encode(), argv[3].encode()) if len(argv) == 4 else (b"Hello Alice!", b"Hello Bob!!")

    try:
        provider = RSAProvider(
            key_size=int(os.environ.get("OT_KEY_SIZE", DEFAULT_KEY_SIZE)),
            padding=os.environ.get("OT_PADDING", DEFAULT_PADDING),
        )
        result = VARIANTS[variant](provider, m0, m1, choice)
    except (ObliviousTransferError, ValueError) as e:
        logger.error("oblivious transfer failed: %s", e)
        return 2

    print(f"Receiver chose {choice.to_bit()} and learned: {result.decode(errors='replace')}")
    return 0


if __name__ == "__main__":
    sys.exit(main())
