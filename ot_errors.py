class ObliviousTransferError(Exception):
    """Base class for every failure raised by the OT roles and their provider."""


class MessageTooLarge(ObliviousTransferError):
    def __init__(self, size, limit):
        super().__init__(f"message of {size} bytes exceeds the {limit}-byte limit")
        self.size = size
        self.limit = limit


class KeyGenerationFailed(ObliviousTransferError):
    pass


class EncryptionFailed(ObliviousTransferError):
    pass


class DecryptionFailed(ObliviousTransferError):
    pass


class MaskLengthMismatch(ObliviousTransferError):
    def __init__(self, left, right):
        super().__init__(f"XOR operands differ in length: {left} != {right}")
        self.left = left
        self.right = right


class ProtocolStateError(ObliviousTransferError):
    """Raised when a role is asked for a step it has not reached yet."""


class InvalidChoice(ObliviousTransferError, ValueError):
    pass
