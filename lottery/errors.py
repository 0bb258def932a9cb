"""Failures raised by lottery operations.

Every error aborts the whole call; state is rolled back before the
exception reaches the caller.
"""


class LotteryError(Exception):
    """Base class for all lottery failures."""


class Unauthorized(LotteryError):
    """A manager-only operation was called by someone else."""

    def __init__(self, caller: str) -> None:
        self.caller = caller
        super().__init__(f"Caller {caller} is not the manager")


class InvalidState(LotteryError):
    """The operation is not allowed in the current lottery state."""


class InvalidConfiguration(InvalidState):
    """Ticket price or capacity is not a positive integer."""


class InvalidPayment(LotteryError):
    """The value sent with an entry does not match the ticket price."""

    def __init__(self, expected: int, received: int) -> None:
        self.expected = expected
        self.received = received
        super().__init__(f"Ticket price is {expected}, received {received}")


class RoundFull(LotteryError):
    """The roster has already reached capacity."""


class PayoutFailure(LotteryError):
    """The prize transfer to the winner could not be completed."""
