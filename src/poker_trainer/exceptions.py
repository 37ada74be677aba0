"""Exceptions raised by the training engine."""


class PokerTrainerError(Exception):
    """Base class for all poker-trainer errors."""


class InvalidActionError(PokerTrainerError, ValueError):
    """An operation was requested that the current state does not allow."""


class DuplicateCardsError(PokerTrainerError):
    """A deal produced the same card more than once."""

    def __init__(self, duplicates):
        self.duplicates = list(duplicates)
        super().__init__(
            "Duplicate cards dealt: " + ", ".join(repr(c) for c in self.duplicates)
        )


class DealIntegrityError(PokerTrainerError):
    """Repeated redeals still produced duplicate cards."""
