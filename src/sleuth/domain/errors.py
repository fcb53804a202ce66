"""Exception types raised by the engine and its collaborators."""

from __future__ import annotations


class SleuthError(Exception):
    """Base class for all sleuth errors."""


class CatalogError(SleuthError):
    """The card catalog is missing, malformed or inconsistent."""


class GameSetupError(SleuthError):
    """A game or agent cannot be set up with the given players."""


class ContradictionError(SleuthError):
    """Recorded knowledge contradicts itself.

    Raised when a card would be held in two locations at once, or when a
    mystery loses every candidate card. Either means the incoming events were
    not consistent with a single deal.
    """

    def __init__(self, message: str, card: str | None = None, location: str | None = None) -> None:
        super().__init__(message)
        self.card = card
        self.location = location
