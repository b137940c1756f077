"""
Exceptions raised by the scheduling engine and the card store adapter.
"""

from __future__ import annotations


class SrsError(Exception):
    """Base class for all srs_core errors."""


class InvalidCardStateError(SrsError, ValueError):
    """A card state (or timestamp) handed in by the caller is malformed."""


class CardNotFoundError(SrsError, LookupError):
    """No card with the requested id exists in the card store."""

    def __init__(self, card_id: str):
        super().__init__(f"Card not found: {card_id}")
        self.card_id = card_id


class StaleCardStateError(SrsError):
    """The stored card changed between read and write (version mismatch)."""

    def __init__(self, card_id: str, expected_version: int):
        super().__init__(
            f"Card {card_id} was modified concurrently "
            f"(expected version {expected_version})"
        )
        self.card_id = card_id
        self.expected_version = expected_version
