"""Result types for the add-contact flow."""

from dataclasses import dataclass


@dataclass(frozen=True)
class ContactCreated:
    """Contact was stored. summary is the text rendering of the stored contact."""

    identifier: str
    summary: str


@dataclass(frozen=True)
class Invalid:
    """Property map is invalid (e.g. neither first nor last name given)."""

    reason: str


@dataclass(frozen=True)
class NotSaved:
    """The store rejected the new contact."""

    reason: str = "New contact was not created."
