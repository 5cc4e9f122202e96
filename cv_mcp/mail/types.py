"""Data types for outgoing notifications."""

from dataclasses import dataclass


@dataclass(frozen=True)
class EmailMessage:
    """A plain-text email, built per send and not retained afterwards.

    ``sender`` is always the configured account, never caller-supplied.
    """

    sender: str
    to: str
    subject: str
    body: str
