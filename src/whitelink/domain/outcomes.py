"""Remote command construction and reply classification.

The RCON reply is free text with no grammar. Every interpretation of it
goes through :func:`classify` so a change in server wording is a one-line
edit to :data:`ADD_SUCCESS_MARKER`.
"""

from __future__ import annotations

from enum import StrEnum

# Vanilla replies "Added <name> to the whitelist"; "Player is already
# whitelisted" and "That player does not exist" count as rejections.
ADD_SUCCESS_MARKER = "Added"


class CommandOutcome(StrEnum):
    """Tri-state interpretation of a single remote command."""

    CONFIRMED = "confirmed"
    REJECTED = "rejected"
    UNKNOWN = "unknown"


def classify(raw: str | None) -> CommandOutcome:
    """Classify a raw reply from the whitelist command family.

    An empty reply means the executor could not reach the server, so the
    outcome is unknown rather than rejected.

    Examples:
        >>> classify("Added Steve to the whitelist")
        <CommandOutcome.CONFIRMED: 'confirmed'>
        >>> classify("")
        <CommandOutcome.UNKNOWN: 'unknown'>
        >>> classify("That player does not exist")
        <CommandOutcome.REJECTED: 'rejected'>
    """
    if not raw:
        return CommandOutcome.UNKNOWN
    if ADD_SUCCESS_MARKER in raw:
        return CommandOutcome.CONFIRMED
    return CommandOutcome.REJECTED


def whitelist_add(name: str) -> str:
    return f"whitelist add {name}"


def whitelist_remove(name: str) -> str:
    return f"whitelist remove {name}"
