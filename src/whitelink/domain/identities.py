"""Identity rules for both sides of a link.

- Directory identity: the Discord member snowflake, carried as an opaque string.
- Remote identity: a Minecraft player name, ``^[A-Za-z0-9_]{3,16}$``.
"""

from __future__ import annotations

import re

REMOTE_IDENTITY_PATTERN = re.compile(r"^[A-Za-z0-9_]{3,16}$")

INVALID_NAME_MESSAGE = (
    "The ign inputed is invalid. It should only contain letters, numbers "
    "and underscores, with 3-16 chars."
)


def is_valid_remote_identity(name: str | None) -> bool:
    """Check whether *name* is an acceptable Minecraft player name."""
    if not name:
        return False
    return REMOTE_IDENTITY_PATTERN.fullmatch(name) is not None


def directory_key(member_id: object) -> str:
    """Normalize a member id (int snowflake or str) to the table key form."""
    return str(member_id).strip()
