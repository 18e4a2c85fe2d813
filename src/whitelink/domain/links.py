"""LinkRecord and LinkTable: the persisted directory-to-remote mapping.

On disk the table is ``{"linkedUsers": {"<member id>": "<player name>"}}``.
Keys are unique; the reverse direction is not (two members may claim the
same player name, see :meth:`LinkTable.holders_of`).
"""

from __future__ import annotations

from collections.abc import Iterator
from typing import Any

from pydantic import BaseModel, ConfigDict, Field


class LinkRecord(BaseModel):
    """One member paired with one player name."""

    model_config = {"frozen": True}

    directory_identity: str
    remote_identity: str


class LinkTable(BaseModel):
    """Mutable in-memory copy of the link table for one handler invocation.

    Extra top-level keys found in the file are kept and written back.
    """

    model_config = ConfigDict(populate_by_name=True, extra="allow")

    linked_users: dict[str, str] = Field(default_factory=dict, alias="linkedUsers")

    def get(self, directory_identity: str) -> LinkRecord | None:
        name = self.linked_users.get(directory_identity)
        if name is None:
            return None
        return LinkRecord(directory_identity=directory_identity, remote_identity=name)

    def put(self, record: LinkRecord) -> None:
        self.linked_users[record.directory_identity] = record.remote_identity

    def remove(self, directory_identity: str) -> LinkRecord | None:
        """Delete and return the record for *directory_identity*, if any."""
        name = self.linked_users.pop(directory_identity, None)
        if name is None:
            return None
        return LinkRecord(directory_identity=directory_identity, remote_identity=name)

    def holders_of(self, remote_identity: str) -> list[str]:
        """Directory identities currently linked to *remote_identity*."""
        return sorted(k for k, v in self.linked_users.items() if v == remote_identity)

    def records(self) -> Iterator[LinkRecord]:
        for key in sorted(self.linked_users):
            yield LinkRecord(directory_identity=key, remote_identity=self.linked_users[key])

    def __len__(self) -> int:
        return len(self.linked_users)

    def __contains__(self, directory_identity: object) -> bool:
        return directory_identity in self.linked_users

    def to_document(self) -> dict[str, Any]:
        """Serializable form using the on-disk field names."""
        return self.model_dump(by_alias=True)
