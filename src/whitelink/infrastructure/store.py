"""LinkStore: the durable link table file.

INVARIANT: load fresh, mutate in memory, save in full. No handler keeps a
table across invocations and no field is written partially.

Failure policy:
- Missing file: an empty table is written once and returned.
- Unreadable or malformed file: logged, an empty in-memory table is
  returned, and the damaged file is left untouched for an operator.
- Failed write: logged, the previous file survives (temp file +
  ``os.replace``), ``save`` returns False and :attr:`degraded` is raised
  until a later save succeeds.
"""

from __future__ import annotations

import json
import logging
import os
import tempfile
from pathlib import Path

from pydantic import ValidationError

from whitelink.domain.links import LinkTable

logger = logging.getLogger(__name__)


class LinkStore:
    """JSON-file persistence for :class:`LinkTable`."""

    def __init__(self, path: Path) -> None:
        self.path = path
        self._degraded = False

    @property
    def degraded(self) -> bool:
        """True while the most recent save failed."""
        return self._degraded

    def load(self) -> LinkTable:
        if not self.path.exists():
            table = LinkTable()
            self.save(table)
            return table

        try:
            raw = self.path.read_text(encoding="utf-8")
            data = json.loads(raw)
            return LinkTable.model_validate(data)
        except (OSError, UnicodeDecodeError, json.JSONDecodeError, ValidationError):
            logger.error("Failed to load link table from %s", self.path, exc_info=True)
            return LinkTable()

    def save(self, table: LinkTable) -> bool:
        """Overwrite the file with *table*. Returns False if the write failed."""
        payload = json.dumps(table.to_document(), indent=2, ensure_ascii=False)
        tmp_name: str | None = None
        try:
            self.path.parent.mkdir(parents=True, exist_ok=True)
            fd, tmp_name = tempfile.mkstemp(
                prefix=f".{self.path.name}.", suffix=".tmp", dir=self.path.parent
            )
            with os.fdopen(fd, "w", encoding="utf-8") as fh:
                fh.write(payload)
                fh.write("\n")
            os.replace(tmp_name, self.path)
            tmp_name = None
        except OSError:
            logger.error("Failed to save link table to %s", self.path, exc_info=True)
            self._degraded = True
            return False
        finally:
            if tmp_name is not None:
                Path(tmp_name).unlink(missing_ok=True)
        self._degraded = False
        return True
