"""Plugin system: pluggy hooks fired after link table mutations."""

from __future__ import annotations

import pluggy

hookimpl = pluggy.HookimplMarker("whitelink")

__all__ = ["hookimpl"]
