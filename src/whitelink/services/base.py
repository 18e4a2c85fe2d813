"""BaseService: abstract foundation for whitelink services.

Every service receives a :class:`Bridge` at construction time. The Bridge
provides the link store, the RCON executor, per-member locks, and the
plugin manager.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    from whitelink.infrastructure.bridge import Bridge

logger = logging.getLogger(__name__)


class BaseService:
    """Abstract base for all service-layer classes."""

    def __init__(self, bridge: Bridge) -> None:
        self._bridge = bridge

    def _dispatch_event(
        self,
        hook_name: str,
        payload: dict[str, Any],
        warnings: list[str],
    ) -> None:
        """Dispatch a lifecycle event. No-op if plugins are not initialized.

        INVARIANT: Plugin failures are warnings, never errors.
        """
        pm = self._bridge.plugin_manager
        if pm is None:
            return
        try:
            pm.dispatch(hook_name, payload)
        except Exception:
            logger.warning("Event dispatch failed for %s", hook_name, exc_info=True)
            warnings.append(f"Event dispatch failed for {hook_name}")
