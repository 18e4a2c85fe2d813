"""Tests for the plugin manager and lifecycle hooks fired by the engine."""

from __future__ import annotations

import asyncio

from tests.conftest import FakeDirectory
from whitelink.infrastructure.bridge import Bridge
from whitelink.plugins import hookimpl
from whitelink.plugins.manager import PluginManager
from whitelink.services.reconcile import ReconcileService


class AuditPlugin:
    def __init__(self) -> None:
        self.events: list[tuple[str, ...]] = []

    @hookimpl
    def post_link(self, member_id: str, name: str, previous: str | None) -> None:
        self.events.append(("link", member_id, name, str(previous)))

    @hookimpl
    def post_unlink(self, member_id: str, name: str, reason: str) -> None:
        self.events.append(("unlink", member_id, name, reason))


class TestPluginManager:
    def test_register_and_list(self) -> None:
        pm = PluginManager()
        pm.register_plugin(AuditPlugin(), name="audit")
        assert "audit" in pm.list_plugin_names()

    def test_discover_marks_loaded(self) -> None:
        pm = PluginManager()
        pm.discover_and_load()
        assert pm.is_loaded

    def test_unknown_hook_is_ignored(self) -> None:
        PluginManager().dispatch("no_such_hook", {})

    def test_unregister(self) -> None:
        pm = PluginManager()
        plugin = AuditPlugin()
        pm.register_plugin(plugin, name="audit")
        pm.unregister(plugin)
        assert "audit" not in pm.list_plugin_names()


class TestLifecycleHooks:
    def test_link_and_unlink_fire_hooks(self, bridge: Bridge) -> None:
        audit = AuditPlugin()
        bridge.init_plugins(discover=False).register_plugin(audit)
        svc = ReconcileService(bridge)

        async def scenario() -> None:
            await svc.link("1", "Notch", FakeDirectory())
            await svc.link("1", "Steve", FakeDirectory())
            await svc.unlink("1", FakeDirectory())

        asyncio.run(scenario())
        assert audit.events == [
            ("link", "1", "Notch", "None"),
            ("link", "1", "Steve", "Notch"),
            ("unlink", "1", "Steve", "unlink"),
        ]

    def test_events_report_reason(self, role_bridge: Bridge) -> None:
        audit = AuditPlugin()
        role_bridge.init_plugins(discover=False).register_plugin(audit)
        svc = ReconcileService(role_bridge)

        async def scenario() -> None:
            await svc.link("1", "Notch", FakeDirectory())
            await svc.link("2", "Steve", FakeDirectory())
            await svc.member_removed("1")
            await svc.role_changed("2", had_role=True, has_role=False)

        asyncio.run(scenario())
        assert audit.events[-2:] == [
            ("unlink", "1", "Notch", "member_removed"),
            ("unlink", "2", "Steve", "role_revoked"),
        ]
