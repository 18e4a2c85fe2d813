"""Tests for LinkStore load/save failure policy."""

from __future__ import annotations

import json
import os
from pathlib import Path

import pytest

from whitelink.domain.links import LinkTable
from whitelink.infrastructure.store import LinkStore


class TestLoad:
    def test_missing_file_is_created_empty(self, tmp_path: Path) -> None:
        store = LinkStore(tmp_path / "whitelist.json")
        table = store.load()
        assert len(table) == 0
        assert json.loads(store.path.read_text(encoding="utf-8")) == {"linkedUsers": {}}

    def test_roundtrip_preserves_content(self, tmp_path: Path) -> None:
        store = LinkStore(tmp_path / "whitelist.json")
        store.save(LinkTable(linked_users={"1": "Notch"}))
        assert store.load().linked_users == {"1": "Notch"}

    @pytest.mark.parametrize(
        "content",
        ["{broken", '{"linkedUsers": []}', '{"linkedUsers": {"1": 5}}', "[]"],
    )
    def test_damaged_file_degrades_without_overwrite(self, tmp_path: Path, content: str) -> None:
        path = tmp_path / "whitelist.json"
        path.write_text(content, encoding="utf-8")
        table = LinkStore(path).load()
        assert len(table) == 0
        assert path.read_text(encoding="utf-8") == content

    def test_reads_file_written_by_older_bot(self, tmp_path: Path) -> None:
        path = tmp_path / "whitelist.json"
        path.write_text('{\n  "linkedUsers": {\n    "42": "jeb_"\n  }\n}', encoding="utf-8")
        assert LinkStore(path).load().linked_users == {"42": "jeb_"}


class TestSave:
    def test_human_readable_output(self, tmp_path: Path) -> None:
        store = LinkStore(tmp_path / "whitelist.json")
        store.save(LinkTable(linked_users={"1": "Notch"}))
        text = store.path.read_text(encoding="utf-8")
        assert text == '{\n  "linkedUsers": {\n    "1": "Notch"\n  }\n}\n'

    def test_creates_parent_directories(self, tmp_path: Path) -> None:
        store = LinkStore(tmp_path / "data" / "nested" / "whitelist.json")
        assert store.save(LinkTable())
        assert store.path.is_file()

    def test_failed_write_keeps_previous_file(
        self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        store = LinkStore(tmp_path / "whitelist.json")
        store.save(LinkTable(linked_users={"1": "Old"}))

        def boom(src: str, dst: str) -> None:
            raise OSError("disk full")

        monkeypatch.setattr(os, "replace", boom)
        assert store.save(LinkTable(linked_users={"1": "New"})) is False
        assert store.degraded is True
        monkeypatch.undo()

        assert store.load().linked_users == {"1": "Old"}
        assert [p.name for p in tmp_path.iterdir()] == ["whitelist.json"]

    def test_successful_save_clears_degraded(
        self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        store = LinkStore(tmp_path / "whitelist.json")
        monkeypatch.setattr(os, "replace", lambda src, dst: (_ for _ in ()).throw(OSError()))
        store.save(LinkTable())
        assert store.degraded
        monkeypatch.undo()
        assert store.save(LinkTable())
        assert not store.degraded
