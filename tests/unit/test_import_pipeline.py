"""Tests for ImportPipeline: recognition, placement, events, idempotence."""

from __future__ import annotations

from pathlib import Path

import pytest

from biosvault.core.catalog import Catalog
from biosvault.core.hasher import AssetIOError, md5_hex
from biosvault.core.import_pipeline import ImportPipeline
from biosvault.core.managed_store import ManagedStore
from biosvault.core.trash import TrashBin
from biosvault.models.descriptors import AssetDescriptor
from biosvault.models.events import AssetImportedEvent
from biosvault.routing.dispatcher import EventDispatcher
from biosvault.routing.listeners import CallbackListener


def _raise_io_error(source, name):
    raise AssetIOError("disk full")


class TestImportIfKnown:
    def test_known_file_is_imported(
        self, pipeline: ImportPipeline, catalog: Catalog, store: ManagedStore,
        write_file, scph_bytes: bytes,
    ):
        src = write_file("SCPH-5502.BIN", scph_bytes)
        outcome = pipeline.import_if_known(src, catalog)

        assert outcome.matched is True
        assert outcome.placed is True
        assert outcome.descriptor is not None
        assert outcome.descriptor.name == "scph5502.bin"
        assert (store.root / "scph5502.bin").read_bytes() == scph_bytes

    def test_unknown_file_is_rejected(
        self, pipeline: ImportPipeline, catalog: Catalog, store: ManagedStore,
        write_file, events: list[AssetImportedEvent],
    ):
        src = write_file("game.iso", b"not a bios")
        outcome = pipeline.import_if_known(src, catalog)

        assert outcome.matched is False
        assert outcome.descriptor is None
        assert store.list_assets() == []
        assert events == []

    def test_unreadable_file_is_not_a_crash(
        self, pipeline: ImportPipeline, catalog: Catalog, tmp_dir: Path
    ):
        outcome = pipeline.import_if_known(tmp_dir / "missing.bin", catalog)
        assert outcome.matched is False
        assert outcome.error

    def test_exactly_one_event_with_payload(
        self, pipeline: ImportPipeline, catalog: Catalog, write_file,
        events: list[AssetImportedEvent], dc_boot_bytes: bytes,
    ):
        src = write_file("boot.bin", dc_boot_bytes)
        pipeline.import_if_known(src, catalog)

        assert len(events) == 1
        event = events[0]
        assert event.descriptor.name == "dc_boot.bin"
        assert event.source == src
        assert event.destination.name == "dc_boot.bin"
        payload = event.payload()
        assert payload["Name"] == "dc_boot.bin"
        assert payload["Description"] == "Dreamcast BIOS"
        assert payload["MD5"] == md5_hex(dc_boot_bytes)
        assert payload["Size"] == len(dc_boot_bytes)

    def test_idempotent_double_import(
        self, pipeline: ImportPipeline, catalog: Catalog, store: ManagedStore,
        write_file, events: list[AssetImportedEvent], scph_bytes: bytes,
    ):
        src = write_file("SCPH-5502.BIN", scph_bytes)
        first = pipeline.import_if_known(src, catalog)
        second = pipeline.import_if_known(src, catalog)

        assert first.matched and second.matched
        assert store.list_assets() == ["scph5502.bin"]
        assert (store.root / "scph5502.bin").read_bytes() == scph_bytes
        assert len(events) == 2

    def test_copy_failure_still_matched_without_event(
        self, pipeline: ImportPipeline, catalog: Catalog, store: ManagedStore,
        write_file, events: list[AssetImportedEvent], scph_bytes: bytes,
        monkeypatch: pytest.MonkeyPatch,
    ):
        src = write_file("SCPH-5502.BIN", scph_bytes)
        monkeypatch.setattr(store, "place", _raise_io_error)
        outcome = pipeline.import_if_known(src, catalog)

        assert outcome.matched is True
        assert outcome.placed is False
        assert "disk full" in outcome.error
        assert events == []

    def test_retry_after_copy_failure(
        self, pipeline: ImportPipeline, catalog: Catalog, store: ManagedStore,
        write_file, scph_bytes: bytes, monkeypatch: pytest.MonkeyPatch,
    ):
        src = write_file("SCPH-5502.BIN", scph_bytes)
        with monkeypatch.context() as m:
            m.setattr(store, "place", _raise_io_error)
            assert pipeline.import_if_known(src, catalog).placed is False

        retry = pipeline.import_if_known(src, catalog)
        assert retry.placed is True
        assert store.is_present("scph5502.bin")

    def test_failing_listener_does_not_fail_import(
        self, store: ManagedStore, catalog: Catalog, write_file, scph_bytes: bytes
    ):
        def _boom(event):
            raise RuntimeError("listener down")

        dispatcher = EventDispatcher()
        dispatcher.register_listener(CallbackListener(_boom, name="broken"))
        outcome = ImportPipeline(store, dispatcher).import_if_known(
            write_file("SCPH-5502.BIN", scph_bytes), catalog
        )
        assert outcome.placed is True

    def test_default_dispatcher(self, store: ManagedStore, catalog: Catalog, write_file, scph_bytes):
        pipeline = ImportPipeline(store)
        assert pipeline.dispatcher.registered_listeners == []
        assert pipeline.import_if_known(write_file("a.bin", scph_bytes), catalog).placed


class TestImportWithDigest:
    def test_uses_given_digest(
        self, pipeline: ImportPipeline, store: ManagedStore, write_file,
        monkeypatch: pytest.MonkeyPatch,
    ):
        def _no_hash(path):
            raise AssertionError("file should not be rehashed")

        monkeypatch.setattr("biosvault.core.import_pipeline.hash_file", _no_hash)
        catalog = Catalog([AssetDescriptor(name="bios.bin", expected_digest="abc123")])
        src = write_file("in.bin", b"whatever")

        outcome = pipeline.import_with_digest(src, "ABC123", catalog)
        assert outcome.matched is True
        assert store.is_present("bios.bin")

    def test_unknown_digest(self, pipeline: ImportPipeline, store: ManagedStore, write_file):
        catalog = Catalog([AssetDescriptor(name="bios.bin", expected_digest="abc123")])
        outcome = pipeline.import_with_digest(write_file("in.bin", b"x"), "zzz999", catalog)
        assert outcome.matched is False
        assert not store.root.exists()


class TestImportDirectory:
    def test_scans_recursively(
        self, pipeline: ImportPipeline, catalog: Catalog, store: ManagedStore,
        write_file, tmp_dir: Path, scph_bytes: bytes, dc_boot_bytes: bytes,
    ):
        scan = tmp_dir / "downloads"
        write_file("SCPH5502.BIN", scph_bytes, scan)
        write_file("readme.txt", b"hello", scan)
        write_file("boot.bin", dc_boot_bytes, scan / "dreamcast")

        outcomes = pipeline.import_directory(scan, catalog)
        assert len(outcomes) == 3
        assert sum(o.matched for o in outcomes) == 2
        assert store.list_assets() == ["dc_boot.bin", "scph5502.bin"]

    def test_non_recursive(
        self, pipeline: ImportPipeline, catalog: Catalog, write_file, tmp_dir: Path,
        dc_boot_bytes: bytes,
    ):
        scan = tmp_dir / "downloads"
        write_file("boot.bin", dc_boot_bytes, scan / "dreamcast")
        assert pipeline.import_directory(scan, catalog, recursive=False) == []

    def test_skips_files_already_in_store(
        self, pipeline: ImportPipeline, catalog: Catalog, store: ManagedStore,
        write_file, tmp_dir: Path, events: list[AssetImportedEvent], scph_bytes: bytes,
    ):
        pipeline.import_if_known(write_file("SCPH5502.BIN", scph_bytes), catalog)
        events.clear()

        outcomes = pipeline.import_directory(tmp_dir, catalog)
        sources = [o.source for o in outcomes]
        assert store.root / "scph5502.bin" not in sources
        assert len(events) == 1

    def test_skips_trashed_files(
        self, catalog: Catalog, write_file, tmp_dir: Path,
        events: list[AssetImportedEvent], dispatcher: EventDispatcher, scph_bytes: bytes,
    ):
        vault = tmp_dir / ".biosvault"
        store = ManagedStore(vault / "bios", trash=TrashBin(vault / "trash"))
        pipeline = ImportPipeline(store, dispatcher)

        src = write_file("SCPH5502.BIN", scph_bytes)
        pipeline.import_if_known(src, catalog)
        src.unlink()
        assert store.remove("scph5502.bin") is True
        events.clear()

        outcomes = pipeline.import_directory(tmp_dir, catalog)
        assert outcomes == []
        assert store.is_present("scph5502.bin") is False
        assert events == []
        assert len(store.trash_bin.list_entries()) == 1
