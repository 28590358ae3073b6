"""Shared test fixtures for biosvault."""

from __future__ import annotations

from collections.abc import Callable
from pathlib import Path
from typing import Any

import pytest

from biosvault.core.catalog import Catalog
from biosvault.core.hasher import md5_hex
from biosvault.core.import_pipeline import ImportPipeline
from biosvault.core.managed_store import ManagedStore
from biosvault.core.requirements import RequirementChecker
from biosvault.core.trash import TrashBin
from biosvault.models.descriptors import AssetDescriptor
from biosvault.models.events import AssetImportedEvent
from biosvault.routing.dispatcher import EventDispatcher
from biosvault.routing.listeners import CallbackListener

SCPH_BYTES = b"PlayStation BIOS (E) v2.2 12/04/95 E" * 64
DC_BOOT_BYTES = b"Dreamcast boot ROM" * 128
DC_FLASH_BYTES = b"Dreamcast flash ROM" * 32


@pytest.fixture
def tmp_dir(tmp_path: Path) -> Path:
    """Provide a temporary directory for test files."""
    return tmp_path


@pytest.fixture
def trash_bin(tmp_dir: Path) -> TrashBin:
    return TrashBin(tmp_dir / "trash")


@pytest.fixture
def store(tmp_dir: Path, trash_bin: TrashBin) -> ManagedStore:
    """Provide a ManagedStore whose root does not exist yet."""
    return ManagedStore(tmp_dir / "BIOS", trash=trash_bin)


@pytest.fixture
def events() -> list[AssetImportedEvent]:
    return []


@pytest.fixture
def dispatcher(events: list[AssetImportedEvent]) -> EventDispatcher:
    """A dispatcher that records every event into ``events``."""
    d = EventDispatcher()
    d.register_listener(CallbackListener(events.append, name="recorder"))
    return d


@pytest.fixture
def pipeline(store: ManagedStore, dispatcher: EventDispatcher) -> ImportPipeline:
    return ImportPipeline(store, dispatcher)


@pytest.fixture
def checker(store: ManagedStore) -> RequirementChecker:
    return RequirementChecker(store)


@pytest.fixture
def make_descriptor() -> Callable[..., AssetDescriptor]:
    """Factory fixture: build an AssetDescriptor for some content."""

    def _factory(
        name: str = "scph5502.bin",
        content: bytes = SCPH_BYTES,
        **overrides: Any,
    ) -> AssetDescriptor:
        defaults: dict[str, Any] = {
            "name": name,
            "description": f"BIOS {name}",
            "expected_digest": md5_hex(content),
            "optional": False,
            "size": len(content),
        }
        defaults.update(overrides)
        return AssetDescriptor(**defaults)

    return _factory


@pytest.fixture
def write_file(tmp_dir: Path) -> Callable[..., Path]:
    """Factory fixture: write bytes to a file under ``tmp_dir/incoming``."""

    def _factory(name: str, content: bytes, directory: Path | None = None) -> Path:
        target_dir = directory or tmp_dir / "incoming"
        target_dir.mkdir(parents=True, exist_ok=True)
        path = target_dir / name
        path.write_bytes(content)
        return path

    return _factory


@pytest.fixture
def dreamcast_descriptors(
    make_descriptor: Callable[..., AssetDescriptor],
) -> list[AssetDescriptor]:
    """A core's requirement list: one mandatory file, one optional."""
    return [
        make_descriptor(
            "dc_flash.bin", DC_FLASH_BYTES, description="Dreamcast Flash", optional=True
        ),
        make_descriptor("dc_boot.bin", DC_BOOT_BYTES, description="Dreamcast BIOS"),
    ]


@pytest.fixture
def catalog(
    make_descriptor: Callable[..., AssetDescriptor],
    dreamcast_descriptors: list[AssetDescriptor],
) -> Catalog:
    return Catalog(
        [make_descriptor("scph5502.bin", SCPH_BYTES, description="PlayStation BIOS")]
        + dreamcast_descriptors
    )


@pytest.fixture
def scph_bytes() -> bytes:
    return SCPH_BYTES


@pytest.fixture
def dc_boot_bytes() -> bytes:
    return DC_BOOT_BYTES
