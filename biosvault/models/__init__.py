"""biosvault data models: all Pydantic v2, all frozen (immutable)."""

from biosvault.models.descriptors import AssetDescriptor, parse_descriptors
from biosvault.models.events import (
    DID_IMPORT_BIOS_FILE,
    AssetImportedEvent,
    TrashEntry,
)
from biosvault.models.results import (
    ImportOutcome,
    RequirementReport,
    VerificationResult,
    VerificationStatus,
)

__all__ = [
    # descriptors
    "AssetDescriptor",
    "parse_descriptors",
    # results
    "VerificationStatus",
    "VerificationResult",
    "ImportOutcome",
    "RequirementReport",
    # events
    "DID_IMPORT_BIOS_FILE",
    "AssetImportedEvent",
    "TrashEntry",
]
