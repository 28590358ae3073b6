"""Transient result models for verification, import, and requirement checks.

None of these are persisted.  The public API collapses them to booleans;
the typed forms exist so callers and tests can tell *why* something
failed.
"""

from __future__ import annotations

from enum import Enum
from pathlib import Path

from pydantic import BaseModel, ConfigDict

from biosvault.models.descriptors import AssetDescriptor


class VerificationStatus(str, Enum):
    """Why a stored asset is (or is not) available."""

    VALID = "valid"
    NOT_FOUND = "not_found"
    IO_FAILURE = "io_failure"
    INTEGRITY_MISMATCH = "integrity_mismatch"


class VerificationResult(BaseModel):
    """Outcome of verifying one descriptor against the managed store."""

    model_config = ConfigDict(frozen=True)

    descriptor: AssetDescriptor
    status: VerificationStatus
    actual_digest: str = ""
    purged: bool = False

    @property
    def ok(self) -> bool:
        return self.status is VerificationStatus.VALID


class ImportOutcome(BaseModel):
    """Result of a single import attempt.

    ``matched`` is the public contract.  ``placed`` is False when the file
    was recognized but could not be copied, a recoverable state that a
    retry of the same file resolves.
    """

    model_config = ConfigDict(frozen=True)

    matched: bool
    descriptor: AssetDescriptor | None = None
    placed: bool = False
    source: Path | None = None
    error: str = ""


class RequirementReport(BaseModel):
    """Aggregated availability of a core's required assets.

    ``missing`` is ordered by ascending case-insensitive name.
    """

    model_config = ConfigDict(frozen=True)

    satisfied: bool
    missing: tuple[AssetDescriptor, ...] = ()

    @property
    def missing_names(self) -> list[str]:
        return [d.name for d in self.missing]

    @property
    def missing_descriptions(self) -> list[str]:
        return [d.description for d in self.missing]

    def format_missing(self) -> str:
        """Render the missing list as an alert body.

        Each entry is the description followed by the quoted, tab-indented
        filename and a blank line.
        """
        return "".join(f'{d.description}\n\t"{d.name}"\n\n' for d in self.missing)
