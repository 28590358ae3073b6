"""Content hashing: the sole notion of asset identity.

BIOS registries publish MD5 reference digests, so MD5 is the fingerprint
used throughout.  Files are hashed in fixed-size chunks; memory use does
not grow with file size.
"""

from __future__ import annotations

import hashlib
from pathlib import Path

CHUNK_SIZE = 1024 * 1024


class AssetIOError(OSError):
    """Raised when an asset file cannot be read or copied."""


def md5_hex(data: bytes) -> str:
    """Return the lowercase MD5 hex digest of raw bytes."""
    return hashlib.md5(data, usedforsecurity=False).hexdigest()


def hash_file(path: Path | str) -> str:
    """Stream a file through MD5 and return the lowercase hex digest.

    Raises
    ------
    AssetIOError
        If the file is missing, is not a regular file, or a read fails
        part-way.  A partial digest is never returned.
    """
    path = Path(path)
    digest = hashlib.md5(usedforsecurity=False)
    try:
        with path.open("rb") as fh:
            for chunk in iter(lambda: fh.read(CHUNK_SIZE), b""):
                digest.update(chunk)
    except OSError as exc:
        raise AssetIOError(f"Could not hash {path}: {exc}") from exc
    return digest.hexdigest()


def digests_equal(a: str, b: str) -> bool:
    """Compare two hex digests case-insensitively."""
    return a.strip().lower() == b.strip().lower()
