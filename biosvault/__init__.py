"""biosvault: content-verified management of emulator BIOS files.

Imports files whose MD5 matches a known asset into a single managed
directory, verifies stored copies (purging corrupt ones to a recoverable
trash), and reports which mandatory assets a core is still missing.
"""

__version__ = "0.1.0"
__description__ = "Content-verified BIOS file store for emulation cores"

from biosvault.core.catalog import Catalog
from biosvault.core.import_pipeline import ImportPipeline
from biosvault.core.managed_store import ManagedStore
from biosvault.core.requirements import RequirementChecker
from biosvault.models.descriptors import AssetDescriptor

__all__ = [
    "AssetDescriptor",
    "Catalog",
    "ImportPipeline",
    "ManagedStore",
    "RequirementChecker",
    "__version__",
]
