"""wally-installer - Lay out resolved Luau packages on disk.

Installs a resolved dependency graph into per-realm package trees with
versioned index directories and require-redirect link files.

Library mechanism only: apps inject policy (project path, registries, progress).
"""

from .entry_point import EntryPoint
from .entry_point import entry_point_suffix
from .entry_point import sniff_entry_point
from .exceptions import ArchiveError
from .exceptions import ConfigurationError
from .exceptions import FetchError
from .exceptions import InstallationError
from .installation import DEFAULT_WORKER_COUNT
from .installation import InstallationContext
from .installation import RealmPaths
from .links import link_root_same_index
from .links import link_sibling_same_index
from .package_contents import PackageContents
from .package_id import PackageId
from .package_id import PackageIdError
from .package_source import LocalRegistrySource
from .package_source import PackageSourceMap
from .package_source import PackageSourceProvider
from .progress import LoggingProgress
from .progress import ProgressSink
from .realm import Realm
from .resolution import Resolve
from .resolution import ResolvedMetadata

__all__ = [
    # Identity
    "PackageId",
    "PackageIdError",
    "Realm",
    # Resolution input
    "Resolve",
    "ResolvedMetadata",
    # Installation
    "InstallationContext",
    "RealmPaths",
    "DEFAULT_WORKER_COUNT",
    # Sources
    "PackageSourceProvider",
    "PackageSourceMap",
    "LocalRegistrySource",
    "PackageContents",
    # Entry points and links
    "EntryPoint",
    "sniff_entry_point",
    "entry_point_suffix",
    "link_root_same_index",
    "link_sibling_same_index",
    # Progress
    "ProgressSink",
    "LoggingProgress",
    # Exceptions
    "InstallationError",
    "FetchError",
    "ArchiveError",
    "ConfigurationError",
]

__version__ = "0.1.0"
