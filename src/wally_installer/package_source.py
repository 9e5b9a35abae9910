"""Package sources: where archives come from.

The installer does not know HOW to talk to a registry. Applications provide
PackageSourceProvider implementations keyed by registry name (the name the
resolver records in each package's metadata).

Example implementations:
- An HTTP registry client
- LocalRegistrySource: zip files on disk, for offline installs and tests
"""

import logging
from collections.abc import Iterator
from collections.abc import Mapping
from pathlib import Path
from typing import Protocol
from typing import runtime_checkable

from .exceptions import ConfigurationError
from .exceptions import FetchError
from .package_contents import PackageContents
from .package_id import PackageId

logger = logging.getLogger(__name__)


@runtime_checkable
class PackageSourceProvider(Protocol):
    """Protocol for fetching package archives from one registry.

    Called from worker threads, so implementations must tolerate concurrent
    calls. Calls are blocking.
    """

    def download_package(self, package_id: PackageId) -> PackageContents:
        """Fetch the archive for a package.

        Args:
            package_id: Package to download

        Returns:
            The package's archive contents

        Raises:
            FetchError: If the package cannot be retrieved
        """
        ...


class PackageSourceMap(Mapping[str, PackageSourceProvider]):
    """Read-only mapping from registry name to source provider."""

    def __init__(self, sources: Mapping[str, PackageSourceProvider]):
        self._sources = dict(sources)

    def __getitem__(self, registry: str) -> PackageSourceProvider:
        return self._sources[registry]

    def __iter__(self) -> Iterator[str]:
        return iter(self._sources)

    def __len__(self) -> int:
        return len(self._sources)

    def get_source(self, registry: str) -> PackageSourceProvider:
        """Provider for a registry.

        Raises:
            ConfigurationError: If no provider is registered under that name
        """
        source = self._sources.get(registry)
        if source is None:
            raise ConfigurationError(
                f"Registry '{registry}' referenced by resolved metadata has no package source",
                context={"registry": registry, "known_registries": sorted(self._sources)},
            )
        return source

    def fetch(self, registry: str, package_id: PackageId) -> PackageContents:
        """Download a package from the named registry."""
        source = self.get_source(registry)
        logger.debug(f"Fetching {package_id} from {registry}")
        return source.download_package(package_id)


class LocalRegistrySource:
    """Registry backed by a directory tree of archives.

    Layout: ``{root}/{scope}/{name}/{version}.zip``
    """

    def __init__(self, root: Path):
        self.root = root

    def archive_path(self, package_id: PackageId) -> Path:
        return self.root / package_id.scope / package_id.name / f"{package_id.version}.zip"

    def download_package(self, package_id: PackageId) -> PackageContents:
        path = self.archive_path(package_id)
        try:
            data = path.read_bytes()
        except FileNotFoundError:
            raise FetchError(
                f"Package {package_id} not found in local registry {self.root}",
                context={"package_id": str(package_id), "path": str(path)},
            ) from None
        except OSError as e:
            raise FetchError(f"Failed to read {path}: {e}", context={"package_id": str(package_id)}) from e

        return PackageContents(data)
