"""Package installation: lay out a resolved graph on disk.

Applications inject policy:
- project path and worker budget (InstallationContext)
- where archives come from (PackageSourceMap)
- where progress goes (ProgressSink)

Layout per realm (relative to the project root):
- ``{tree_root}/{alias}.lua``: links for the root package's dependencies
- ``{tree_root}/_index/{scope}_{name}@{version}/``: unpacked package contents
- ``{index_dir}/packages/{alias}.lua``: links for that package's dependencies

Links may point at index directories whose contents have not landed yet;
the layout is only complete once ``install`` returns successfully.
"""

import asyncio
import logging
import shutil
from collections.abc import Mapping
from concurrent.futures import ThreadPoolExecutor
from pathlib import Path
from typing import NamedTuple

from pydantic import BaseModel
from pydantic import ConfigDict
from pydantic import Field

from .entry_point import EntryPoint
from .entry_point import sniff_entry_point
from .exceptions import InstallationError
from .links import link_root_same_index
from .links import link_sibling_same_index
from .package_contents import PackageContents
from .package_id import PackageId
from .package_source import PackageSourceMap
from .progress import LoggingProgress
from .progress import ProgressSink
from .realm import Realm
from .resolution import Resolve

logger = logging.getLogger(__name__)

DEFAULT_WORKER_COUNT = 50
INDEX_DIR_NAME = "_index"


class RealmPaths(NamedTuple):
    """Directories owned by one realm."""

    tree_root: Path
    index_root: Path


class InstallationContext(BaseModel):
    """
    Install configuration for one project (immutable).

    Holds only paths and the worker budget, so it is safe to share with
    worker threads.
    """

    model_config = ConfigDict(frozen=True)

    shared_dir: Path
    shared_index_dir: Path
    server_dir: Path
    server_index_dir: Path
    dev_dir: Path
    dev_index_dir: Path
    worker_count: int = Field(default=DEFAULT_WORKER_COUNT, ge=1)

    @classmethod
    def for_project(cls, project_path: Path, worker_count: int = DEFAULT_WORKER_COUNT) -> "InstallationContext":
        """Build the context for the project rooted at project_path.

        Example:
            >>> context = InstallationContext.for_project(Path("my-game"))
            >>> context.paths_for(Realm.SERVER).index_root
            PosixPath('my-game/ServerPackages/_index')
        """
        shared_dir = project_path / "packages"
        server_dir = project_path / "ServerPackages"
        dev_dir = project_path / "DevPackages"

        return cls(
            shared_dir=shared_dir,
            shared_index_dir=shared_dir / INDEX_DIR_NAME,
            server_dir=server_dir,
            server_index_dir=server_dir / INDEX_DIR_NAME,
            dev_dir=dev_dir,
            dev_index_dir=dev_dir / INDEX_DIR_NAME,
            worker_count=worker_count,
        )

    def paths_for(self, realm: Realm) -> RealmPaths:
        """Tree root and index root of a realm."""
        if realm is Realm.SHARED:
            return RealmPaths(self.shared_dir, self.shared_index_dir)
        if realm is Realm.SERVER:
            return RealmPaths(self.server_dir, self.server_index_dir)
        return RealmPaths(self.dev_dir, self.dev_index_dir)

    def package_dir(self, realm: Realm, package_id: PackageId) -> Path:
        """Index directory holding a package's contents within a realm."""
        return self.paths_for(realm).index_root / package_id.file_name()

    def clean(self) -> None:
        """
        Delete every realm's package tree.

        A tree that does not exist is already clean.

        Raises:
            InstallationError: If a tree exists but could not be removed
        """
        for realm in Realm:
            tree_root = self.paths_for(realm).tree_root
            try:
                shutil.rmtree(tree_root)
                logger.debug(f"Removed {tree_root}")
            except FileNotFoundError:
                logger.debug(f"Nothing to clean at {tree_root}")
            except OSError as e:
                raise InstallationError(
                    f"Failed to remove {tree_root}: {e}",
                    context={"realm": realm.value, "path": str(tree_root)},
                ) from e

    async def install(
        self,
        sources: PackageSourceMap,
        root_package_id: PackageId,
        resolved: Resolve,
        progress: ProgressSink | None = None,
    ) -> int:
        """
        Install every package from a resolved graph into this project.

        Process, for each activated package:
        1. Root package: write root links for its dependencies (nothing is fetched)
        2. Other packages: write sibling links for their dependencies, then
           schedule a worker unit that downloads and unpacks the package
           into the shared index
        3. Wait for every unit; the first failure (in enumeration order) is raised

        Link writing is sequential with enumeration but runs in a thread, so
        the caller's event loop keeps running. Units run on a thread pool
        capped at ``worker_count``; they may finish in any order and are
        never cancelled.

        Args:
            sources: Providers keyed by registry name
            root_package_id: The project's own package (not downloaded)
            resolved: Resolved graph, shared read-only with every unit
            progress: Progress sink (defaults to LoggingProgress)

        Returns:
            Number of packages installed

        Raises:
            InstallationError: If any link write, download or unpack failed
        """
        progress = progress or LoggingProgress()
        packages = sorted(resolved.activated)
        total = sum(1 for package_id in packages if package_id != root_package_id)

        logger.info(f"Installing {total} packages")
        progress.start(total)

        try:
            loop = asyncio.get_running_loop()
            with ThreadPoolExecutor(max_workers=self.worker_count, thread_name_prefix="wally-install") as executor:
                units: list[asyncio.Future] = []
                try:
                    for package_id in packages:
                        logger.debug(f"Installing {package_id}...")
                        dependencies = resolved.dependencies_of(package_id)

                        # The root package is not downloaded, only linked to its dependencies
                        if package_id == root_package_id:
                            if dependencies:
                                await asyncio.to_thread(
                                    self.write_root_package_links, Realm.SHARED, dependencies, resolved, sources
                                )
                            continue

                        if dependencies:
                            await asyncio.to_thread(
                                self.write_package_links, package_id, Realm.SHARED, dependencies, resolved, sources
                            )

                        source_registry = resolved.source_registry_of(package_id)
                        units.append(
                            loop.run_in_executor(
                                executor,
                                self._install_package,
                                package_id,
                                source_registry,
                                sources,
                                progress,
                            )
                        )
                finally:
                    # Already scheduled units always run to completion
                    outcomes = await asyncio.gather(*units, return_exceptions=True)

            for outcome in outcomes:
                if isinstance(outcome, BaseException):
                    raise outcome

        except InstallationError:
            raise
        except Exception as e:
            raise InstallationError(f"Failed to install packages: {e}") from e

        progress.finish(len(units))
        return len(units)

    def _install_package(
        self,
        package_id: PackageId,
        source_registry: str,
        sources: PackageSourceMap,
        progress: ProgressSink,
    ) -> None:
        """Worker unit: download one package and unpack it into the shared index."""
        contents = sources.fetch(source_registry, package_id)
        logger.debug(f"Downloaded {package_id}")
        # Always the shared realm, whatever realm the graph attributes the package to
        self.write_contents(package_id, contents, Realm.SHARED)
        progress.package_installed(package_id)

    def _dependency_entry_point(
        self,
        dependency_id: PackageId,
        resolved: Resolve,
        sources: PackageSourceMap,
    ) -> EntryPoint | None:
        # Separate download from the one that materializes the dependency
        source_registry = resolved.source_registry_of(dependency_id)
        contents = sources.fetch(source_registry, dependency_id)
        return sniff_entry_point(contents.file_names())

    def write_root_package_links(
        self,
        root_realm: Realm,
        dependencies: Mapping[str, PackageId],
        resolved: Resolve,
        sources: PackageSourceMap,
    ) -> None:
        """Write ``{tree_root}/{alias}.lua`` for each root dependency."""
        logger.debug("Writing root package links")

        base_path = self.paths_for(root_realm).tree_root
        logger.debug(f"Creating directory {base_path}")
        base_path.mkdir(parents=True, exist_ok=True)

        for dep_name, dep_package_id in dependencies.items():
            path = base_path / f"{dep_name}.lua"
            entry_point = self._dependency_entry_point(dep_package_id, resolved, sources)
            contents = link_root_same_index(dep_package_id, entry_point)

            logger.debug(f"Writing {path}")
            path.write_text(contents, encoding="utf-8")

    def write_package_links(
        self,
        package_id: PackageId,
        package_realm: Realm,
        dependencies: Mapping[str, PackageId],
        resolved: Resolve,
        sources: PackageSourceMap,
    ) -> None:
        """Write ``{index_root}/{owner}/packages/{alias}.lua`` for each dependency of a package."""
        logger.debug(f"Writing package links for {package_id}")

        base_path = self.package_dir(package_realm, package_id) / "packages"
        logger.debug(f"Creating directory {base_path}")
        base_path.mkdir(parents=True, exist_ok=True)

        for dep_name, dep_package_id in dependencies.items():
            path = base_path / f"{dep_name}.lua"
            entry_point = self._dependency_entry_point(dep_package_id, resolved, sources)
            contents = link_sibling_same_index(dep_package_id, entry_point)

            logger.debug(f"Writing {path}")
            path.write_text(contents, encoding="utf-8")

    def write_contents(self, package_id: PackageId, contents: PackageContents, realm: Realm) -> None:
        """Unpack a package into its index directory, creating it if needed."""
        path = self.package_dir(realm, package_id)
        path.mkdir(parents=True, exist_ok=True)
        contents.unpack_into_path(path)
