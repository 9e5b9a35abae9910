"""Resolved dependency graph as consumed by the installer.

The resolver lives upstream; this module only models its output. A Resolve
is frozen and handed by reference to every worker unit of an install run.
"""

from pydantic import BaseModel
from pydantic import ConfigDict
from pydantic import Field

from .exceptions import ConfigurationError
from .package_id import PackageId


class ResolvedMetadata(BaseModel):
    """Per-package metadata recorded by the resolver."""

    model_config = ConfigDict(frozen=True)

    source_registry: str


class Resolve(BaseModel):
    """
    Result of dependency resolution (read-only for the installer).

    Fields:
    - activated: every package that must be present, root included exactly once
    - shared_dependencies: owner -> {alias: dependency}, shared-realm edges only
    - metadata: owner -> which registry the package is fetched from
    """

    model_config = ConfigDict(frozen=True)

    activated: frozenset[PackageId] = Field(default_factory=frozenset)
    shared_dependencies: dict[PackageId, dict[str, PackageId]] = Field(default_factory=dict)
    metadata: dict[PackageId, ResolvedMetadata] = Field(default_factory=dict)

    def dependencies_of(self, package_id: PackageId) -> dict[str, PackageId]:
        """Shared-realm dependencies of a package, keyed by alias."""
        return self.shared_dependencies.get(package_id, {})

    def source_registry_of(self, package_id: PackageId) -> str:
        """Registry a package should be fetched from.

        Raises:
            ConfigurationError: If the resolver recorded no metadata for the package
        """
        metadata = self.metadata.get(package_id)
        if metadata is None:
            raise ConfigurationError(
                f"No resolved metadata for {package_id}",
                context={"package_id": str(package_id)},
            )
        return metadata.source_registry
