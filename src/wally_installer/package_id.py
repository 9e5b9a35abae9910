"""Package identity: scope, name and version.

PackageId is the key for everything the installer does: map lookups in the
resolved graph, and the canonical on-disk directory name.
"""

import re
from functools import total_ordering

from pydantic import BaseModel
from pydantic import ConfigDict
from pydantic import Field
from pydantic import ValidationError

_PACKAGE_ID_RE = re.compile(r"^(?P<scope>[^/@]+)/(?P<name>[^/@]+)@(?P<version>[^/@]+)$")

# "_" separates scope from name in file_name(), so a scope may not contain one
SCOPE_PATTERN = r"^[^_/\\@\s]+$"
COMPONENT_PATTERN = r"^[^/\\@\s]+$"


class PackageIdError(ValueError):
    """Text is not a valid ``scope/name@version`` package id."""


@total_ordering
class PackageId(BaseModel):
    """Immutable, hashable identity of one package version."""

    model_config = ConfigDict(frozen=True)

    scope: str = Field(min_length=1, pattern=SCOPE_PATTERN)
    name: str = Field(min_length=1, pattern=COMPONENT_PATTERN)
    version: str = Field(min_length=1, pattern=COMPONENT_PATTERN)

    @classmethod
    def parse(cls, text: str) -> "PackageId":
        """Parse ``scope/name@version``.

        Raises:
            PackageIdError: If text is not in that form or a component has invalid characters
        """
        match = _PACKAGE_ID_RE.match(text.strip())
        if match is None:
            raise PackageIdError(f"Invalid package id '{text}', expected 'scope/name@version'")
        try:
            return cls(**match.groupdict())
        except ValidationError as e:
            raise PackageIdError(f"Invalid package id '{text}': {e}") from e

    def file_name(self) -> str:
        """Canonical directory name used for this package inside an index."""
        return f"{self.scope}_{self.name}@{self.version}"

    def _sort_key(self) -> tuple[str, str, str]:
        return (self.scope, self.name, self.version)

    def __lt__(self, other: object) -> bool:
        if not isinstance(other, PackageId):
            return NotImplemented
        return self._sort_key() < other._sort_key()

    def __str__(self) -> str:
        return f"{self.scope}/{self.name}@{self.version}"
