"""Installation-specific exceptions.

Every failure surfaced by ``install`` or ``clean`` is an InstallationError
(or subclass). Nothing here is retried; a failed run needs a fresh install.
"""


class InstallationError(Exception):
    """Base exception for package installation."""

    def __init__(self, message: str, context: dict | None = None):
        """Record what failed and where.

        Args:
            message: What went wrong, naming the package id or registry involved
            context: Structured details for callers, keyed e.g. "package_id",
                "registry" or "path"
        """
        super().__init__(message)
        self.message = message
        self.context = context or {}


class FetchError(InstallationError):
    """Package archive could not be retrieved from its registry."""


class ArchiveError(InstallationError):
    """Package archive is malformed or cannot be unpacked."""


class ConfigurationError(InstallationError):
    """Resolved graph and source map disagree (e.g. unknown registry)."""
