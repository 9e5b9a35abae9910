"""Deployment realms: independent installation partitions."""

from enum import Enum


class Realm(str, Enum):
    """Realm a package tree is installed for."""

    SHARED = "shared"
    SERVER = "server"
    DEV = "dev"

    @classmethod
    def parse(cls, text: str) -> "Realm":
        """Parse a realm name as written in manifests (case-insensitive)."""
        try:
            return cls(text.strip().lower())
        except ValueError:
            choices = ", ".join(realm.value for realm in cls)
            raise ValueError(f"Unknown realm '{text}', expected one of: {choices}") from None
