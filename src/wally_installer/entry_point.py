"""Locate a package's entry module from its archive listing."""

from collections.abc import Iterable
from enum import Enum

ROOT_INIT_FILES = frozenset({"init.lua", "init.luau"})
SRC_INIT_FILES = frozenset({"src/init.lua", "src/init.luau"})


class EntryPoint(Enum):
    """Where a package's init module lives, as a suffix of its index directory."""

    ROOT = ""
    SRC = "/src"

    @property
    def suffix(self) -> str:
        return self.value


def sniff_entry_point(file_names: Iterable[str]) -> EntryPoint | None:
    """
    Pick the entry point from an archive's file listing.

    A root-level init file wins wherever it appears in the listing; a
    src/init file is only used when no root-level one exists. Returns None
    when the package has neither, which is not an error.
    """
    found = None

    for file_name in file_names:
        if file_name in ROOT_INIT_FILES:
            return EntryPoint.ROOT
        if file_name in SRC_INIT_FILES:
            # keep scanning, a later root-level init still wins
            found = EntryPoint.SRC

    return found


def entry_point_suffix(entry_point: EntryPoint | None) -> str:
    """Suffix to append after the canonical directory name ("" when unknown)."""
    return entry_point.suffix if entry_point is not None else ""
