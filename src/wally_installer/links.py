"""Link file contents.

A link is a one-line Lua module that re-exports another module by path, so
requiring a dependency by its alias lands in the package's index directory.
Plain files instead of symlinks keep the layout portable.
"""

from .entry_point import EntryPoint
from .entry_point import entry_point_suffix
from .package_id import PackageId


def link_root_same_index(package_id: PackageId, entry_point: EntryPoint | None) -> str:
    """Link written at ``{tree_root}/{alias}.lua`` for a root dependency."""
    return f'return require("_index/{package_id.file_name()}{entry_point_suffix(entry_point)}")\n'


def link_sibling_same_index(package_id: PackageId, entry_point: EntryPoint | None) -> str:
    """Link written at ``{index_root}/{owner}/packages/{alias}.lua``.

    Index directories are flat siblings, so the target is two levels up.
    """
    return f'return require("../../{package_id.file_name()}{entry_point_suffix(entry_point)}")\n'
