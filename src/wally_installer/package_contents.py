"""Package archive payload (zip bytes) and how it becomes files on disk."""

import io
import logging
import zipfile
from pathlib import Path
from pathlib import PurePosixPath

from .exceptions import ArchiveError

logger = logging.getLogger(__name__)


class PackageContents:
    """Raw archive bytes for one package version."""

    def __init__(self, data: bytes):
        self.data = data

    def _open(self) -> zipfile.ZipFile:
        try:
            return zipfile.ZipFile(io.BytesIO(self.data))
        except zipfile.BadZipFile as e:
            raise ArchiveError(f"Package archive is not a valid zip file: {e}") from e

    def file_names(self) -> list[str]:
        """Entry names in archive order.

        Raises:
            ArchiveError: If the archive cannot be read
        """
        with self._open() as archive:
            return archive.namelist()

    def unpack_into_path(self, path: Path) -> None:
        """
        Extract every entry into path, overwriting existing files.

        All entry names are checked before anything is written, so an archive
        with an entry escaping path (absolute, or via "..") writes nothing.

        Args:
            path: Target directory (must already exist)

        Raises:
            ArchiveError: If the archive is unreadable or has unsafe entry names
        """
        with self._open() as archive:
            members = archive.infolist()
            for member in members:
                if not _is_safe_member(member.filename):
                    raise ArchiveError(
                        f"Archive entry escapes target directory: {member.filename}",
                        context={"entry": member.filename, "target_dir": str(path)},
                    )

            try:
                for member in members:
                    archive.extract(member, path)
            except (zipfile.BadZipFile, zipfile.LargeZipFile, EOFError) as e:
                raise ArchiveError(f"Failed to unpack archive into {path}: {e}") from e

        logger.debug(f"Unpacked {len(members)} entries into {path}")


def _is_safe_member(name: str) -> bool:
    member = PurePosixPath(name.replace("\\", "/"))
    return not member.is_absolute() and ".." not in member.parts
