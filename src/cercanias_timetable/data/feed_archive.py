"""Access to GTFS feed members stored in a ZIP file or an extracted directory."""

import logging
import zipfile
from pathlib import Path

from cercanias_timetable.errors import InvalidFeedError

logger = logging.getLogger(__name__)


class FeedArchive:
    """Read-only view over the text members of a GTFS feed.

    Usage:
        with FeedArchive(gtfs_path) as archive:
            trips_text = archive.read_text("trips.txt")
    """

    def __init__(self, path: Path):
        """Initialize the archive.

        Args:
            path: Path to a GTFS ZIP file or a directory of .txt members.
        """
        self.path = Path(path)
        self._zip: zipfile.ZipFile | None = None
        self._opened = False

    def __enter__(self) -> "FeedArchive":
        self.open()
        return self

    def __exit__(self, exc_type, exc_val, exc_tb) -> None:
        self.close()

    def open(self) -> None:
        """Open the underlying ZIP file (no-op for directories).

        Raises:
            FileNotFoundError: If the path doesn't exist.
            InvalidFeedError: If a file path is not a valid ZIP archive.
        """
        if not self.path.exists():
            raise FileNotFoundError(f"GTFS path not found: {self.path}")
        if self.path.is_file():
            try:
                self._zip = zipfile.ZipFile(self.path, "r")
            except zipfile.BadZipFile as e:
                raise InvalidFeedError(str(self.path), str(e)) from e
        self._opened = True
        logger.debug(f"Opened GTFS feed {self.path}")

    def close(self) -> None:
        if self._zip is not None:
            self._zip.close()
            self._zip = None
        self._opened = False

    def has_member(self, name: str) -> bool:
        """Return True if the feed contains the named member."""
        self._ensure_open()
        if self._zip is not None:
            return name in self._zip.namelist()
        return (self.path / name).is_file()

    def read_text(self, name: str) -> str | None:
        """Return the full text of a member, or None if it is absent.

        Raises:
            InvalidFeedError: If the member is corrupt or not UTF-8 text.
        """
        if not self.has_member(name):
            logger.debug(f"{name} not found in {self.path.name}")
            return None
        try:
            if self._zip is not None:
                return self._zip.read(name).decode("utf-8-sig")
            return (self.path / name).read_text(encoding="utf-8-sig")
        except UnicodeDecodeError as e:
            raise InvalidFeedError(f"{self.path}/{name}", f"not UTF-8: {e.reason}") from e
        except zipfile.BadZipFile as e:
            raise InvalidFeedError(f"{self.path}/{name}", str(e)) from e

    def _ensure_open(self) -> None:
        if not self._opened:
            raise RuntimeError("Archive not opened - use 'with FeedArchive(...)'")
