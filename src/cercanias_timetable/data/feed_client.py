import logging
from pathlib import Path

import httpx

from cercanias_timetable.data.config import TimetableConfig

logger = logging.getLogger(__name__)


class FeedClient:
    """Async HTTP client for downloading the static GTFS feed.

    Usage:
        async with FeedClient(config) as client:
            path = await client.download(Path("data/gtfs.zip"))
    """

    def __init__(self, config: TimetableConfig):
        """Initialize the client.

        Args:
            config: Configuration with the feed URL and timeout.
        """
        self._config = config
        self._client: httpx.AsyncClient | None = None

    async def __aenter__(self) -> "FeedClient":
        """Enter async context - create HTTP client."""
        self._client = httpx.AsyncClient(
            timeout=self._config.download_timeout_seconds, follow_redirects=True
        )
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb) -> None:
        """Exit async context - close HTTP client."""
        if self._client:
            await self._client.aclose()
            self._client = None

    async def download(self, destination: Path) -> Path:
        """Download the feed ZIP to ``destination``.

        The file is written next to the destination first and renamed into
        place, so an interrupted download never leaves a truncated feed.

        Returns:
            The destination path.

        Raises:
            RuntimeError: If client not initialized.
            httpx.HTTPError: If the HTTP request fails.
        """
        if not self._client:
            raise RuntimeError("Client not initialized - use 'async with'")

        destination = Path(destination)
        destination.parent.mkdir(parents=True, exist_ok=True)
        temp_path = destination.with_suffix(".tmp")

        logger.info(f"Downloading GTFS feed from {self._config.feed_url}")
        response = await self._client.get(self._config.feed_url)
        response.raise_for_status()

        try:
            temp_path.write_bytes(response.content)
            temp_path.replace(destination)
        except Exception:
            temp_path.unlink(missing_ok=True)
            raise

        logger.info(f"Saved {len(response.content):,} bytes to {destination}")
        return destination
