import base64
import logging
from contextlib import asynccontextmanager
from pathlib import Path
from typing import AsyncIterator, Optional

import httpx

from ..errors import GenerationError

logger = logging.getLogger(__name__)

DATA_URI_PREFIX = "data:image/png;base64,"


class CoverImageStore:
    """Generated cover images written as ``<slug>.png`` and referenced by public path.

    Base64 replies are decoded; hosted URLs are downloaded. Records only ever
    carry the public path, never the image bytes.
    """

    def __init__(
        self,
        directory: Path | str,
        url_path: str = "/images/newsletters",
        client: Optional[httpx.AsyncClient] = None,
        timeout: float = 60,
    ):
        self.directory = Path(directory)
        self.url_path = url_path.rstrip("/")
        self._client = client
        self.timeout = timeout

    def path_for(self, slug: str) -> Path:
        return self.directory / f"{slug}.png"

    def url_for(self, slug: str) -> str:
        return f"{self.url_path}/{slug}.png"

    @asynccontextmanager
    async def _session(self) -> AsyncIterator[httpx.AsyncClient]:
        if self._client is not None:
            yield self._client
            return
        async with httpx.AsyncClient(timeout=self.timeout, follow_redirects=True) as client:
            yield client

    async def _download(self, url: str) -> bytes:
        async with self._session() as client:
            response = await client.get(url)
            response.raise_for_status()
            return response.content

    async def save(self, image_data: str, slug: str) -> str:
        """
        Persist a cover image for ``slug``.

        Args:
            image_data: ``data:image/png;base64,...`` URI or hosted image URL

        Returns:
            Public path of the saved image, e.g. /images/newsletters/<slug>.png

        Raises:
            GenerationError: If the image cannot be decoded, downloaded or written
        """
        path = self.path_for(slug)
        try:
            if image_data.startswith(DATA_URI_PREFIX):
                payload = base64.b64decode(image_data[len(DATA_URI_PREFIX):], validate=True)
            else:
                payload = await self._download(image_data)
            path.parent.mkdir(parents=True, exist_ok=True)
            path.write_bytes(payload)
        except (ValueError, httpx.HTTPError, OSError) as e:
            logger.error(f"Error saving cover image for {slug}: {e}")
            raise GenerationError(f"Cover image for {slug} could not be saved: {e}") from e

        logger.info(f"✅ Saved cover image {path.name} ({len(payload)} bytes)")
        return self.url_for(slug)
