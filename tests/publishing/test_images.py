"""Test the cover image store."""
import httpx
import pytest

from infinite_runway.errors import GenerationError
from infinite_runway.publishing.images import CoverImageStore


def image_client(status=200, content=b"\x89PNG hosted"):
    transport = httpx.MockTransport(lambda request: httpx.Response(status, content=content))
    return httpx.AsyncClient(transport=transport)


class TestCoverImageStore:

    @pytest.mark.asyncio
    async def test_base64_image_written_as_png(self, tmp_path):
        store = CoverImageStore(tmp_path / "covers", "/images/newsletters/")

        url = await store.save("data:image/png;base64,aGVsbG8=", "weekly-digest-2026-10-19")

        assert url == "/images/newsletters/weekly-digest-2026-10-19.png"
        assert (tmp_path / "covers" / "weekly-digest-2026-10-19.png").read_bytes() == b"hello"

    @pytest.mark.asyncio
    async def test_hosted_image_downloaded(self, tmp_path):
        async with image_client() as client:
            store = CoverImageStore(tmp_path, client=client)
            url = await store.save("https://cdn.example/cover.png", "innovation-report-2026-10-21")

        assert url == "/images/newsletters/innovation-report-2026-10-21.png"
        assert store.path_for("innovation-report-2026-10-21").read_bytes() == b"\x89PNG hosted"

    @pytest.mark.asyncio
    async def test_failed_download_raises(self, tmp_path):
        async with image_client(status=403) as client:
            store = CoverImageStore(tmp_path, client=client)
            with pytest.raises(GenerationError):
                await store.save("https://cdn.example/cover.png", "innovation-report-2026-10-21")

        assert not store.path_for("innovation-report-2026-10-21").exists()

    @pytest.mark.asyncio
    async def test_corrupt_base64_raises(self, tmp_path):
        store = CoverImageStore(tmp_path)
        with pytest.raises(GenerationError):
            await store.save("data:image/png;base64,not*base64!", "weekly-digest-2026-10-19")
