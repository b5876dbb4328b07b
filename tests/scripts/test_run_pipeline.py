"""Test the pipeline command line entry point."""
from datetime import date
from unittest.mock import AsyncMock, MagicMock

import pytest

from infinite_runway.scripts import run_pipeline as run_pipeline_module
from infinite_runway.scripts.run_pipeline import parse_args, run_pipeline
from tests.fixtures.sources import make_record

AZURE_VARS = [
    "AZURE_OPENAI_ENDPOINT", "AZURE_OPENAI_API_KEY", "AZURE_OPENAI_DEPLOYMENT_NAME",
    "AZURE_IMAGE_ENDPOINT", "AZURE_IMAGE_API_KEY", "AZURE_IMAGE_DEPLOYMENT_NAME",
]


class TestRunPipelineScript:

    def test_defaults(self):
        args = parse_args([])
        assert args.type == "auto"
        assert args.date is None
        assert args.dry_run is False

    def test_explicit_arguments(self):
        args = parse_args(["--type", "innovation-report", "--date", "2026-10-21", "--dry-run"])
        assert args.type == "innovation-report"
        assert args.date == date(2026, 10, 21)
        assert args.dry_run is True

    def test_rejects_unknown_type(self):
        with pytest.raises(SystemExit):
            parse_args(["--type", "daily"])

    @pytest.mark.asyncio
    async def test_missing_azure_settings_exit_code(self, monkeypatch, tmp_path):
        for name in AZURE_VARS:
            monkeypatch.delenv(name, raising=False)
        monkeypatch.chdir(tmp_path)

        assert await run_pipeline(parse_args(["--dry-run"])) == 2

    @pytest.mark.asyncio
    async def test_configured_sponsor_passed_to_pipeline(self, monkeypatch, settings):
        configured = settings.model_copy(update={
            "azure_openai_endpoint": "https://example.openai.azure.com",
            "azure_openai_api_key": "key",
            "azure_image_endpoint": "https://example.openai.azure.com",
            "azure_image_api_key": "key",
        })
        graph = MagicMock()
        graph.run = AsyncMock(return_value=make_record("innovation-report-2026-10-21", date(2026, 10, 21)))
        monkeypatch.setattr(run_pipeline_module, "load_settings", lambda: configured)
        monkeypatch.setattr(run_pipeline_module, "GenerationClient", MagicMock())
        monkeypatch.setattr(run_pipeline_module, "NewsletterGraph", MagicMock(return_value=graph))

        exit_code = await run_pipeline(parse_args(["--type", "innovation-report", "--date", "2026-10-21"]))

        assert exit_code == 0
        kwargs = graph.run.await_args.kwargs
        assert kwargs["sponsor_info"] == configured.sponsor
        assert kwargs["on"] == date(2026, 10, 21)
