import pytest

from infinite_runway.config import Settings


@pytest.fixture
def settings(tmp_path):
    """Settings isolated from the developer's .env and filesystem."""
    return Settings(
        _env_file=None,
        newsletters_dir=tmp_path / "newsletters",
        log_dir=tmp_path / "logs",
        images_dir=tmp_path / "images",
        azure_openai_deployment_name="gpt-newsletter",
        azure_image_deployment_name="gpt-image",
        generation_enabled=False,
        cron_secret=None,
    )
