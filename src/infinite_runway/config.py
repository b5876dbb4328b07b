"""
Centralized configuration for Infinite Runway.
All parameters in one place, overridable via environment variables.

Build the settings once with ``load_settings()`` at process start and pass
the instance to every component that needs it.
"""
from pydantic_settings import BaseSettings, SettingsConfigDict
from pydantic import Field
from typing import List, Literal, Optional
import yaml
from pathlib import Path

from .models.publication import SponsorInfo

CONFIG_PATH = Path(__file__).parent.parent.parent / "config.yaml"


# Load YAML config if exists
def _load_yaml_config(path: Path = CONFIG_PATH) -> dict:
    """Load config.yaml if it exists, else return empty dict."""
    if path.exists():
        with open(path, 'r') as f:
            return yaml.safe_load(f) or {}
    return {}

_yaml = _load_yaml_config()


class Settings(BaseSettings):
    """Application configuration with environment variable support."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore"
    )

    # === Site ===
    site_url: str = Field(
        default=_yaml.get('site', {}).get('url', "https://infiniterunway.com"),
        description="Public base URL used in feeds and sitemaps"
    )
    site_name: str = Field(default=_yaml.get('site', {}).get('name', "Infinite Runway"))
    site_description: str = Field(
        default=_yaml.get('site', {}).get(
            'description',
            "Thoughts on AI, technology, and more - The latest updates and insights from Infinite Runway"
        )
    )
    managing_editor: str = Field(default="contact@infiniterunway.com")
    author_name: str = Field(default=_yaml.get('site', {}).get('author_name', "Infinite Runway"))
    author_image_url: str = Field(default="/images/authors/infinite-runway.png")
    default_image_url: str = Field(
        default="/images/thumbnail.svg",
        description="Cover image used when image generation fails"
    )

    # === Fetching ===
    request_timeout: int = Field(default=_yaml.get('fetching', {}).get('request_timeout', 30))
    fetch_max_items: int = Field(
        default=_yaml.get('fetching', {}).get('max_items', 3),
        ge=1,
        description="Max items kept per source"
    )
    user_agent: str = Field(default="Mozilla/5.0 (compatible; NewsletterBot/1.0)")

    # === Generation (Azure OpenAI) ===
    azure_openai_endpoint: str | None = Field(default=None)
    azure_openai_api_key: str | None = Field(default=None)
    azure_openai_deployment_name: str | None = Field(default=None)
    azure_openai_api_version: str = Field(default="2025-01-01-preview")
    azure_image_endpoint: str | None = Field(default=None)
    azure_image_api_key: str | None = Field(default=None)
    azure_image_deployment_name: str | None = Field(default=None)
    azure_image_api_version: str = Field(default="2025-04-01-preview")
    image_size: Literal["1024x1024", "1024x1536", "1536x1024"] = Field(default="1024x1024")
    llm_temperature: float = Field(
        default=_yaml.get('generation', {}).get('temperature', 0.7),
        ge=0.0,
        le=2.0,
    )
    llm_max_tokens: int = Field(default=_yaml.get('generation', {}).get('max_tokens', 4000))
    max_prompt_items: int = Field(
        default=_yaml.get('generation', {}).get('max_prompt_items', 20),
        description="Top-scored items included in the generation prompt"
    )

    # === Storage ===
    newsletters_dir: Path = Field(
        default=Path(_yaml.get('storage', {}).get('newsletters_dir', "data/generated-newsletters"))
    )
    images_dir: Path = Field(
        default=Path(_yaml.get('storage', {}).get('images_dir', "data/images/newsletters")),
        description="Where generated cover images are written"
    )
    images_url_path: str = Field(
        default=_yaml.get('storage', {}).get('images_url_path', "/images/newsletters"),
        description="Public path the cover images are served under"
    )

    # === Sponsor ===
    sponsor: Optional[SponsorInfo] = Field(
        default=SponsorInfo(**_yaml['sponsor']) if _yaml.get('sponsor') else None,
        description="Main sponsor attached to every generated issue"
    )

    # === Web ===
    generation_enabled: bool = Field(
        default=False,
        description="Let the cron route run the real pipeline instead of acknowledging"
    )
    cron_secret: str | None = Field(default=None)
    posts_per_page: int = Field(default=9)

    # === Logging ===
    log_level: str = Field(default=_yaml.get('logging', {}).get('level', "INFO"))
    log_dir: Path = Field(default=Path(_yaml.get('logging', {}).get('dir', "logs")))
    main_pages: List[str] = Field(
        default=["/", "/posts", "/essays", "/about", "/advertise", "/contact"]
    )

    def missing_generation_settings(self) -> List[str]:
        """Names of the Azure settings that generation needs but are unset."""
        required = [
            "azure_openai_endpoint",
            "azure_openai_api_key",
            "azure_openai_deployment_name",
            "azure_image_endpoint",
            "azure_image_api_key",
            "azure_image_deployment_name",
        ]
        return [name for name in required if not getattr(self, name)]


def load_settings(**overrides) -> Settings:
    """Build the process-wide settings object."""
    return Settings(**overrides)
