"""Secret loading for production deployment."""
from pathlib import Path
from typing import Optional

SECRETS_DIR = Path("/run/secrets")


def get_secret(secret_name: str, configured: Optional[str] = None, secrets_dir: Path = SECRETS_DIR) -> str:
    """
    Resolve a secret from a Podman/Docker mount or the configured value.

    Priority:
    1. {secrets_dir}/{secret_name} (container secret mount)
    2. The value already present in Settings (env var / .env)

    Raises:
        ValueError: If the secret is found in neither location
    """
    secret_path = secrets_dir / secret_name
    if secret_path.exists():
        try:
            return secret_path.read_text().strip()
        except IOError as e:
            raise ValueError(f"Secret file exists but cannot be read: {secret_path}") from e

    if configured:
        return configured

    raise ValueError(
        f"Secret '{secret_name}' not found. "
        f"Expected at {secret_path} or in settings"
    )
