import logging
from typing import Optional

from pydantic import ConfigDict
from pydantic_settings import BaseSettings

from .exceptions import ConfigurationError


logger = logging.getLogger(__name__)


DEFAULT_BASE_URL = "https://api.openai.com/v1"


class Settings(BaseSettings):
    """Admin CLI settings with environment variable support."""

    model_config = ConfigDict(
        env_file=".env",
        case_sensitive=False,
        extra="ignore"  # Ignore extra environment variables
    )

    # Credentials: an admin key takes precedence over a regular API key
    openai_admin_key: Optional[str] = None
    openai_api_key: Optional[str] = None

    openai_base_url: str = DEFAULT_BASE_URL
    openai_org_id: Optional[str] = None

    # Default project for project-scoped commands
    openai_project_id: Optional[str] = None

    request_timeout_seconds: int = 30
    default_page_size: int = 100

    @property
    def admin_key(self) -> Optional[str]:
        """Key used to sign admin API requests."""
        return self.openai_admin_key or self.openai_api_key


def resolve_api_key(
    cli_value: Optional[str],
    settings: Settings
) -> str:
    """
    Get the admin API key from the command line or environment.

    Args:
        cli_value: Command-line argument value (overrides environment variables)
        settings: Loaded settings

    Returns:
        API key

    Raises:
        ConfigurationError: If no key is configured
    """
    api_key = cli_value or settings.admin_key
    if not api_key:
        raise ConfigurationError(
            "An admin API key is required.\n"
            "Set via environment variable or --api-key option:\n"
            "  export OPENAI_ADMIN_KEY=sk-admin-...\n"
            "  OR\n"
            "  --api-key sk-admin-..."
        )
    return api_key


def resolve_project_id(
    cli_value: Optional[str],
    settings: Settings
) -> str:
    """
    Get the project ID for project-scoped commands.

    Precedence is the explicit flag value, then OPENAI_PROJECT_ID.

    Args:
        cli_value: Value of --project-id, if given
        settings: Loaded settings

    Returns:
        Project ID

    Raises:
        ConfigurationError: If neither source provides a project ID
    """
    project_id = cli_value or settings.openai_project_id
    if not project_id:
        raise ConfigurationError("--project-id is required (or set OPENAI_PROJECT_ID)")

    logger.debug(f"Using project ID: {project_id}")
    return project_id
