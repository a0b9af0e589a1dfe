"""Configuration settings for the async WebDriver client."""

import logging
from pathlib import Path
from typing import Optional
from pydantic_settings import BaseSettings

logger = logging.getLogger(__name__)

LOG_FORMAT = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"


class Settings(BaseSettings):
    """Client configuration from environment variables."""

    # Remote end
    remote_url: str = "http://localhost:4444"
    default_browser: str = "chrome"
    headless: bool = True

    # Authentication (optional)
    auth_token: Optional[str] = None  # Direct bearer token via env var
    auth_token_file: Optional[str] = None  # Path to file containing the token (for Docker secrets)

    # HTTP
    request_timeout_seconds: float = 120.0
    keep_alive: bool = True

    # Session timeouts applied after creation
    page_load_timeout_seconds: float = 30
    script_timeout_seconds: float = 30
    implicit_wait_seconds: float = 0

    # Logging
    log_level: str = "INFO"

    model_config = {"env_prefix": "ASYNC_WEBDRIVER_"}

    def get_auth_token(self) -> str | None:
        """
        Resolve the bearer token sent in the ``Authorization`` header.

        A readable, non-empty ``auth_token_file`` wins over ``auth_token``;
        an unreadable or empty file logs a warning and falls back to
        ``auth_token``.

        Returns:
            Token string, or None when the remote end needs no auth
        """
        if not self.auth_token_file:
            return self.auth_token

        try:
            token = Path(self.auth_token_file).read_text().strip()
        except FileNotFoundError:
            logger.warning(f"Auth token file not found: {self.auth_token_file}")
        except OSError as e:
            logger.warning(f"Cannot read auth token file {self.auth_token_file}: {e}")
        else:
            if token:
                logger.debug(f"Using bearer token from {self.auth_token_file}")
                return token
            logger.warning(f"Auth token file is empty: {self.auth_token_file}")

        return self.auth_token


def configure_logging(level: Optional[str] = None) -> None:
    """
    Configure root logging for applications using the client.

    The library never calls this itself; it only logs through module loggers.

    Args:
        level: Level name; defaults to ``settings.log_level``
    """
    level_name = (level or settings.log_level).upper()
    logging.basicConfig(
        level=getattr(logging, level_name, logging.INFO),
        format=LOG_FORMAT,
    )


# Global settings instance
settings = Settings()
