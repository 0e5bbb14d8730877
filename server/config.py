import os
import logging
from pathlib import Path
from typing import Optional
from dotenv import load_dotenv

logger = logging.getLogger(__name__)

# Load from .env.dev for local development
current_file_path = Path(__file__).resolve()
root_dir = current_file_path.parent.parent
env_path = root_dir / ".env.dev"

if env_path.exists():
    load_dotenv(dotenv_path=env_path, override=True)
    logger.info(f"Loaded env from: {env_path}")
else:
    load_dotenv()


class ConfigError(RuntimeError):
    """Raised when a setting the server cannot run without is absent."""


class ServerConfig:
    def __init__(
        self,
        database_url: Optional[str] = None,
        cron_secret: Optional[str] = None,
        port: Optional[int] = None,
    ) -> None:
        self.DATABASE_URL = database_url or os.getenv("DATABASE_URL")
        # An explicit empty string disables the cron bearer check
        self.CRON_SECRET = cron_secret if cron_secret is not None else os.getenv("CRON_SECRET", "")
        self.PORT = port or int(os.getenv("PORT", "8081"))

    def require_database_url(self) -> str:
        if not self.DATABASE_URL:
            raise ConfigError("DATABASE_URL environment variable must be set")
        return self.DATABASE_URL
