import os
import logging
from typing import Optional
from pathlib import Path
from dotenv import load_dotenv

logger = logging.getLogger(__name__)

current_file_path = Path(__file__).resolve()
root_dir = current_file_path.parent.parent
env_path = root_dir / ".env.dev"

if env_path.exists():
    load_dotenv(dotenv_path=env_path, override=True)
else:
    load_dotenv()

DEFAULT_API_BASE_URL = "https://api.line.me"


class LineConfig:
    def __init__(
        self,
        access_token: Optional[str] = None,
        api_base_url: Optional[str] = None,
        timeout: Optional[float] = None,
    ) -> None:
        self.ACCESS_TOKEN = access_token or os.getenv("LINE_CHANNEL_ACCESS_TOKEN")
        self.API_BASE_URL = (api_base_url or os.getenv("LINE_API_BASE_URL") or DEFAULT_API_BASE_URL).rstrip("/")
        self.TIMEOUT = timeout or float(os.getenv("LINE_REQUEST_TIMEOUT", "15"))

        if not self.ACCESS_TOKEN:
            logger.warning("LINE_CHANNEL_ACCESS_TOKEN is not set; every push will fail")
