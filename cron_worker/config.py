import os
from pathlib import Path
from typing import Optional
from dotenv import load_dotenv

current_file_path = Path(__file__).resolve()
root_dir = current_file_path.parent.parent
env_path = root_dir / ".env.dev"

if env_path.exists():
    load_dotenv(dotenv_path=env_path, override=True)
else:
    load_dotenv()

DEFAULT_TARGET_URL = "http://localhost:8081/api/cron/check"


class CronWorkerConfig:
    def __init__(
        self,
        target_url: Optional[str] = None,
        cron_secret: Optional[str] = None,
        interval_minutes: Optional[int] = None,
        timezone: Optional[str] = None,
    ) -> None:
        self.TARGET_URL = target_url or os.getenv("CRON_TARGET_URL", DEFAULT_TARGET_URL)
        self.CRON_SECRET = cron_secret if cron_secret is not None else os.getenv("CRON_SECRET", "")
        self.INTERVAL_MINUTES = interval_minutes or int(os.getenv("SWEEP_INTERVAL_MINUTES", "60"))
        self.TIMEZONE = timezone or os.getenv("SCHEDULER_TIMEZONE", "Asia/Tokyo")
