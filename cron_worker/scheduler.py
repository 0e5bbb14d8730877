"""
Deadline Sweep Scheduler

Periodically asks the API to run its deadline sweep, for deployments that
have no external cron service calling /api/cron/check.
"""
import logging
from typing import Optional
import pytz
import requests
from apscheduler.schedulers.background import BackgroundScheduler

from .config import CronWorkerConfig

logger = logging.getLogger(__name__)

SWEEP_JOB_ID = "deadline_sweep_job"
REQUEST_TIMEOUT = 30


def trigger_sweep(config: Optional[CronWorkerConfig] = None, session=None) -> dict:
    """POST to the cron endpoint once and return its JSON summary ({} on failure)."""
    cfg = config or CronWorkerConfig()
    http = session or requests

    headers = {}
    if cfg.CRON_SECRET:
        headers["Authorization"] = f"Bearer {cfg.CRON_SECRET}"

    try:
        resp = http.post(cfg.TARGET_URL, headers=headers, timeout=REQUEST_TIMEOUT)
        resp.raise_for_status()
        summary = resp.json()
    except Exception as e:
        logger.error(f"Failed to trigger deadline sweep at {cfg.TARGET_URL}: {e}")
        return {}

    logger.info(f"📚 {summary.get('message', 'Sweep finished')}")
    return summary


def build_scheduler(config: Optional[CronWorkerConfig] = None) -> BackgroundScheduler:
    cfg = config or CronWorkerConfig()
    scheduler = BackgroundScheduler(timezone=pytz.timezone(cfg.TIMEZONE))
    scheduler.add_job(
        trigger_sweep,
        'interval',
        minutes=cfg.INTERVAL_MINUTES,
        kwargs={"config": cfg},
        id=SWEEP_JOB_ID,
        replace_existing=True
    )
    return scheduler


def start_scheduler(config: Optional[CronWorkerConfig] = None) -> BackgroundScheduler:
    """Start the sweep job and return the running scheduler."""
    cfg = config or CronWorkerConfig()
    scheduler = build_scheduler(cfg)
    scheduler.start()
    logger.info(f"🚀 Scheduler started: deadline sweep every {cfg.INTERVAL_MINUTES} min -> {cfg.TARGET_URL}")
    return scheduler


def stop_scheduler(scheduler: BackgroundScheduler):
    """Stop the scheduler gracefully."""
    scheduler.shutdown(wait=False)
    logger.info("🛑 Scheduler stopped")
