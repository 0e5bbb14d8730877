import logging
import time
from .scheduler import start_scheduler, stop_scheduler

logging.basicConfig(level=logging.INFO)
logger = logging.getLogger(__name__)


def run_worker():
    scheduler = start_scheduler()
    try:
        while True:
            time.sleep(1)
    except (KeyboardInterrupt, SystemExit):
        logger.info("Shutting down cron worker")
    finally:
        stop_scheduler(scheduler)


if __name__ == "__main__":
    run_worker()
