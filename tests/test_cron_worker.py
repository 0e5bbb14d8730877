import requests

from cron_worker.config import CronWorkerConfig
from cron_worker.scheduler import SWEEP_JOB_ID, build_scheduler, trigger_sweep


class FakeResponse:
    def __init__(self, status_code=200, body=None):
        self.status_code = status_code
        self._body = body or {}

    def raise_for_status(self):
        if self.status_code >= 400:
            raise requests.HTTPError(f"{self.status_code} Error")

    def json(self):
        return self._body


class FakeHttp:
    def __init__(self, response):
        self.response = response
        self.calls = []

    def post(self, url, headers=None, timeout=None):
        self.calls.append((url, headers, timeout))
        return self.response


def make_config(secret=""):
    return CronWorkerConfig(
        target_url="http://api.test/api/cron/check",
        cron_secret=secret,
        interval_minutes=15,
        timezone="Asia/Tokyo",
    )


def test_trigger_sweep_sends_bearer_secret():
    http = FakeHttp(FakeResponse(body={"message": "Checked deadlines. Found 2 expired books.", "notified": 2}))

    summary = trigger_sweep(make_config("s3cret"), session=http)

    assert summary["notified"] == 2
    url, headers, timeout = http.calls[0]
    assert url == "http://api.test/api/cron/check"
    assert headers == {"Authorization": "Bearer s3cret"}
    assert timeout == 30

def test_trigger_sweep_without_secret_sends_no_auth():
    http = FakeHttp(FakeResponse(body={"message": "ok", "notified": 0}))
    trigger_sweep(make_config(), session=http)
    assert http.calls[0][1] == {}

def test_trigger_sweep_failure_returns_empty():
    http = FakeHttp(FakeResponse(status_code=401))
    assert trigger_sweep(make_config("wrong"), session=http) == {}

def test_build_scheduler_registers_interval_job():
    scheduler = build_scheduler(make_config())
    job = scheduler.get_job(SWEEP_JOB_ID)

    assert job is not None
    assert job.trigger.interval.total_seconds() == 15 * 60
    assert job.kwargs["config"].TARGET_URL == "http://api.test/api/cron/check"
