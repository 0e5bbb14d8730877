import json
import logging
from typing import Mapping, Optional, Tuple
import requests
from .config import LineConfig

# Setup logger
logger = logging.getLogger(__name__)


def _get_text_payload(recipient: str, text: str) -> str:
    return json.dumps(
        {
            "to": recipient,
            "messages": [{"type": "text", "text": text}],
        },
        ensure_ascii=False,
    )


class LineClient:
    """Pushes text messages to LINE users through the Messaging API."""

    def __init__(
        self,
        config: Optional[LineConfig] = None,
        session: Optional[requests.Session] = None,
    ) -> None:
        self.config = config or LineConfig()
        # Per-call requests.post unless a session is injected
        self.session = session

    def _push_url(self) -> str:
        return f"{self.config.API_BASE_URL}/v2/bot/message/push"

    def push_text(self, to: str, text: str) -> Tuple[Mapping, int]:
        """
        Sends a LINE push message.

        Arguments:
            to (str): The recipient's LINE user id.
            text (str): The message body.

        Returns the decoded response body and the HTTP status code. Transport
        errors are reported as synthetic 408/500 statuses instead of raising.
        """
        if not (self.config.ACCESS_TOKEN and to):
            logger.error("Missing LINE configuration or recipient")
            return {"status": "error", "message": "Missing configuration"}, 500

        headers = {
            "Content-Type": "application/json",
            "Authorization": f"Bearer {self.config.ACCESS_TOKEN}",
        }

        try:
            http = self.session or requests
            resp = http.post(
                self._push_url(),
                data=_get_text_payload(to, text).encode("utf-8"),
                headers=headers,
                timeout=self.config.TIMEOUT,
            )
        except requests.Timeout:
            logger.error("LINE request timed out")
            return {"status": "error", "message": "Request timed out"}, 408
        except requests.RequestException as e:
            logger.error(f"LINE send error: {e}")
            return {"status": "error", "message": "Failed to send message"}, 500

        try:
            body = resp.json()
        except ValueError:
            body = {}

        if resp.status_code != 200:
            logger.error(f"LINE API error {resp.status_code}: {body}")
        return body, resp.status_code

    def push_succeeded(self, to: str, text: str) -> bool:
        _, status_code = self.push_text(to, text)
        return status_code == 200
