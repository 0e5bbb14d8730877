import hmac
import logging
from typing import Optional
from fastapi import Depends, Header, HTTPException, Request
from sqlalchemy.orm import Session
from line_messaging import LineClient
from server.config import ServerConfig

logger = logging.getLogger(__name__)


def get_db(request: Request):
    db: Session = request.app.state.session_factory()
    try:
        yield db
    finally:
        db.close()

def get_config(request: Request) -> ServerConfig:
    return request.app.state.config

def get_messenger(request: Request) -> LineClient:
    return request.app.state.messenger

def verify_cron_secret(
    authorization: Optional[str] = Header(None),
    config: ServerConfig = Depends(get_config),
) -> None:
    """Reject cron triggers that do not carry the shared secret, when one is configured."""
    if not config.CRON_SECRET:
        return

    expected = f"Bearer {config.CRON_SECRET}"
    if not authorization or not hmac.compare_digest(authorization.encode(), expected.encode()):
        logger.warning("Rejected cron trigger without a valid bearer secret")
        raise HTTPException(status_code=401, detail="Unauthorized")
