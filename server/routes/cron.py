import logging
from typing import Optional
from fastapi import APIRouter, Depends
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session
from line_messaging import LineClient
from server.schemas import SweepResponse
from server.models import Book, User, utcnow
from server.dependencies import get_db, get_messenger, verify_cron_secret
from server.sweeper import SWEEPABLE_STATUSES, run_sweep
from server.routes.prometheus import BOOKS_NOTIFIED

router = APIRouter()
logger = logging.getLogger(__name__)

# =========================================================
# CRON ENDPOINTS
# =========================================================
@router.api_route(
    "/check",
    methods=["GET", "POST"],
    response_model=SweepResponse,
    dependencies=[Depends(verify_cron_secret)],
)
def check_deadlines(
    db: Session = Depends(get_db),
    messenger: LineClient = Depends(get_messenger),
):
    """Shame every overdue, unfinished book once and mark the delivered ones insulted."""
    logger.info("🔍 Checking book deadlines...")
    now = utcnow()

    candidates = db.query(Book).filter(
        Book.status.in_(SWEEPABLE_STATUSES),
        Book.deadline < now
    ).all()

    def lookup_recipient(user_id: str) -> Optional[str]:
        try:
            return db.query(User.line_user_id).filter(User.id == user_id).scalar()
        except SQLAlchemyError as e:
            db.rollback()
            logger.error(f"Failed to look up LINE user for {user_id}: {e}")
            return None

    transitions = run_sweep(candidates, now, lookup_recipient, messenger.push_succeeded)

    for transition in transitions:
        # Completed or reading meanwhile: leave the owner's change alone
        db.query(Book).filter(
            Book.book_id == transition.book_id,
            Book.status.in_(SWEEPABLE_STATUSES)
        ).update(
            {"status": transition.new_status, "updated_at": utcnow()},
            synchronize_session=False
        )
        db.commit()

    count = len(transitions)
    BOOKS_NOTIFIED.inc(count)
    logger.info(f"✅ Deadline check complete. {count} of {len(candidates)} overdue books notified")
    return {"message": f"Checked deadlines. Found {count} expired books.", "notified": count}
