"""
Deadline Sweeper

Decides which overdue books get a shaming message and which of them move to
``insulted``. All I/O is injected so the decision logic runs without a live
store or messaging provider; the caller applies the returned transitions.
"""
import logging
from dataclasses import dataclass
from datetime import datetime
from typing import Callable, Iterable, List, Optional
import pytz

from server.enums import BookStatus
from server.insults import generate_insult

logger = logging.getLogger(__name__)

SWEEPABLE_STATUSES = (BookStatus.unread, BookStatus.insulted)

RecipientLookup = Callable[[str], Optional[str]]
Delivery = Callable[[str, str], bool]


@dataclass(frozen=True)
class StatusTransition:
    book_id: str
    user_id: str
    recipient: str
    message: str
    new_status: BookStatus = BookStatus.insulted


def as_utc(value: datetime) -> datetime:
    if value.tzinfo is None:
        return pytz.utc.localize(value)
    return value.astimezone(pytz.utc)


def is_overdue(book, now: datetime) -> bool:
    """True when the book is still unread (or already shamed) and its deadline has passed."""
    if book.status not in SWEEPABLE_STATUSES:
        return False
    if book.deadline is None:
        return False
    return as_utc(book.deadline) < as_utc(now)


def _default_message(book) -> str:
    return generate_insult(book.title)


def run_sweep(
    books: Iterable,
    now: datetime,
    lookup_recipient: RecipientLookup,
    deliver: Delivery,
    choose_message: Callable[[object], str] = _default_message,
) -> List[StatusTransition]:
    """
    Walk the candidate books in order and try to shame each overdue one.

    Arguments:
        books: objects exposing book_id, user_id, title, status and deadline.
        now: the sweep instant; only deadlines strictly before it qualify.
        lookup_recipient: owner user id -> LINE user id, or None when unknown.
        deliver: (recipient, text) -> True when the push was accepted.
        choose_message: book -> message text.

    Returns one transition per successfully delivered message. Lookup and
    delivery failures are logged and the book is skipped.
    """
    transitions: List[StatusTransition] = []

    for book in books:
        if not is_overdue(book, now):
            continue

        message = choose_message(book)

        try:
            recipient = lookup_recipient(book.user_id)
        except Exception as e:
            logger.error(f"Recipient lookup failed for book {book.book_id}: {e}")
            continue

        if not recipient:
            logger.warning(f"No LINE user for owner {book.user_id} of book {book.book_id}, skipping")
            continue

        try:
            delivered = deliver(recipient, message)
        except Exception as e:
            logger.error(f"Error sending insult for book {book.book_id}: {e}")
            continue

        if not delivered:
            logger.error(f"❌ Failed to deliver insult for book {book.book_id}")
            continue

        logger.info(f"✅ Sent insult for book {book.book_id} to {recipient}")
        transitions.append(
            StatusTransition(
                book_id=book.book_id,
                user_id=book.user_id,
                recipient=recipient,
                message=message,
            )
        )

    return transitions
