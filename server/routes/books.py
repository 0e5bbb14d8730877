from typing import List, Optional
import logging
from fastapi import APIRouter, Depends, HTTPException, Query, status
from sqlalchemy.orm import Session
from server.schemas import (
    BookCreate, BookUpdate, BookDelete, BookComplete,
    BookResponse, BookCreated, MessageResponse
)
from server.models import Book, utcnow
from server.enums import BookStatus
from server.dependencies import get_db

router = APIRouter()
logger = logging.getLogger(__name__)

DEFAULT_INSULT_LEVEL = 3


def _is_blank(value: Optional[str]) -> bool:
    return value is None or not value.strip()

# =========================================================
# BOOK ENDPOINTS
# =========================================================
@router.get("", response_model=List[BookResponse])
def get_books(
    user_id: Optional[str] = Query(None, alias="userId"),
    db: Session = Depends(get_db)
):
    if _is_blank(user_id):
        raise HTTPException(status_code=400, detail="userId required")

    return db.query(Book).filter(Book.user_id == user_id).all()

@router.post("", response_model=BookCreated, status_code=status.HTTP_201_CREATED)
def register_book(book_data: BookCreate, db: Session = Depends(get_db)):
    if _is_blank(book_data.title) or _is_blank(book_data.author) or _is_blank(book_data.user_id):
        raise HTTPException(status_code=400, detail="Missing required fields")
    if book_data.deadline is None:
        raise HTTPException(status_code=400, detail="Missing required fields")

    book = Book(
        user_id=book_data.user_id,
        title=book_data.title,
        author=book_data.author,
        deadline=book_data.deadline,
        status=book_data.status or BookStatus.unread,
        insult_level=book_data.insult_level or DEFAULT_INSULT_LEVEL,
    )
    db.add(book)
    db.commit()
    db.refresh(book)
    logger.info(f"Registered book {book.book_id} for user {book.user_id}")
    return {"message": "Book registered successfully", "book": book}

@router.put("", response_model=MessageResponse)
def update_book(book_data: BookUpdate, db: Session = Depends(get_db)):
    if _is_blank(book_data.book_id) or _is_blank(book_data.user_id):
        raise HTTPException(status_code=400, detail="Missing required fields")

    # Partial update: only fields present in the body (and not null) change
    changes = {
        key: value
        for key, value in book_data.dict(exclude_unset=True).items()
        if key not in ("book_id", "user_id") and value is not None
    }
    for key in ("title", "author"):
        if key in changes and _is_blank(changes[key]):
            raise HTTPException(status_code=400, detail="Missing required fields")

    changes["updated_at"] = utcnow()

    # Scoped by owner: a mismatched user_id matches no row
    updated = db.query(Book).filter(
        Book.book_id == book_data.book_id,
        Book.user_id == book_data.user_id
    ).update(changes, synchronize_session=False)
    db.commit()

    if not updated:
        logger.info(f"Update matched no book {book_data.book_id} for user {book_data.user_id}")
    return {"message": "Book updated successfully"}

@router.delete("", response_model=MessageResponse)
def delete_book(book_data: BookDelete, db: Session = Depends(get_db)):
    if _is_blank(book_data.book_id) or _is_blank(book_data.user_id):
        raise HTTPException(status_code=400, detail="Missing required fields")

    deleted = db.query(Book).filter(
        Book.book_id == book_data.book_id,
        Book.user_id == book_data.user_id
    ).delete(synchronize_session=False)
    db.commit()

    if not deleted:
        logger.info(f"Delete matched no book {book_data.book_id} for user {book_data.user_id}")
    return {"message": "Book deleted successfully"}

@router.post("/complete", response_model=MessageResponse)
def complete_book(book_data: BookComplete, db: Session = Depends(get_db)):
    if _is_blank(book_data.book_id):
        raise HTTPException(status_code=400, detail="Missing required fields")

    db.query(Book).filter(Book.book_id == book_data.book_id).update(
        {"status": BookStatus.completed, "updated_at": utcnow()},
        synchronize_session=False
    )
    db.commit()
    return {"message": "Book marked as completed"}
