from typing import Optional
from datetime import datetime
import pytz
from pydantic import AliasChoices, BaseModel, Field, validator
from server.enums import BookStatus

# =========================================================
# PYDANTIC SCHEMAS
# =========================================================

def _alias(*names: str) -> AliasChoices:
    return AliasChoices(*names)


def _to_utc(value: Optional[datetime]) -> Optional[datetime]:
    """Deadlines are stored in UTC; naive input is taken to already be UTC."""
    if value is None:
        return None
    if value.tzinfo is None:
        return pytz.utc.localize(value)
    return value.astimezone(pytz.utc)


# Auth Schemas
class LineAuthRequest(BaseModel):
    line_access_token: Optional[str] = Field(None, validation_alias=_alias("lineAccessToken", "line_access_token"))
    line_user_id: Optional[str] = Field(None, validation_alias=_alias("lineUserID", "lineUserId", "line_user_id"))
    display_name: Optional[str] = Field(None, validation_alias=_alias("displayName", "display_name"))

class LineAuthResponse(BaseModel):
    message: str
    userId: str

# Book Schemas
class BookFields(BaseModel):
    title: Optional[str] = None
    author: Optional[str] = None
    deadline: Optional[datetime] = None
    status: Optional[BookStatus] = None
    insult_level: Optional[int] = Field(None, ge=1, le=5, validation_alias=_alias("insult_level", "insultLevel"))

    @validator("deadline")
    def deadline_in_utc(cls, v):
        return _to_utc(v)

class BookCreate(BookFields):
    user_id: Optional[str] = Field(None, validation_alias=_alias("user_id", "userId"))

class BookUpdate(BookFields):
    book_id: Optional[str] = Field(None, validation_alias=_alias("book_id", "bookId"))
    user_id: Optional[str] = Field(None, validation_alias=_alias("user_id", "userId"))

class BookDelete(BaseModel):
    book_id: Optional[str] = Field(None, validation_alias=_alias("book_id", "bookId"))
    user_id: Optional[str] = Field(None, validation_alias=_alias("user_id", "userId"))

class BookComplete(BaseModel):
    book_id: Optional[str] = Field(None, validation_alias=_alias("book_id", "bookId"))

class BookResponse(BaseModel):
    book_id: str
    user_id: str
    title: str
    author: str
    deadline: datetime
    status: BookStatus
    insult_level: int
    created_at: Optional[datetime]
    updated_at: Optional[datetime]

    class Config:
        from_attributes = True

class BookCreated(BaseModel):
    message: str
    book: BookResponse

class MessageResponse(BaseModel):
    message: str

class SweepResponse(BaseModel):
    message: str
    notified: int
