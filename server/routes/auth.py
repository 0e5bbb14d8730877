import logging
from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session
from server.schemas import LineAuthRequest, LineAuthResponse
from server.models import User
from server.dependencies import get_db

router = APIRouter()
logger = logging.getLogger(__name__)

DEFAULT_DISPLAY_NAME = "LINE User"

# =========================================================
# AUTH ENDPOINTS
# =========================================================
@router.post("/line", response_model=LineAuthResponse)
def line_auth(auth_data: LineAuthRequest, db: Session = Depends(get_db)):
    """
    Bootstrap the local user for a LINE identity.

    The LIFF client has already logged the user in; this only makes sure a
    users row exists for the LINE user id, creating it on first contact.
    """
    if not auth_data.line_user_id:
        raise HTTPException(status_code=400, detail="Missing required fields")

    user = db.query(User).filter(User.line_user_id == auth_data.line_user_id).first()
    if not user:
        user = User(
            line_user_id=auth_data.line_user_id,
            display_name=auth_data.display_name or DEFAULT_DISPLAY_NAME,
        )
        db.add(user)
        try:
            db.commit()
        except IntegrityError:
            # Lost a race with a concurrent bootstrap for the same LINE user
            db.rollback()
            user = db.query(User).filter(User.line_user_id == auth_data.line_user_id).first()
            if not user:
                raise
        else:
            db.refresh(user)
            logger.info(f"Created user {user.id} for LINE user {auth_data.line_user_id}")

    return {"message": "Auth pre-check successful", "userId": user.id}
