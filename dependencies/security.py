"""
dependencies/security.py

Session cookie handling.
- token: PyJWT HS256, claims userId / iat / exp
- cookie: httpOnly, name and lifetime from settings
"""

from datetime import datetime, timedelta, timezone
from typing import Optional, Annotated

import hmac
import jwt
from fastapi import Cookie, Depends, HTTPException, Response
from sqlalchemy.orm import Session

from config.settings import settings
from database.db import get_db
from models.students import Student as StudentModel

ALGORITHM = "HS256"

SessionCookie = Annotated[Optional[str], Cookie(alias=settings.SESSION_COOKIE_NAME)]


def create_session_token(student_id: int, now: Optional[datetime] = None) -> str:
    now = now or datetime.now(timezone.utc)
    payload = {
        "userId": str(student_id),
        "iat": now,
        "exp": now + timedelta(hours=settings.SESSION_TTL_HOURS),
    }
    return jwt.encode(payload, settings.SESSION_SECRET, algorithm=ALGORITHM)


def verify_session_token(token: Optional[str]) -> Optional[dict]:
    """Decoded payload, or None when missing / expired / tampered"""
    if not token:
        return None
    try:
        payload = jwt.decode(token, settings.SESSION_SECRET, algorithms=[ALGORITHM])
    except jwt.InvalidTokenError:
        return None
    if not payload.get("userId"):
        return None
    return payload


def set_session_cookie(response: Response, student_id: int) -> None:
    response.set_cookie(
        key=settings.SESSION_COOKIE_NAME,
        value=create_session_token(student_id),
        max_age=settings.SESSION_TTL_HOURS * 3600,
        httponly=True,
        secure=settings.SESSION_COOKIE_SECURE,
        samesite="lax",
    )


def clear_session_cookie(response: Response) -> None:
    response.delete_cookie(key=settings.SESSION_COOKIE_NAME, httponly=True)


def registration_matches(expected: str, given: str) -> bool:
    # constant-time comparison
    return hmac.compare_digest(expected.encode("utf-8"), given.encode("utf-8"))


def get_current_student(session: SessionCookie = None, db: Session = Depends(get_db)) -> StudentModel:
    payload = verify_session_token(session)
    if payload is None:
        raise HTTPException(status_code=401, detail="Not authenticated")

    try:
        student_id = int(payload["userId"])
    except (TypeError, ValueError):
        raise HTTPException(status_code=401, detail="Invalid session")

    student = db.query(StudentModel).filter(StudentModel.id == student_id).first()
    if student is None:
        raise HTTPException(status_code=401, detail="Invalid session")
    return student


CurrentStudent = Annotated[StudentModel, Depends(get_current_student)]
