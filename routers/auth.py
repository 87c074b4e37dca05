import logging

from fastapi import APIRouter, Depends, HTTPException, Response
from sqlalchemy.orm import Session

from database.db import get_db
from dependencies.security import (
    CurrentStudent,
    clear_session_cookie,
    registration_matches,
    set_session_cookie,
)
from models.students import Student as StudentModel
from schemas.auth import LoginRequest, ProfileUpdate, RegisterRequest, StudentProfile
from schemas.common import SuccessEnvelope, ok

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/auth", tags=["auth"])


def _roll_number_taken(db: Session, roll_number: str, exclude_id: int = None) -> bool:
    query = db.query(StudentModel).filter(StudentModel.roll_number == roll_number)
    if exclude_id is not None:
        query = query.filter(StudentModel.id != exclude_id)
    return db.query(query.exists()).scalar()


# ✅ [REGISTER] create a student and start a session
@router.post("/register", status_code=201, response_model=SuccessEnvelope[StudentProfile])
def register(request: RegisterRequest, response: Response, db: Session = Depends(get_db)):
    if _roll_number_taken(db, request.roll_number):
        raise HTTPException(status_code=409, detail="Roll number is already registered")

    student = StudentModel(**request.model_dump())
    db.add(student)
    db.commit()
    db.refresh(student)

    set_session_cookie(response, student.id)
    logger.info("Registered student %s", student.id)
    return ok(StudentProfile.model_validate(student), "Registration successful")


# ✅ [LOGIN] roll number lookup + registration number check
@router.post("/login", response_model=SuccessEnvelope[StudentProfile])
def login(request: LoginRequest, response: Response, db: Session = Depends(get_db)):
    student = db.query(StudentModel).filter(StudentModel.roll_number == request.roll_number).first()
    if student is None or not registration_matches(student.registration_number, request.registration_number):
        logger.info("Failed login for roll number %s", request.roll_number)
        raise HTTPException(status_code=401, detail="Invalid credentials")

    set_session_cookie(response, student.id)
    return ok(StudentProfile.model_validate(student), "Login successful")


# ✅ [LOGOUT]
@router.post("/logout")
def logout(response: Response):
    clear_session_cookie(response)
    return ok(None, "Logged out")


# ✅ [READ] current profile
@router.get("/me", response_model=SuccessEnvelope[StudentProfile])
def read_profile(student: CurrentStudent):
    return ok(StudentProfile.model_validate(student))


# ✅ [UPDATE] current profile
@router.put("/me", response_model=SuccessEnvelope[StudentProfile])
def update_profile(updated: ProfileUpdate, student: CurrentStudent, db: Session = Depends(get_db)):
    changes = updated.model_dump(exclude_none=True)
    if "roll_number" in changes and _roll_number_taken(db, changes["roll_number"], exclude_id=student.id):
        raise HTTPException(status_code=409, detail="Roll number is already registered")

    for key, value in changes.items():
        setattr(student, key, value)

    db.commit()
    db.refresh(student)
    return ok(StudentProfile.model_validate(student), "Profile updated")
