"""
services/transcript_service.py

Saved semester transcripts.
- A semester and its full subject set are always written together.
- grade_10_scale_cgpa / grade_4_scale_cgpa are cached values: recomputed from
  the subjects on every write, never taken from the client.
"""

import logging
from typing import List, Optional

from sqlalchemy.orm import Session, selectinload

from models.semesters import Semester as SemesterModel
from models.students import _utcnow
from models.subjects import Subject as SubjectModel
from schemas.transcripts import TranscriptIn
from services.grading import cached_cgpa, check_credits, to_grade

logger = logging.getLogger(__name__)


def _build_subjects(data: TranscriptIn) -> List[SubjectModel]:
    return [
        SubjectModel(
            subject_code=s.code,
            subject_name=s.name,
            credits=check_credits(s.credits),
            grade=to_grade(s.grade),
        )
        for s in data.subjects
    ]


def recompute_cached_cgpa(semester: SemesterModel) -> SemesterModel:
    semester.grade_10_scale_cgpa, semester.grade_4_scale_cgpa = cached_cgpa(semester.subjects)
    return semester


# ==========================================================
# [READ]
# ==========================================================
def list_transcripts(db: Session, student_id: int, limit: Optional[int] = None) -> List[SemesterModel]:
    query = (
        db.query(SemesterModel)
        .options(selectinload(SemesterModel.subjects))
        .filter(SemesterModel.student_id == student_id)
        .order_by(SemesterModel.created_at.desc(), SemesterModel.id.desc())
    )
    if limit:
        query = query.limit(limit)
    return query.all()


def get_owned_transcript(db: Session, student_id: int, transcript_id: int) -> Optional[SemesterModel]:
    """None when the transcript is missing or belongs to someone else"""
    semester = db.query(SemesterModel).filter(SemesterModel.id == transcript_id).first()
    if semester is None or semester.student_id != student_id:
        return None
    return semester


# ==========================================================
# [WRITE]
# ==========================================================
def create_transcript(db: Session, student_id: int, data: TranscriptIn) -> SemesterModel:
    semester = SemesterModel(
        student_id=student_id,
        semester=data.semester,
        year=data.year,
        subjects=_build_subjects(data),
    )
    recompute_cached_cgpa(semester)

    try:
        db.add(semester)
        db.commit()
    except Exception:
        db.rollback()
        logger.exception("Failed to save transcript for student %s", student_id)
        raise
    db.refresh(semester)
    logger.info(
        "Saved transcript %s (student=%s, subjects=%d, cgpa10=%.2f, cgpa4=%.2f)",
        semester.id, student_id, len(semester.subjects),
        semester.grade_10_scale_cgpa, semester.grade_4_scale_cgpa,
    )
    return semester


def replace_transcript(db: Session, semester: SemesterModel, data: TranscriptIn) -> SemesterModel:
    """Delete every prior subject, insert the new set and recompute the cached CGPA in one transaction"""
    new_subjects = _build_subjects(data)
    try:
        db.query(SubjectModel).filter(SubjectModel.semester_id == semester.id).delete(synchronize_session=False)
        db.expire(semester, ["subjects"])

        semester.semester = data.semester
        semester.year = data.year
        semester.subjects = new_subjects
        # child rows alone never trigger onupdate on the semester row
        semester.updated_at = _utcnow()
        recompute_cached_cgpa(semester)
        db.commit()
    except Exception:
        db.rollback()
        logger.exception("Failed to update transcript %s", semester.id)
        raise
    db.refresh(semester)
    logger.info("Updated transcript %s (subjects=%d)", semester.id, len(semester.subjects))
    return semester


def delete_transcript(db: Session, semester: SemesterModel) -> None:
    semester_id = semester.id
    try:
        db.query(SubjectModel).filter(SubjectModel.semester_id == semester_id).delete(synchronize_session=False)
        db.expire(semester, ["subjects"])
        db.delete(semester)
        db.commit()
    except Exception:
        db.rollback()
        logger.exception("Failed to delete transcript %s", semester_id)
        raise
    logger.info("Deleted transcript %s", semester_id)
