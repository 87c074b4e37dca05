from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from config.settings import settings
from database.db import get_db
from dependencies.security import CurrentStudent
from schemas.common import SuccessEnvelope, ok
from schemas.dgpa import DegreeBreakdown
from services import transcript_service
from services.grading import summarize_degree

router = APIRouter(prefix="/dgpa", tags=["dgpa"])


def degree_summary_for(db: Session, student_id: int):
    records = transcript_service.list_transcripts(db, student_id, settings.TRANSCRIPT_LIST_LIMIT)
    return summarize_degree(records)


# ✅ [READ] SGPA -> YGPA -> DGPA breakdown over saved transcripts
@router.get("/", response_model=SuccessEnvelope[DegreeBreakdown])
def read_dgpa(student: CurrentStudent, db: Session = Depends(get_db)):
    summary = degree_summary_for(db, student.id)
    message = None if summary.semester_count else "Save at least one semester transcript to calculate DGPA"
    return ok(DegreeBreakdown.model_validate(summary), message)
