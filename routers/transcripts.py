from typing import List

from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy.orm import Session

from config.settings import settings
from database.db import get_db
from dependencies.security import CurrentStudent
from schemas.common import SuccessEnvelope, ok
from schemas.transcripts import TranscriptIn, TranscriptOut
from services import transcript_service

router = APIRouter(prefix="/transcripts", tags=["transcripts"])


def _get_or_404(db: Session, student_id: int, transcript_id: int):
    semester = transcript_service.get_owned_transcript(db, student_id, transcript_id)
    if semester is None:
        raise HTTPException(status_code=404, detail="Transcript not found")
    return semester


# ✅ [READ] saved transcripts, newest first
@router.get("/", response_model=SuccessEnvelope[List[TranscriptOut]])
def read_transcripts(student: CurrentStudent, db: Session = Depends(get_db)):
    records = transcript_service.list_transcripts(db, student.id, settings.TRANSCRIPT_LIST_LIMIT)
    return ok([TranscriptOut.model_validate(r) for r in records])


# ✅ [CREATE] save a semester with its subjects
@router.post("/", status_code=201, response_model=SuccessEnvelope[TranscriptOut])
def create_transcript(transcript: TranscriptIn, student: CurrentStudent, db: Session = Depends(get_db)):
    semester = transcript_service.create_transcript(db, student.id, transcript)
    return ok(TranscriptOut.model_validate(semester), "Transcript saved successfully")


# ✅ [READ] one transcript
@router.get("/{transcript_id}", response_model=SuccessEnvelope[TranscriptOut])
def read_transcript(transcript_id: int, student: CurrentStudent, db: Session = Depends(get_db)):
    semester = _get_or_404(db, student.id, transcript_id)
    return ok(TranscriptOut.model_validate(semester))


# ✅ [UPDATE] replace all subjects of a transcript
@router.put("/{transcript_id}", response_model=SuccessEnvelope[TranscriptOut])
def update_transcript(transcript_id: int, transcript: TranscriptIn, student: CurrentStudent, db: Session = Depends(get_db)):
    semester = _get_or_404(db, student.id, transcript_id)
    semester = transcript_service.replace_transcript(db, semester, transcript)
    return ok(TranscriptOut.model_validate(semester), "Transcript updated successfully")


# ✅ [DELETE]
@router.delete("/{transcript_id}")
def delete_transcript(transcript_id: int, student: CurrentStudent, db: Session = Depends(get_db)):
    semester = _get_or_404(db, student.id, transcript_id)
    transcript_service.delete_transcript(db, semester)
    return ok({"transcript_id": transcript_id}, "Transcript deleted")
