from fastapi import APIRouter, Depends, HTTPException
from fastapi.responses import Response
from sqlalchemy.orm import Session

from database.db import get_db
from dependencies.security import CurrentStudent
from routers.dgpa import degree_summary_for
from services import transcript_service
from services.pdf_service import PDFService

router = APIRouter(prefix="/pdf", tags=["pdf"])

pdf_service = PDFService()


def _pdf_response(content: bytes, filename: str) -> Response:
    return Response(
        content=content,
        media_type="application/pdf",
        headers={"Content-Disposition": f'attachment; filename="{filename}"'},
    )


# ✅ [PDF] grade conversion report for one transcript
@router.get("/transcripts/{transcript_id}")
def transcript_pdf(transcript_id: int, student: CurrentStudent, db: Session = Depends(get_db)):
    semester = transcript_service.get_owned_transcript(db, student.id, transcript_id)
    if semester is None:
        raise HTTPException(status_code=404, detail="Transcript not found")

    content = pdf_service.generate_conversion_pdf(student, semester)
    label = semester.semester or str(semester.id)
    return _pdf_response(content, f"conversion_report_sem{label}.pdf")


# ✅ [PDF] DGPA report over every saved transcript
@router.get("/dgpa")
def dgpa_pdf(student: CurrentStudent, db: Session = Depends(get_db)):
    summary = degree_summary_for(db, student.id)
    if summary.semester_count == 0:
        raise HTTPException(status_code=404, detail="No saved transcripts")

    content = pdf_service.generate_dgpa_pdf(student, summary)
    return _pdf_response(content, f"dgpa_report_{student.roll_number}.pdf")
