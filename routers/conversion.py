from fastapi import APIRouter

from schemas.common import SuccessEnvelope, ok
from schemas.dgpa import SemesterBreakdown
from schemas.transcripts import TranscriptIn
from services.grading import summarize_semester

router = APIRouter(prefix="/conversion", tags=["conversion"])


# ✅ [PREVIEW] SGPA / credit index on both scales for an unsaved subject list
@router.post("/preview", response_model=SuccessEnvelope[SemesterBreakdown])
def preview_conversion(transcript: TranscriptIn):
    return ok(SemesterBreakdown.model_validate(summarize_semester(transcript)))
