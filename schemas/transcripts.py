from datetime import datetime, timezone
from typing import List, Optional

from pydantic import BaseModel, Field, ConfigDict, field_validator

from services.grading import Grade


# ==========================================================
# [request schemas]
# ==========================================================
class SubjectIn(BaseModel):
    code: str = Field(default="", max_length=50)        # course code
    name: str = Field(default="", max_length=200)       # course name
    credits: int = Field(..., gt=0, le=30)              # credit weight
    grade: Grade                                        # O/E/A/B/C/D/F


class TranscriptIn(BaseModel):
    semester: Optional[str] = Field(default=None, max_length=10)   # e.g. "5"
    year: Optional[str] = Field(default=None, max_length=10)       # e.g. "3"
    subjects: List[SubjectIn] = Field(default_factory=list)

    # client-computed CGPA fields are ignored; they are always recomputed
    model_config = ConfigDict(extra="ignore")

    @field_validator("semester", "year", mode="before")
    @classmethod
    def _blank_to_none(cls, v):
        if isinstance(v, str) and not v.strip():
            return None
        return v.strip() if isinstance(v, str) else v


# ==========================================================
# [response schemas]
# ==========================================================
class SubjectOut(BaseModel):
    id: int
    subject_code: str
    subject_name: str
    credits: int
    grade: Grade

    model_config = ConfigDict(from_attributes=True)


class TranscriptOut(BaseModel):
    id: int
    semester: Optional[str] = None
    year: Optional[str] = None
    grade_10_scale_cgpa: float
    grade_4_scale_cgpa: float
    created_at: datetime
    updated_at: datetime
    subjects: List[SubjectOut] = []

    model_config = ConfigDict(from_attributes=True)

    @field_validator("created_at", "updated_at")
    @classmethod
    def as_utc(cls, v: datetime) -> datetime:
        # SQLite drops tzinfo on the way back; values are always written in UTC
        if v.tzinfo is None:
            return v.replace(tzinfo=timezone.utc)
        return v
