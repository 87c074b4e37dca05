from typing import List, Optional

from pydantic import BaseModel, ConfigDict


class SemesterBreakdown(BaseModel):
    semester: Optional[str] = None
    year: str
    credits: int
    subject_count: int
    credit_index_10: float
    credit_index_4: float
    sgpa_10: float
    sgpa_4: float

    model_config = ConfigDict(from_attributes=True)


class YearBreakdown(BaseModel):
    year: str
    weight: float
    credits: int
    subject_count: int
    ygpa_10: float
    ygpa_4: float
    semesters: List[SemesterBreakdown]

    model_config = ConfigDict(from_attributes=True)


class DegreeBreakdown(BaseModel):
    dgpa_10: float
    dgpa_4: float
    credits: int
    subject_count: int
    semester_count: int
    years: List[YearBreakdown]

    model_config = ConfigDict(from_attributes=True)
