from sqlalchemy import Column, Integer, String, Enum, ForeignKey
from sqlalchemy.orm import relationship
from database.db import Base
from services.grading import Grade


class Subject(Base):
    __tablename__ = "subjects"  # one examined course within a semester

    id = Column(Integer, primary_key=True, index=True)              # subject row ID (PK)
    subject_code = Column(String(50), nullable=False, default="")   # course code (free text)
    subject_name = Column(String(200), nullable=False, default="")  # course name (free text)
    credits = Column(Integer, nullable=False)                      # credit weight (> 0)
    grade = Column(Enum(Grade, name="grade_enum"), nullable=False)  # letter grade O/E/A/B/C/D/F

    # ✅ owning semester (N:1)
    semester_id = Column(Integer, ForeignKey("semesters.id", ondelete="CASCADE"), nullable=False, index=True)
    semester_ref = relationship("Semester", back_populates="subjects")
