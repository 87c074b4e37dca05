from sqlalchemy import Column, Integer, String, Float, DateTime, ForeignKey
from sqlalchemy.orm import relationship
from database.db import Base
from models.students import _utcnow


class Semester(Base):
    __tablename__ = "semesters"  # one saved transcript per academic term

    id = Column(Integer, primary_key=True, index=True)              # transcript ID (PK)
    semester = Column(String(10), nullable=True)                   # semester number, e.g. "5"
    year = Column(String(10), nullable=True)                       # academic year index, e.g. "3"

    # ==========================================================
    # [cached CGPA] always re-derived from subjects on save
    # ==========================================================
    grade_10_scale_cgpa = Column(Float, nullable=False, default=0.0)
    grade_4_scale_cgpa = Column(Float, nullable=False, default=0.0)

    created_at = Column(DateTime(timezone=True), default=_utcnow, nullable=False)
    updated_at = Column(DateTime(timezone=True), default=_utcnow, onupdate=_utcnow, nullable=False)

    # ✅ owner (N:1)
    student_id = Column(Integer, ForeignKey("students.id"), nullable=False, index=True)
    student = relationship("Student", back_populates="semesters")

    # ✅ subjects (1:N), removed together with the semester
    subjects = relationship(
        "Subject",
        back_populates="semester_ref",
        cascade="all, delete-orphan",
        order_by="Subject.id",
    )
