from datetime import datetime, timezone

from sqlalchemy import Column, Integer, String, DateTime
from sqlalchemy.orm import relationship
from database.db import Base


def _utcnow():
    return datetime.now(timezone.utc)


class Student(Base):
    __tablename__ = "students"  # registered students

    id = Column(Integer, primary_key=True, index=True)                        # student ID (PK)
    name = Column(String(100), nullable=False)                               # full name
    registration_number = Column(String(50), nullable=False)                 # university registration no.
    roll_number = Column(String(50), nullable=False, unique=True, index=True)  # roll no. (login key)
    created_at = Column(DateTime(timezone=True), default=_utcnow, nullable=False)

    # ✅ saved semester transcripts (1:N)
    semesters = relationship(
        "Semester",
        back_populates="student",
        cascade="all, delete-orphan",
    )
