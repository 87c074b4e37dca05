"""
scripts/import_transcripts.py

CSV -> saved transcripts for one existing student.

    python -m scripts.import_transcripts <roll_number> data/transcripts.csv

CSV columns: semester,year,subject_code,subject_name,credits,grade
Rows sharing (semester, year) become one transcript.
"""

import csv
import logging
import sys
from collections import OrderedDict

from sqlalchemy.orm import Session

from database.db import Base, SessionLocal, engine
from models import semesters, subjects  # noqa: F401
from models.students import Student as StudentModel
from schemas.transcripts import SubjectIn, TranscriptIn
from services import transcript_service

logger = logging.getLogger(__name__)

CSV_PATH = "data/transcripts.csv"  # default file path


def read_transcripts(csv_path: str):
    groups = OrderedDict()
    with open(csv_path, newline="", encoding="utf-8-sig") as csvfile:
        reader = csv.DictReader(csvfile)
        for row in reader:
            key = ((row.get("semester") or "").strip(), (row.get("year") or "").strip())
            groups.setdefault(key, []).append(SubjectIn(
                code=(row.get("subject_code") or "").strip(),
                name=(row.get("subject_name") or "").strip(),
                credits=int(row["credits"]),
                grade=row["grade"].strip(),
            ))
    return [
        TranscriptIn(semester=semester, year=year, subjects=subjects)
        for (semester, year), subjects in groups.items()
    ]


def import_transcripts(db: Session, roll_number: str, csv_path: str = CSV_PATH):
    student = db.query(StudentModel).filter(StudentModel.roll_number == roll_number).first()
    if student is None:
        raise LookupError(f"No student with roll number {roll_number}")

    saved = [
        transcript_service.create_transcript(db, student.id, transcript)
        for transcript in read_transcripts(csv_path)
    ]
    logger.info("Imported %d transcripts for %s", len(saved), roll_number)
    return saved


if __name__ == "__main__":
    logging.basicConfig(level=logging.INFO)
    if len(sys.argv) < 2:
        sys.exit("usage: python -m scripts.import_transcripts <roll_number> [csv_path]")

    Base.metadata.create_all(bind=engine)
    db = SessionLocal()
    try:
        records = import_transcripts(db, sys.argv[1], sys.argv[2] if len(sys.argv) > 2 else CSV_PATH)
    finally:
        db.close()
    print(f"✅ CSV -> DB import done ({len(records)} transcripts)")
