import pytest

from models.students import Student as StudentModel
from scripts.import_transcripts import import_transcripts, read_transcripts

CSV = """semester,year,subject_code,subject_name,credits,grade
1,1,PC101,Mathematics I,4,O
1,1,PC102,Physics,3,A
2,1,PC201,Mathematics II,4,B
"""


@pytest.fixture
def csv_path(tmp_path):
    path = tmp_path / "transcripts.csv"
    path.write_text(CSV, encoding="utf-8")
    return str(path)


def test_read_transcripts_groups_rows(csv_path):
    transcripts = read_transcripts(csv_path)

    assert [(t.semester, t.year, len(t.subjects)) for t in transcripts] == [("1", "1", 2), ("2", "1", 1)]


def test_import_transcripts(db_session, csv_path):
    student = StudentModel(name="Test", registration_number="r1", roll_number="roll1")
    db_session.add(student)
    db_session.commit()

    saved = import_transcripts(db_session, "roll1", csv_path)

    assert len(saved) == 2
    # (40 + 24) / 7
    assert saved[0].grade_10_scale_cgpa == pytest.approx(9.14)
    assert saved[1].grade_4_scale_cgpa == pytest.approx(3.0)


def test_import_unknown_student(db_session, csv_path):
    with pytest.raises(LookupError):
        import_transcripts(db_session, "nobody", csv_path)
