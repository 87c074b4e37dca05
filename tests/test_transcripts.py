from datetime import datetime, timedelta, timezone

from conftest import subjects
from models.semesters import Semester as SemesterModel


def save(client, semester="1", year="1", rows=(("A", 3), ("B", 4), ("E", 3))):
    return client.post("/v1/transcripts/", json={
        "semester": semester,
        "year": year,
        "subjects": subjects(*rows),
    })


def test_transcripts_require_login(client):
    assert client.get("/v1/transcripts/").status_code == 401
    assert save(client).status_code == 401


def test_create_transcript_computes_cgpa(student_client):
    resp = save(student_client)

    assert resp.status_code == 201
    data = resp.json()["data"]
    assert data["grade_10_scale_cgpa"] == 7.9
    assert data["grade_4_scale_cgpa"] == 3.45
    assert [s["grade"] for s in data["subjects"]] == ["A", "B", "E"]


def test_client_supplied_cgpa_is_ignored(student_client):
    resp = student_client.post("/v1/transcripts/", json={
        "semester": "1",
        "subjects": subjects(("F", 4)),
        "grade_10_scale_cgpa": 10,
        "grade_4_scale_cgpa": 4.0,
    })
    data = resp.json()["data"]
    assert data["grade_10_scale_cgpa"] == 2.0
    assert data["grade_4_scale_cgpa"] == 0.0


def test_empty_transcript_has_zero_cgpa(student_client):
    resp = save(student_client, rows=())
    assert resp.status_code == 201
    assert resp.json()["data"]["grade_10_scale_cgpa"] == 0.0
    assert resp.json()["data"]["grade_4_scale_cgpa"] == 0.0


def test_invalid_grade_rejected(student_client):
    resp = student_client.post("/v1/transcripts/", json={
        "semester": "1",
        "subjects": [{"code": "X", "name": "X", "credits": 3, "grade": "S"}],
    })
    assert resp.status_code == 422
    assert student_client.get("/v1/transcripts/").json()["data"] == []


def test_invalid_credits_rejected(student_client):
    resp = student_client.post("/v1/transcripts/", json={
        "subjects": [{"code": "X", "name": "X", "credits": 0, "grade": "A"}],
    })
    assert resp.status_code == 422


def test_list_transcripts_newest_first(student_client):
    ids = [save(student_client, semester=str(n)).json()["data"]["id"] for n in range(1, 4)]

    data = student_client.get("/v1/transcripts/").json()["data"]
    assert [t["id"] for t in data] == list(reversed(ids))


def test_list_transcripts_is_capped(student_client):
    for n in range(1, 11):
        save(student_client, semester=str(n))
    assert len(student_client.get("/v1/transcripts/").json()["data"]) == 8


def test_update_replaces_subjects_and_recomputes(student_client):
    transcript_id = save(student_client).json()["data"]["id"]

    resp = student_client.put(f"/v1/transcripts/{transcript_id}", json={
        "semester": "2",
        "year": "1",
        "subjects": subjects(("O", 4), ("O", 2)),
    })
    assert resp.status_code == 200
    data = resp.json()["data"]
    assert data["semester"] == "2"
    assert len(data["subjects"]) == 2
    assert data["grade_10_scale_cgpa"] == 10.0
    assert data["grade_4_scale_cgpa"] == 4.0

    fetched = student_client.get(f"/v1/transcripts/{transcript_id}").json()["data"]
    assert [s["grade"] for s in fetched["subjects"]] == ["O", "O"]


def test_failed_update_keeps_previous_subjects(student_client):
    transcript_id = save(student_client).json()["data"]["id"]

    resp = student_client.put(f"/v1/transcripts/{transcript_id}", json={
        "subjects": [{"code": "X", "name": "X", "credits": 3, "grade": "Q"}],
    })
    assert resp.status_code == 422

    fetched = student_client.get(f"/v1/transcripts/{transcript_id}").json()["data"]
    assert len(fetched["subjects"]) == 3
    assert fetched["grade_10_scale_cgpa"] == 7.9


def test_delete_transcript(student_client):
    transcript_id = save(student_client).json()["data"]["id"]

    assert student_client.delete(f"/v1/transcripts/{transcript_id}").status_code == 200
    assert student_client.get(f"/v1/transcripts/{transcript_id}").status_code == 404
    assert student_client.delete(f"/v1/transcripts/{transcript_id}").status_code == 404


def test_other_students_transcripts_are_hidden(student_client):
    transcript_id = save(student_client).json()["data"]["id"]

    student_client.cookies.clear()
    student_client.post("/v1/auth/register", json={
        "name": "Other", "registration_number": "r2", "roll_number": "roll2",
    })
    assert student_client.get(f"/v1/transcripts/{transcript_id}").status_code == 404
    assert student_client.delete(f"/v1/transcripts/{transcript_id}").status_code == 404
    assert student_client.get("/v1/transcripts/").json()["data"] == []


def test_conversion_preview_needs_no_login(client):
    resp = client.post("/v1/conversion/preview", json={"subjects": subjects(("A", 3), ("B", 4), ("E", 3))})

    assert resp.status_code == 200
    data = resp.json()["data"]
    assert data["credits"] == 10
    assert data["credit_index_4"] == 34.5
    assert data["credit_index_10"] == 79
    assert abs(data["sgpa_4"] - 3.45) < 1e-9
    assert abs(data["sgpa_10"] - 7.9) < 1e-9


def test_conversion_preview_empty(client):
    data = client.post("/v1/conversion/preview", json={"subjects": []}).json()["data"]
    assert data["sgpa_10"] == 0
    assert data["sgpa_4"] == 0


def test_grade_scale_meta(client):
    data = client.get("/v1/meta/grade-scale").json()["data"]
    assert data["grades"][0] == {
        "grade": "O", "description": "Outstanding", "marks": ">=90", "points_10": 10.0, "points_4": 4.0,
    }
    assert data["grades"][-1] == {
        "grade": "F", "description": "Fail", "marks": "<40", "points_10": 2.0, "points_4": 0.0,
    }
    assert [g["description"] for g in data["grades"]] == [
        "Outstanding", "Excellent", "Very Good", "Good", "Average", "Below Average", "Fail",
    ]
    assert data["dgpa_weights_4_years"] == [1.0, 1.0, 1.5, 1.5]
    assert data["dgpa_weight_rationale"][0].startswith("Foundation year")
    assert "academic rigour" in data["dgpa_weight_rationale"][3]


def parse_ts(value):
    return datetime.fromisoformat(value.replace("Z", "+00:00"))


def test_timestamps_are_utc(student_client):
    data = save(student_client).json()["data"]

    for field in ("created_at", "updated_at"):
        assert parse_ts(data[field]).utcoffset() == timedelta(0)

    listed = student_client.get("/v1/transcripts/").json()["data"][0]
    assert parse_ts(listed["created_at"]).utcoffset() == timedelta(0)


def test_update_with_only_new_subjects_bumps_updated_at(student_client, db_session):
    transcript_id = save(student_client, rows=(("A", 3),)).json()["data"]["id"]
    db_session.query(SemesterModel).filter(SemesterModel.id == transcript_id).update(
        {"updated_at": datetime(2020, 1, 1, tzinfo=timezone.utc)}, synchronize_session=False,
    )
    db_session.commit()

    # same tags and same cached CGPA: only the subject rows differ
    resp = student_client.put(f"/v1/transcripts/{transcript_id}", json={
        "semester": "1",
        "year": "1",
        "subjects": subjects(("A", 4), ("A", 2)),
    })

    data = resp.json()["data"]
    assert data["grade_10_scale_cgpa"] == 8.0
    assert parse_ts(data["updated_at"]) > datetime(2020, 1, 2, tzinfo=timezone.utc)
    assert parse_ts(data["updated_at"]) >= parse_ts(data["created_at"])
