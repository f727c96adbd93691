from __future__ import annotations

from datetime import date

import pytest

from src.institute_ledger.institute_ledger.container import assemble, build_schedule
from src.institute_ledger.institute_ledger.main import create_app
from src.institute_ledger.institute_ledger.students.model import Student

BATCH = "10:00 - 11:00"


class FakeStudents:
    def __init__(self, rows):
        self.rows = {s.student_id: s for s in rows}

    def get_by_id(self, student_id):
        return self.rows.get(student_id)

    def list_all(self):
        return list(self.rows.values())

    def list_by_batch(self, batch_timing):
        return [s for s in self.rows.values() if s.batch_timing == batch_timing]


class FakePayments:
    def __init__(self):
        self.rows = {}

    def list_for_student(self, student_id):
        return list(self.rows.get(student_id, []))

    def list_for_students(self, student_ids):
        return {sid: self.list_for_student(sid) for sid in student_ids}

    def get_summary(self, student_id):
        return None

    def list_summaries(self):
        return {}

    def create_payment(self, event):
        self.rows.setdefault(event.student_id, []).append(event)
        return sum(len(v) for v in self.rows.values())


class FakeAttendance:
    def __init__(self):
        self.marks = {}

    def mark_many(self, marks):
        for m in marks:
            self.marks[(m.student_id, m.date)] = m
        return len(marks)

    def list_for_student(self, student_id):
        return [m for (sid, _), m in self.marks.items() if sid == student_id]

    def list_for_students(self, student_ids):
        return {sid: self.list_for_student(sid) for sid in student_ids}

    def list_for_date_and_batch(self, mark_date, batch_timing):
        return [m for (_, d), m in self.marks.items() if d == mark_date.isoformat() and m.batch_timing == batch_timing]


@pytest.fixture
def client(monkeypatch):
    monkeypatch.setenv("APP_ENV", "testing")
    # Admitted this month: one month billed, nothing overdue.
    admitted = date.today().replace(day=1)
    students = FakeStudents(
        [
            Student(1, "Kiran", "Shinde", "MS-CIT", admitted, mobile_number="9000000001", batch_timing=BATCH),
            Student(2, "Pooja", "Gaikwad", "DTP - CIT", admitted, batch_timing=BATCH),
        ]
    )
    container = assemble(
        students_repo=students,
        payments_repo=FakePayments(),
        attendance_repo=FakeAttendance(),
        schedule=build_schedule({"MS-CIT": "3000", "DTP - CIT": "2000"}),
    )
    app = create_app(container)
    return app.test_client()


def test_fee_list_and_ledger(client):
    res = client.get("/api/fees?status=PENDING")
    assert res.status_code == 200
    assert [row["student_id"] for row in res.get_json()["fees"]] == [1, 2]

    ledger = client.get("/api/fees/1").get_json()["ledger"]
    assert ledger["total_due"] == "3000"
    assert ledger["status"] == "PENDING"


def test_unknown_student_is_404(client):
    res = client.get("/api/fees/77")
    assert res.status_code == 404
    assert res.get_json()["success"] is False


def test_record_payment_returns_receipt(client):
    res = client.post(
        "/api/fees/1/payments",
        json={"amount": "500", "payment_method": "CASH", "denominations": [{"value": 500, "count": 1}]},
    )

    assert res.status_code == 201
    receipt = res.get_json()["receipt"]
    assert receipt["total"] == "500"
    assert receipt["amount_in_words"] == "Rupees Five Hundred Only"

    ledger = client.get("/api/fees/1").get_json()["ledger"]
    assert ledger["total_paid"] == "500"
    assert ledger["status"] == "PARTIAL"

    history = client.get("/api/fees/1/payments").get_json()["payments"]
    assert [p["amount"] for p in history] == ["500"]


def test_invalid_payment_is_400(client):
    res = client.post("/api/fees/1/payments", json={"amount": "9999", "payment_method": "UPI"})
    assert res.status_code == 400
    assert "balance" in res.get_json()["message"]

    res = client.post("/api/fees/1/payments", data="not json", content_type="text/plain")
    assert res.status_code == 400


def test_payment_defaults_and_stats(client):
    defaults = client.get("/api/fees/2/payment-defaults").get_json()["payment"]
    assert defaults["amount"] == "2000"

    stats = client.get("/api/fees/stats").get_json()["stats"]
    assert stats["pending"] == 2
    assert stats["total_outstanding"] == "5000"


def test_mark_attendance_and_find_defaulters(client):
    for day in ("2025-07-01", "2025-07-02", "2025-07-03"):
        res = client.post(
            "/api/attendance/mark",
            json={"date": day, "batch_timing": BATCH, "statuses": {"2": "ABSENT"}},
        )
        assert res.status_code == 200
        assert res.get_json()["saved"] == 2

    absent = client.get(
        "/api/attendance/history", query_string={"date": "2025-07-02", "batch_timing": BATCH, "status": "ABSENT"}
    ).get_json()
    assert [row["student_id"] for row in absent["attendance"]] == [2]

    report = client.get("/api/attendance/defaulters", query_string={"batch_timing": BATCH}).get_json()
    assert [d["student_id"] for d in report["defaulters"]] == [2]
    assert report["defaulters"][0]["absent_dates"] == ["2025-07-01", "2025-07-02", "2025-07-03"]

    assert client.get("/api/attendance/batches").get_json()["batches"] == [BATCH]


def test_attendance_input_errors(client):
    res = client.post("/api/attendance/mark", json={"date": "2025-07-01", "batch_timing": BATCH, "statuses": {"1": "LATE"}})
    assert res.status_code == 400

    res = client.get("/api/attendance/defaulters", query_string={"batch_timing": BATCH, "threshold": "zero"})
    assert res.status_code == 400

    assert client.get("/api/attendance/student/99").status_code == 404


def test_attendance_without_date_uses_today(client, monkeypatch):
    from src.institute_ledger.institute_ledger.attendance import controller

    monkeypatch.setattr(controller, "today_local", lambda: date(2025, 8, 1))

    res = client.post("/api/attendance/mark", json={"batch_timing": BATCH, "statuses": {"1": "ABSENT"}})
    assert res.status_code == 200

    rows = client.get("/api/attendance/history", query_string={"batch_timing": BATCH}).get_json()["attendance"]
    assert {row["date"] for row in rows} == {"2025-08-01"}
    assert [row["student_id"] for row in rows if row["status"] == "ABSENT"] == [1]
